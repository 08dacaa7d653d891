import unittest

from cornell.services.segmenter import segment


class SegmenterTests(unittest.TestCase):
    def test_filters_short_pieces(self) -> None:
        text = "First sentence here. Second one! Third? tiny."
        self.assertEqual(list(segment(text, 10)), ["First sentence here.", "Second one!"])

    def test_punctuation_runs_reduced(self) -> None:
        self.assertEqual(list(segment("Really?! Yes.")), ["Really?", "Yes."])

    def test_decimal_points_do_not_split(self) -> None:
        text = "Revenue grew 3.5 percent this year. Teams noticed."
        self.assertEqual(list(segment(text)), ["Revenue grew 3.5 percent this year.", "Teams noticed."])

    def test_sequence_is_single_pass(self) -> None:
        sentences = segment("One sentence here. Another sentence there.")
        self.assertEqual(len(list(sentences)), 2)
        self.assertEqual(list(sentences), [])

    def test_empty_text(self) -> None:
        self.assertEqual(list(segment("", 0)), [])


if __name__ == "__main__":
    unittest.main()
