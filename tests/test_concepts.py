import unittest

from cornell.services.concepts import FALLBACK_KEYWORDS, ConceptExtractor, extract_concepts, extract_keywords
from cornell.services.sanitizer import sanitize
from tests.fixtures import AGILE_EXCERPT


class KeywordExtractionTests(unittest.TestCase):
    def test_curated_terms_found_in_excerpt(self) -> None:
        keywords = extract_keywords(sanitize(AGILE_EXCERPT))
        self.assertIn("business value", keywords)
        self.assertIn("three horizons", keywords)
        self.assertEqual(keywords[0], "business value")
        self.assertTrue(5 <= len(keywords) <= 7)
        self.assertEqual(len({k.lower() for k in keywords}), len(keywords))

    def test_frequent_ngrams_fill_when_vocabulary_is_sparse(self) -> None:
        text = (
            "Cloud platforms scale quickly. Cloud platforms reduce cost. "
            "Engineers monitor cloud platforms daily. Automated pipelines deploy code. "
            "Automated pipelines catch regressions."
        )
        keywords = extract_keywords(text)
        self.assertEqual(keywords[:2], ["cloud platforms", "automated pipelines"])
        self.assertTrue(5 <= len(keywords) <= 7)
        self.assertFalse(any(k.startswith("cloud platforms ") for k in keywords))

    def test_fallback_keywords_keep_minimum(self) -> None:
        keywords = extract_keywords("Tiny note.")
        self.assertEqual(len(keywords), 5)
        self.assertEqual(keywords[0], "tiny note")
        self.assertIn(FALLBACK_KEYWORDS[0], keywords)

    def test_ngrams_skip_digits_and_stopwords(self) -> None:
        text = "Release 2024 plans slipped. Release 2024 plans slipped again. The team and the board met."
        keywords = extract_keywords(text)
        self.assertFalse(any(any(ch.isdigit() for ch in k) for k in keywords))
        self.assertFalse(any(" the " in f" {k} " or " and " in f" {k} " for k in keywords))

    def test_custom_vocabulary(self) -> None:
        extractor = ConceptExtractor(vocabulary=("roadmap", "okr"))
        self.assertEqual(extractor.match_vocabulary("OKRs drive the roadmap. Each OKR is reviewed."), ["okr", "roadmap"])


class ConceptExtractionTests(unittest.TestCase):
    def test_capitalized_phrases_and_repeated_bigrams(self) -> None:
        text = "The Agile Extension guides teams. Value streams connect work. Value streams matter."
        concepts = extract_concepts(text)
        self.assertIn("agile extension", concepts)
        self.assertIn("value streams", concepts)
        self.assertNotIn("guides teams", concepts)

    def test_single_capitalized_word_is_not_a_phrase(self) -> None:
        self.assertEqual(extract_concepts("Planning matters."), set())


if __name__ == "__main__":
    unittest.main()
