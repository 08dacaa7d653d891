import unittest

from cornell.services.scorer import CandidateScorer, is_question, to_declarative


class ScorerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.scorer = CandidateScorer()

    def test_starter_verb_and_length_band(self) -> None:
        sentence = "This approach enables teams to deliver value quickly."
        self.assertEqual(self.scorer.score(sentence), 3 + 2 + 1)
        self.assertEqual(self.scorer.score(sentence, keywords=["deliver value"]), 7)

    def test_each_term_source_adds_one(self) -> None:
        sentence = "Our roadmap links strategy to daily delivery work for every team."
        base = self.scorer.score(sentence)
        self.assertEqual(
            self.scorer.score(
                sentence,
                keywords=["roadmap"],
                concept_terms=["daily delivery"],
                domain_terms=["strategy", "budget"],
            ),
            base + 3,
        )

    def test_verbs_match_as_substrings(self) -> None:
        candidate = self.scorer.evaluate("Careful analysis guides this planning work.")
        self.assertEqual(candidate.tags, frozenset({"exposition-verb"}))
        self.assertEqual(candidate.score, 2)
        self.assertEqual(self.scorer.score("Teams plan work carefully each week."), 0)

    def test_multi_word_verb(self) -> None:
        candidate = self.scorer.evaluate("Frequent feedback results in better products.")
        self.assertIn("exposition-verb", candidate.tags)
        self.assertNotIn("starter", candidate.tags)

    def test_tags_record_matched_signals(self) -> None:
        candidate = self.scorer.evaluate(
            "The framework provides guidance for planning across the three horizons.",
            keywords=["three horizons"],
            domain_terms=["guidance"],
        )
        self.assertEqual(
            candidate.tags,
            frozenset({"starter", "exposition-verb", "keyword:three horizons", "domain:guidance", "length-band"}),
        )
        self.assertEqual(candidate.score, 8)

    def test_question_detection(self) -> None:
        self.assertTrue(is_question("What is agile?"))
        self.assertTrue(is_question("How teams plan matters"))
        self.assertTrue(is_question("Is it ready"))
        self.assertFalse(is_question("Teams plan often."))
        self.assertFalse(is_question("This is useful."))

    def test_questions_are_never_rewritten(self) -> None:
        self.assertIsNone(to_declarative("Why do teams plan ahead of time?"))

    def test_score_sentences_excludes_ineligible(self) -> None:
        sentences = [
            "Why do teams plan ahead of time?",
            "Too short.",
            "The roadmap is shared with every stakeholder group.",
            "Teams review the roadmap together each quarter.",
            "x" * 201,
        ]
        candidates = self.scorer.score_sentences(
            sentences,
            keywords=["roadmap"],
            used={"Teams review the roadmap together each quarter."},
        )
        self.assertEqual([c.text for c in candidates], [sentences[2]])
        self.assertEqual(candidates[0].index, 2)
        self.assertEqual(candidates[0].score, 3 + 2 + 1 + 1)


if __name__ == "__main__":
    unittest.main()
