import unittest
from unittest import mock

from cornell.exceptions import InputTooShortError, PipelineError
from cornell.models import GenerationRequest
from cornell.services.markdown_export import render_markdown
from cornell.services.note_generator import NoteGeneratorService
from tests.fixtures import AGILE_EXCERPT, SHORT_EXCERPT, make_settings


class NoteGeneratorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.generator = NoteGeneratorService(settings=make_settings())

    def test_end_to_end_note(self) -> None:
        result = self.generator.generate(GenerationRequest(excerpt=AGILE_EXCERPT))
        note = result.note

        keywords = [k.lower() for k in note.keywords]
        self.assertTrue(any("business value" in k for k in keywords))
        self.assertTrue(any("three horizons" in k for k in keywords))
        self.assertTrue(5 <= len(note.keywords) <= 7)
        self.assertEqual(len(note.questions), 5)
        self.assertEqual(len({q.question for q in note.questions}), 5)
        for item in note.questions:
            self.assertIn(item.answer[-1], ".!?")
            self.assertNotIn("...", item.answer)
        self.assertTrue(5 <= len(note.takeaways) <= 7)
        self.assertTrue(note.is_valid, note.validation_errors)
        self.assertEqual(result.warnings, [])
        self.assertEqual(note.title, "Study Notes")
        self.assertEqual(note.module, "Agile Extension v2")

        markdown = render_markdown(note)
        self.assertIn("<!-- keywords:start -->", markdown)
        self.assertIn("<!-- summary:end -->", markdown)

    def test_takeaways_do_not_repeat_answer_sentences(self) -> None:
        result = self.generator.generate(GenerationRequest(excerpt=AGILE_EXCERPT))
        answers = " ".join(item.answer for item in result.note.questions)
        for takeaway in result.note.takeaways:
            self.assertNotIn(takeaway, answers)

    def test_short_excerpt_rejected(self) -> None:
        with self.assertRaises(InputTooShortError) as ctx:
            self.generator.generate(GenerationRequest(excerpt=SHORT_EXCERPT))
        self.assertEqual(ctx.exception.word_count, 45)
        self.assertEqual(ctx.exception.minimum, 100)

    def test_empty_excerpt_rejected(self) -> None:
        with self.assertRaises(InputTooShortError) as ctx:
            self.generator.generate(GenerationRequest(excerpt="   "))
        self.assertEqual(str(ctx.exception), "No excerpt provided")

    def test_strict_mode_uses_higher_threshold(self) -> None:
        generator = NoteGeneratorService(settings=make_settings(min_words_strict=400))
        with self.assertRaises(InputTooShortError):
            generator.generate(GenerationRequest(excerpt=AGILE_EXCERPT, strict_mode=True))
        generator.generate(GenerationRequest(excerpt=AGILE_EXCERPT, strict_mode=False))

    def test_strict_mode_two_phase_takeaways(self) -> None:
        result = self.generator.generate(GenerationRequest(excerpt=AGILE_EXCERPT, strict_mode=True))
        note = result.note
        self.assertEqual(note.takeaways, [])
        self.assertFalse(note.is_valid)
        self.assertIn("Select 5-7 takeaways (selected 0)", note.validation_errors)
        self.assertTrue(all(item.evidence for item in note.questions))

        suggestions = self.generator.propose_takeaways(result.candidates)
        self.assertGreaterEqual(len(suggestions), 5)
        scores = [c.score for c in suggestions]
        self.assertEqual(scores, sorted(scores, reverse=True))

        selected = [c.text for c in suggestions[:5]]
        finalized = self.generator.finalize_takeaways(note, selected)
        self.assertEqual(finalized.takeaways, selected)
        self.assertTrue(finalized.is_valid, finalized.validation_errors)
        self.assertEqual(self.generator.finalize_takeaways(finalized, selected), finalized)

    def test_low_candidate_count_warns(self) -> None:
        generator = NoteGeneratorService(settings=make_settings(min_candidate_count=50))
        result = generator.generate(GenerationRequest(excerpt=AGILE_EXCERPT))
        self.assertEqual(len(result.warnings), 1)
        self.assertTrue(result.warnings[0].startswith("Low confidence"))
        self.assertTrue(result.low_confidence)

    def test_domain_vocabulary_reaches_scorer(self) -> None:
        result = self.generator.generate(
            GenerationRequest(excerpt=AGILE_EXCERPT, domain_vocabulary="experimentation, Market")
        )
        tags = set().union(*(c.tags for c in result.candidates))
        self.assertIn("domain:experimentation", tags)
        self.assertIn("domain:market", tags)

    def test_unexpected_fault_becomes_pipeline_error(self) -> None:
        scorer = mock.Mock()
        scorer.score_sentences.side_effect = RuntimeError("boom")
        generator = NoteGeneratorService(scorer=scorer, settings=make_settings())
        with self.assertRaises(PipelineError) as ctx:
            generator.generate(GenerationRequest(excerpt=AGILE_EXCERPT))
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)

    def test_simulated_delay(self) -> None:
        generator = NoteGeneratorService(settings=make_settings(simulated_delay=0.25))
        with mock.patch("cornell.services.note_generator.time.sleep") as sleep:
            generator.generate(GenerationRequest(excerpt=AGILE_EXCERPT))
        sleep.assert_called_once_with(0.25)

    def test_request_overrides_title_and_module(self) -> None:
        result = self.generator.generate(
            GenerationRequest(excerpt=AGILE_EXCERPT, title="Horizons", module="Chapter 4")
        )
        self.assertEqual((result.note.title, result.note.module), ("Horizons", "Chapter 4"))


class GenerationRequestTests(unittest.TestCase):
    def test_domain_terms_parsed(self) -> None:
        request = GenerationRequest(excerpt="x", domain_vocabulary="roadmap, Experimentation, , ROADMAP,  value   stream ")
        self.assertEqual(request.domain_terms(), ["roadmap", "experimentation", "value stream"])


if __name__ == "__main__":
    unittest.main()
