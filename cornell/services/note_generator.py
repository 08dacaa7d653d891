"""
Note generation service - Pipeline orchestration
Coordinates sanitizing, extraction, scoring, assembly and validation
"""
import time
from typing import Iterable, List, Optional
from loguru import logger

from cornell.config import Settings
from cornell.exceptions import InputTooShortError, NoteGenerationError, PipelineError
from cornell.models import Candidate, GenerationRequest, GenerationResult, Note
from cornell.services.assembler import NoteAssembler
from cornell.services.concepts import ConceptExtractor
from cornell.services.deduplicator import dedupe
from cornell.services.sanitizer import Sanitizer
from cornell.services.scorer import CandidateScorer
from cornell.services.segmenter import TAKEAWAY_MIN_LENGTH, segment
from cornell.services.text_utils import word_count
from cornell.services.validator import NoteValidator


class NoteGeneratorService:
    """Service for turning one excerpt into one validated Cornell note"""

    def __init__(
        self,
        sanitizer: Optional[Sanitizer] = None,
        extractor: Optional[ConceptExtractor] = None,
        scorer: Optional[CandidateScorer] = None,
        assembler: Optional[NoteAssembler] = None,
        validator: Optional[NoteValidator] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize note generator service

        Args:
            sanitizer: Sanitizer instance (if None, will create new)
            extractor: Concept extractor instance (if None, will create new)
            scorer: Candidate scorer instance (if None, will create new)
            assembler: Note assembler instance (if None, will create new)
            validator: Note validator instance (if None, will create new)
            settings: Application settings (if None, will load from environment)
        """
        if settings is None:
            from cornell.config import get_settings
            settings = get_settings()

        self.settings = settings
        self.sanitizer = sanitizer or Sanitizer()
        self.extractor = extractor or ConceptExtractor()
        self.scorer = scorer or CandidateScorer()
        self.assembler = assembler or NoteAssembler()
        self.validator = validator or NoteValidator()

    def check_length(self, request: GenerationRequest) -> int:
        """
        Check the excerpt against the word-count threshold for its mode

        Returns:
            Word count of the excerpt

        Raises:
            InputTooShortError: If the excerpt is below the threshold
        """
        count = word_count(request.excerpt)
        minimum = self.settings.min_words_for(request.strict_mode)
        if count < minimum:
            raise InputTooShortError(count, minimum)
        return count

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Generate a Cornell note

        This method runs the complete pipeline as one unit of work:
        1. Sanitize the excerpt
        2. Extract keywords and concept terms
        3. Build the question/answer pairs
        4. Score and deduplicate takeaway candidates
        5. Assemble and validate the note

        Args:
            request: Generation request

        Returns:
            GenerationResult with the validated note and any warnings

        Raises:
            InputTooShortError: If the excerpt is below the word threshold
            PipelineError: If any pipeline step fails unexpectedly
        """
        count = self.check_length(request)
        logger.info(f"Generating note from {count}-word excerpt (strict={request.strict_mode})")

        if self.settings.simulated_delay > 0:
            time.sleep(self.settings.simulated_delay)

        try:
            warnings: List[str] = []

            # Step 1: Sanitize
            logger.info("Step 1: Sanitizing excerpt...")
            sanitized = self.sanitizer.sanitize(request.excerpt)
            logger.info(f"Sanitized text length: {len(sanitized)} characters")

            # Step 2: Keywords and concepts
            logger.info("Step 2: Extracting keywords and concepts...")
            keywords = self.extractor.extract_keywords(sanitized)
            concepts = self.extractor.extract_concepts(sanitized)
            logger.info(f"Keywords: {keywords}")

            # Step 3: Questions
            logger.info("Step 3: Building questions...")
            questions, used = self.assembler.build_questions(sanitized, request.strict_mode)

            # Step 4: Candidates
            logger.info("Step 4: Scoring takeaway candidates...")
            scored = self.scorer.score_sentences(
                segment(sanitized, TAKEAWAY_MIN_LENGTH),
                keywords=keywords,
                concept_terms=concepts,
                domain_terms=request.domain_terms(),
                used=used,
            )
            candidates = dedupe(scored)
            logger.info(f"{len(candidates)} candidates after deduplication")
            if len(candidates) < self.settings.min_candidate_count:
                message = (
                    f"Low confidence: only {len(candidates)} takeaway candidates "
                    f"(expected at least {self.settings.min_candidate_count})"
                )
                logger.warning(message)
                warnings.append(message)

            # Step 5: Assemble and validate
            logger.info("Step 5: Assembling note...")
            note = self.assembler.assemble(
                sanitized,
                keywords,
                candidates,
                strict_mode=request.strict_mode,
                title=request.title or self.settings.note_title,
                module=request.module or self.settings.note_module,
                questions=questions,
            )
            if request.strict_mode and any(item.needs_review for item in note.questions):
                message = "Some Q&A items lack evidence quotes and need review"
                logger.warning(message)
                warnings.append(message)

            note = self.validator.annotate(note)
            logger.info(f"Note generated, valid={note.is_valid}")

            return GenerationResult(
                note=note,
                sanitized_text=sanitized,
                candidates=candidates,
                warnings=warnings,
            )

        except NoteGenerationError:
            raise
        except Exception as e:
            logger.exception(f"Error in note generation pipeline: {e}")
            raise PipelineError(f"Note generation failed: {e}") from e

    def propose_takeaways(self, candidates: Iterable[Candidate]) -> List[Candidate]:
        """
        Offer scored candidates for user selection (deferred takeaway mode)

        Args:
            candidates: Scored, deduplicated candidates

        Returns:
            Candidates ordered best first
        """
        suggestions = self.assembler.propose_takeaways(candidates)
        if len(suggestions) < self.settings.min_candidate_count:
            logger.warning(
                f"Only {len(suggestions)} takeaway suggestions "
                f"(expected at least {self.settings.min_candidate_count})"
            )
        return suggestions

    def finalize_takeaways(self, note: Note, selected: Iterable[str]) -> Note:
        """
        Replace the note's takeaways with the user's selection and re-validate

        Calling it again with the same selection yields the same note.

        Args:
            note: Note from generate()
            selected: Chosen takeaway sentences

        Returns:
            New note carrying the selection and its validation outcome
        """
        patched = self.assembler.with_takeaways(note, selected)
        logger.info(f"Finalized {len(patched.takeaways)} takeaways")
        return self.validator.annotate(patched)
