"""
Request handlers
Top-level boundary between callers and the note generation pipeline
"""
from typing import List, Optional, Sequence, Tuple
from loguru import logger

from cornell.exceptions import InputTooShortError, NoteGenerationError
from cornell.models import GenerationRequest, GenerationResult, Note
from cornell.services.note_generator import NoteGeneratorService


class NoteRequestHandler:
    """Handler for note generation requests"""

    def __init__(self, generator: NoteGeneratorService):
        """
        Initialize request handler

        Args:
            generator: Note generator service for handling business logic
        """
        self.generator = generator

    def handle_generate(self, request: GenerationRequest) -> Tuple[Optional[GenerationResult], Optional[str]]:
        """
        Handle a generation request

        Args:
            request: Generation request

        Returns:
            Tuple of (result, error_message)
            - If successful: (result, None)
            - If error: (None, error_message); no partial note is returned
        """
        try:
            logger.info(f"Handling generation request (strict={request.strict_mode})")
            result = self.generator.generate(request)
            for warning in result.warnings:
                logger.warning(f"Generation warning: {warning}")
            return result, None

        except InputTooShortError as e:
            logger.warning(f"Rejected excerpt: {e}")
            return None, str(e)
        except NoteGenerationError as e:
            logger.error(f"Generation failed: {e}")
            return None, "Generation failed: there was an error generating your Cornell note. Please try again."
        except Exception as e:
            logger.exception(f"Error handling generation request: {e}")
            return None, "Generation failed: there was an error generating your Cornell note. Please try again."

    def handle_selection(
        self,
        result: GenerationResult,
        selection: Sequence[int],
    ) -> Tuple[Optional[Note], Optional[str]]:
        """
        Handle a takeaway selection made by candidate number (1-based)

        Args:
            result: Result of a strict-mode generation
            selection: Numbers of the chosen candidates as listed by propose_takeaways

        Returns:
            Tuple of (finalized_note, error_message)
        """
        suggestions = self.generator.propose_takeaways(result.candidates)
        chosen: List[str] = []
        for number in selection:
            if not 1 <= number <= len(suggestions):
                return None, f"Invalid takeaway number {number}: choose between 1 and {len(suggestions)}"
            chosen.append(suggestions[number - 1].text)

        try:
            note = self.generator.finalize_takeaways(result.note, chosen)
            return note, None
        except Exception as e:
            logger.exception(f"Error finalizing takeaways: {e}")
            return None, f"Could not finalize takeaways: {e}"

    def parse_selection(self, text: str) -> Tuple[Optional[List[int]], Optional[str]]:
        """
        Parse a comma-separated list of candidate numbers

        Args:
            text: Selection text such as "1, 3, 4"

        Returns:
            Tuple of (numbers, error_message)
        """
        numbers: List[int] = []
        for part in text.split(","):
            part = part.strip()
            if not part:
                continue
            if not part.isdigit():
                return None, f"Invalid takeaway number: {part!r}"
            numbers.append(int(part))
        return numbers, None
