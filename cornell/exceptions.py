"""
Exceptions raised by the note generation pipeline
"""
from typing import List


class NoteGenerationError(Exception):
    """Base exception for note generation failures"""
    pass


class InputTooShortError(NoteGenerationError):
    """Excerpt word count is below the configured minimum"""
    
    def __init__(self, word_count: int, minimum: int):
        self.word_count = word_count
        self.minimum = minimum
        if word_count == 0:
            message = "No excerpt provided"
        else:
            message = f"Excerpt too short for Cornell note: {word_count} words (minimum {minimum})"
        super().__init__(message)


class PipelineError(NoteGenerationError):
    """Unexpected failure inside sanitize/segment/score/assemble"""
    pass


class ExportBlockedError(NoteGenerationError):
    """Export refused because the note failed validation"""
    
    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(f"Export blocked, note failed validation: {'; '.join(self.errors)}")
