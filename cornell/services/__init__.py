"""
Services module - Text-to-note extraction pipeline
"""
from .sanitizer import Sanitizer, sanitize
from .segmenter import segment
from .concepts import ConceptExtractor, extract_concepts, extract_keywords
from .scorer import CandidateScorer, is_question
from .deduplicator import dedupe
from .assembler import NoteAssembler
from .validator import NoteValidator, validate
from .markdown_export import export_markdown, parse_sections, render_markdown
from .note_generator import NoteGeneratorService

__all__ = [
    "Sanitizer",
    "sanitize",
    "segment",
    "ConceptExtractor",
    "extract_concepts",
    "extract_keywords",
    "CandidateScorer",
    "is_question",
    "dedupe",
    "NoteAssembler",
    "NoteValidator",
    "validate",
    "export_markdown",
    "parse_sections",
    "render_markdown",
    "NoteGeneratorService",
]
