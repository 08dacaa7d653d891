"""
Command-line module - argument parsing and request handlers
"""
from .handlers import NoteRequestHandler

__all__ = ["NoteRequestHandler"]
