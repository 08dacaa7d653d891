"""
Markdown export of Cornell notes
Sections are wrapped in HTML comment markers so they can be re-parsed
"""
import re
from typing import Dict
from loguru import logger

from cornell.exceptions import ExportBlockedError
from cornell.models import Note


SECTIONS = ("keywords", "qa", "takeaways", "summary")

_SECTION_RE = re.compile(r"<!-- (\w+):start -->\n(.*?)\n<!-- \1:end -->", re.DOTALL)


def _wrap(name: str, body: str) -> str:
    return f"<!-- {name}:start -->\n{body}\n<!-- {name}:end -->"


def render_markdown(note: Note) -> str:
    """
    Render a note as Markdown

    Args:
        note: Note to render

    Returns:
        Markdown document with marked sections
    """
    keywords = "\n".join(f"- {keyword}" for keyword in note.keywords)

    qa_blocks = []
    for number, item in enumerate(note.questions, start=1):
        block = (
            f"- **Q{number}:** {item.question}\n"
            f"  <details><summary>Answer</summary><p>{item.answer}</p></details>"
        )
        if note.strict_mode:
            if item.evidence:
                block += f"\n  Evidence: \"{item.evidence}\""
            if item.needs_review:
                block += "\n  _Needs review: missing evidence_"
        qa_blocks.append(block)

    takeaways = "\n".join(f"- {takeaway}" for takeaway in note.takeaways)

    parts = [
        f"# {note.title}\n**Date:** {note.date}  \n**Module:** {note.module}  ",
        _wrap("keywords", f"## Keywords\n{keywords}"),
        _wrap("qa", "## Questions & Answers\n" + "\n\n".join(qa_blocks)),
        _wrap("takeaways", f"## Takeaways\n{takeaways}"),
        _wrap("summary", f"## Summary\n{note.summary}"),
    ]
    return "\n\n".join(parts)


def export_markdown(note: Note, allow_invalid: bool = False) -> str:
    """
    Render a note for export, refusing notes that failed validation

    Raises:
        ExportBlockedError: If the note is invalid and ``allow_invalid`` is False
    """
    if not note.is_valid and not allow_invalid:
        raise ExportBlockedError(note.validation_errors or ["note has not been validated"])
    if not note.is_valid:
        logger.warning("Exporting a note that failed validation")
    return render_markdown(note)


def parse_sections(markdown: str) -> Dict[str, str]:
    """
    Read the marked sections back from exported Markdown

    Returns:
        Mapping of section name (keywords, qa, takeaways, summary) to its
        body without the "## " heading line
    """
    sections: Dict[str, str] = {}
    for match in _SECTION_RE.finditer(markdown):
        body = match.group(2)
        lines = body.split("\n")
        if lines and lines[0].startswith("## "):
            lines = lines[1:]
        sections[match.group(1)] = "\n".join(lines).strip()
    return sections


def parse_bullets(section: str) -> list:
    """Bullet items of a keywords or takeaways section"""
    return [line[2:].strip() for line in section.split("\n") if line.startswith("- ")]
