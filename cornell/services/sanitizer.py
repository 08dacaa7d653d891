"""
Excerpt sanitizer
Strips PDF/document artifacts and repairs tokenization damage before extraction

The passes run in a fixed order; later passes assume the earlier cleanup:
    1. metadata lines       5. broken-token repairs
    2. boilerplate phrases  6. duplicate sentences
    3. cross-references     7. whitespace
    4. placeholders
"""
import re
from dataclasses import dataclass
from typing import List, Pattern, Tuple
from loguru import logger

from cornell.services.text_utils import split_sentences


@dataclass(frozen=True)
class RewriteRule:
    """A (pattern, replacement) pair applied as one rewrite"""

    name: str
    pattern: Pattern[str]
    replacement: str
    until_stable: bool = False

    def apply(self, text: str) -> str:
        rewritten = self.pattern.sub(self.replacement, text)
        if self.until_stable:
            # Joining one fragment can expose another ("x y zz" -> "x yzz" -> "xyzz")
            while rewritten != text:
                text = rewritten
                rewritten = self.pattern.sub(self.replacement, text)
        return rewritten


def _rule(name: str, pattern: str, replacement: str = "", flags: int = 0, until_stable: bool = False) -> RewriteRule:
    return RewriteRule(name, re.compile(pattern, flags), replacement, until_stable)


METADATA_KEYS = ("section_key", "section", "title", "chapter", "level", "word_count", "word-count", "source")

METADATA_RULES = (
    _rule("metadata-line", r"^[ \t]*(?:%s):.*$" % "|".join(re.escape(k) for k in METADATA_KEYS), flags=re.MULTILINE),
)

BOILERPLATE_RULES = (
    _rule("member-copy", r"Complimentary Member Copy[.\s]*Not for Distribution or Resale[.\s]*", " ", re.IGNORECASE),
    _rule("distribution", r"Not for Distribution or Resale[.\s]*", " ", re.IGNORECASE),
    _rule("rights-reserved", r"All rights reserved[.\s]*", " ", re.IGNORECASE),
)

CROSS_REFERENCE_RULES = (
    _rule("see-number", r"\bsee\s+\d+\s*\.", "", re.IGNORECASE),
    _rule("see-number-eol", r"\bsee\s+\d+[ \t]*$", "", re.IGNORECASE | re.MULTILINE),
    _rule("figure-label", r"\bFigure\s+\d+[:\s]*", "", re.IGNORECASE),
    _rule("leading-number", r"^[ \t]*(?:\d+(?::[ \t]*|[ \t]+|$))+", "", re.MULTILINE),
    _rule("heading-number", r"^[ \t]*#+[ \t]*\d+[.\d]*", "", re.MULTILINE),
)

PLACEHOLDER_RULES = (
    _rule("evidence-line", r"^[ \t]*Evidence:.*$", "", re.MULTILINE),
    _rule("not-provided", r"[\"“]Not provided[\"”]", "", re.IGNORECASE),
    _rule("ellipsis", r"(?:\.{2,}|…)", "."),
)

# Known split/merged tokens seen in extracted text
REPAIR_RULES = (
    _rule("am-indset", r"\bam indset\b", "a mindset", re.IGNORECASE),
    _rule("inagile", r"\binagile\b", "in agile", re.IGNORECASE),
    _rule("a-view", r"\ba\s+view\b", "a view", re.IGNORECASE),
    _rule("a-level", r"\ba\s+level\b", "a level", re.IGNORECASE),
    # A lone consonant split off the front of a word; "a" and "I" are real words
    _rule(
        "split-consonant",
        r"(?<![\w'’])([bcdfghjklmnpqrstvwxyzBCDFGHJKLMNPQRSTVWXYZ])\s+([a-z]{2,})\b",
        r"\1\2",
        until_stable=True,
    ),
)

RULE_PASSES: Tuple[Tuple[str, Tuple[RewriteRule, ...]], ...] = (
    ("metadata", METADATA_RULES),
    ("boilerplate", BOILERPLATE_RULES),
    ("cross-references", CROSS_REFERENCE_RULES),
    ("placeholders", PLACEHOLDER_RULES),
    ("repairs", REPAIR_RULES),
)


class Sanitizer:
    """Rule-table driven excerpt cleaner"""

    def __init__(self, passes: Tuple[Tuple[str, Tuple[RewriteRule, ...]], ...] = RULE_PASSES):
        self.passes = passes

    def sanitize(self, text: str) -> str:
        """
        Clean an excerpt

        Pure and total: absence of a pattern is a no-op and empty input
        yields an empty string.

        Args:
            text: Raw excerpt text

        Returns:
            Sanitized single-line text
        """
        if not text or not text.strip():
            return ""

        # A pass can expose a pattern an earlier pass already ran over
        # ("Figure 2: title: x"), so the passes repeat until the text is stable.
        # Lines stay intact until then; the line-anchored rules depend on them.
        cleaned = text
        rounds = 0
        while True:
            next_round = self._run_passes(cleaned)
            rounds += 1
            if next_round == cleaned:
                break
            cleaned = next_round
        cleaned = normalize_whitespace(dedupe_sentences(cleaned))

        logger.debug(f"Sanitized excerpt in {rounds} rounds: {len(text)} -> {len(cleaned)} characters")
        return cleaned

    def _run_passes(self, text: str) -> str:
        for _, rules in self.passes:
            text = apply_rules(text, rules)
        return text


def apply_rules(text: str, rules: Tuple[RewriteRule, ...]) -> str:
    """Apply each rule of a table in order"""
    for rule in rules:
        text = rule.apply(text)
    return text


def dedupe_sentences(text: str) -> str:
    """Keep the first occurrence of each sentence, compared case-insensitively"""
    seen = set()
    kept: List[str] = []
    for body, terminator in split_sentences(text):
        key = body.lower()
        if key in seen:
            continue
        seen.add(key)
        kept.append(body + (terminator[0] if terminator else "."))
    return " ".join(kept)


def normalize_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


_default_sanitizer = Sanitizer()


def sanitize(text: str) -> str:
    """Sanitize with the default rule tables"""
    return _default_sanitizer.sanitize(text)
