"""
Data models for the study note pipeline
Using Pydantic for data validation
"""
import datetime
from typing import FrozenSet, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Candidate(BaseModel):
    """A sentence considered for a takeaway, carrying its relevance score"""
    model_config = ConfigDict(frozen=True)
    
    text: str
    score: int = Field(ge=0, description="Additive relevance score")
    tags: FrozenSet[str] = Field(default_factory=frozenset, description="Matched signal identifiers")
    index: int = Field(default=0, ge=0, description="Discovery order within the excerpt")


class QAItem(BaseModel):
    """One Cornell cue question with its answer"""
    question: str
    answer: str
    evidence: Optional[str] = None  # Short literal quote, strict mode only
    needs_review: bool = False


class Note(BaseModel):
    """
    Cornell study note, the aggregate built once per generation request
    
    Count bounds are checked by the validator rather than enforced here,
    so a note can hold (and report) an invalid state.
    """
    title: str
    date: str = Field(default_factory=lambda: datetime.date.today().isoformat())
    module: str
    keywords: List[str] = Field(default_factory=list)
    questions: List[QAItem] = Field(default_factory=list)
    takeaways: List[str] = Field(default_factory=list)
    summary: str = ""
    strict_mode: bool = False
    takeaway_candidates: List[Candidate] = Field(
        default_factory=list,
        description="Scored, deduplicated candidates offered for selection in strict mode",
    )
    is_valid: bool = False
    validation_errors: List[str] = Field(default_factory=list)
    
    @property
    def takeaways_deferred(self) -> bool:
        """Takeaways wait for an external selection in strict mode"""
        return self.strict_mode


class ValidationResult(BaseModel):
    """Outcome of checking a note against its structural invariants"""
    is_valid: bool
    errors: List[str] = Field(default_factory=list)


class GenerationRequest(BaseModel):
    """Input of one note generation call"""
    excerpt: str
    strict_mode: bool = False
    domain_vocabulary: str = Field(default="", description="Comma-separated domain terms")
    title: Optional[str] = None
    module: Optional[str] = None
    
    def domain_terms(self) -> List[str]:
        """Parse the comma-separated vocabulary into unique lowercase terms"""
        terms: List[str] = []
        for raw in self.domain_vocabulary.split(","):
            term = " ".join(raw.split()).lower()
            if term and term not in terms:
                terms.append(term)
        return terms


class GenerationResult(BaseModel):
    """Output of one note generation call"""
    note: Note
    sanitized_text: str
    candidates: List[Candidate] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    
    @property
    def low_confidence(self) -> bool:
        return bool(self.warnings)
