"""Shared excerpts and helpers for the test suite."""

from cornell.config import Settings
from cornell.models import Note, QAItem


AGILE_EXCERPT = """\
The Agile Extension describes how business analysis supports organizations that embrace agile ways of working.
It introduces the three horizons as a planning framework that connects strategy to daily delivery work.
The strategy horizon focuses on the long term goals of the organization and the markets it serves.
The initiative horizon covers the programs and products that move the organization toward those goals.
The delivery horizon deals with the work that teams complete in short iterations every few weeks.
Business analysts use the three horizons to decide how much detail is needed at each level of planning.
This approach enables teams to defer detailed analysis until the information is actually required.
An agile mindset emphasizes collaboration, transparency, and learning through frequent feedback from real customers.
Teams should validate assumptions early because untested ideas often waste effort and erode business value.
The purpose of analysis in this context is to help stakeholders make better decisions with limited time.
Every decision should be traced back to the business value it is expected to create for customers.
Practitioners recommend that analysts keep models lightweight so that they can change them as learning grows.
The framework provides guidance for planning across the three horizons without prescribing a single method.
Good analysis results in shared understanding between the people who fund work and the people who build it.
A backlog that is ordered by business value gives teams a clear signal about what to build next.
Outcomes matter more than outputs, so teams measure success by the benefits that customers actually receive.
Analysts must also watch for risks that could prevent the organization from reaching its strategic goals.
Short feedback cycles make it easier to notice these risks while there is still time to respond.
Leaders who support experimentation create an environment where teams can learn quickly and safely.
Over time the organization builds the capability to adapt its plans whenever the market shifts.
In summary, the Agile Extension treats analysis as a continuous activity that delivers business value at every horizon.
"""

SHORT_EXCERPT = (
    "Agile teams plan in short cycles and review their work often. "
    "Business analysts help them understand what customers need and why it matters. "
    "Feedback from each iteration shapes the next plan, so learning never stops. "
    "This keeps the work focused on outcomes instead of output."
)

NOISY_EXCERPT = """\
section_key: 4.2
title: Planning Horizons
source: agile-extension.pdf
Complimentary Member Copy. Not for Distribution or Resale.
### 4
Figure 7: Three horizons of planning.
The three horizons help teams plan at the right level of detail.
The three horizons help teams plan at the right level of detail.
Evidence: "Not provided"
Teams adopt am indset of learning inagile organizations. See 12
The t eam revisits plans whenever new information arrives.
"""


def make_settings(**overrides) -> Settings:
    """Settings with defaults from the environment, selectively overridden"""
    settings = Settings()
    settings.simulated_delay = 0.0
    settings.min_words_standard = 100
    settings.min_words_strict = 300
    settings.min_candidate_count = 5
    settings.note_title = "Study Notes"
    settings.note_module = "Agile Extension v2"
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


NOTE_SUMMARY = (
    "The excerpt explains planning. Teams work in horizons. "
    "A learning mindset matters. Value guides every decision."
)


def make_note(**overrides) -> Note:
    """A structurally valid note, selectively overridden"""
    fields = dict(
        title="Study Notes",
        date="2024-01-01",
        module="Agile Extension v2",
        keywords=["business value", "three horizons", "agile mindset", "stakeholder", "backlog"],
        questions=[QAItem(question=f"Question {i}?", answer=f"Answer number {i}.") for i in range(1, 6)],
        takeaways=[f"Takeaway {i} matters." for i in range(1, 6)],
        summary=NOTE_SUMMARY,
    )
    fields.update(overrides)
    return Note(**fields)
