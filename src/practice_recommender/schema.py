"""Pydantic models for the Practice Recommendation Engine.

Catalog schemas describe meditation practices and their classification tags.
Profile schemas carry the answers collected by the assessment. Output schemas
describe per-practice scores and the final recommendation report.

JSON uses the camelCase field names of the assessment and catalog files
(``structurePreference``, ``teacherRequired``); Python code uses snake_case.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FrozenModel(BaseModel):
    """Base for all engine models: immutable, camelCase aliases."""
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


# =============================================================================
# Catalog Enums
# =============================================================================


class Approach(str, Enum):
    """Technique category of a practice."""
    CONCENTRATION = "concentration"
    AWARENESS = "awareness"
    HEART = "heart"
    BODY = "body"
    INQUIRY = "inquiry"
    MANTRA = "mantra"
    NON_DUAL = "non-dual"


class Structure(str, Enum):
    """How much structure a practice imposes."""
    HIGHLY_STRUCTURED = "highly-structured"
    MODERATELY_STRUCTURED = "moderately-structured"
    MINIMALLY_STRUCTURED = "minimally-structured"


class DifficultyLevel(str, Enum):
    """Entry difficulty of a practice."""
    BEGINNER_FRIENDLY = "beginner-friendly"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class TimeToResults(str, Enum):
    """How long before a practice typically shows results."""
    QUICK = "quick"
    MODERATE = "moderate"
    LONG_TERM = "long-term"


class CulturalContext(str, Enum):
    """Cultural or religious framing of a practice."""
    SECULAR = "secular"
    BUDDHIST = "buddhist"
    HINDU = "hindu"
    MIXED = "mixed"


# =============================================================================
# Profile Enums (assessment answer vocabularies)
# =============================================================================


class Goal(str, Enum):
    """Primary goal options of the assessment."""
    STRESS_REDUCTION = "stress-reduction"
    AWAKENING = "awakening"
    FOCUS = "focus"
    INSIGHT = "insight"
    COMPASSION = "compassion"
    PAIN = "pain"
    CONSCIOUSNESS = "consciousness"
    PEACE = "peace"
    HEALING = "healing"


class Temperament(str, Enum):
    """Self-described temperament."""
    ANALYTICAL = "analytical"
    DEVOTIONAL = "devotional"
    EXPERIENTIAL = "experiential"
    ACTIVE = "active"
    CONTEMPLATIVE = "contemplative"


class TimeAvailable(str, Enum):
    """Daily practice time bucket, in minutes."""
    FIVE_TO_TEN = "5-10"
    FIFTEEN_TO_TWENTY = "15-20"
    THIRTY_TO_FORTY_FIVE = "30-45"
    SIXTY_PLUS = "60+"
    VARIABLE = "variable"


class RetreatWillingness(str, Enum):
    """Willingness to attend residential retreats."""
    YES_INTERESTED = "yes-interested"
    MAYBE = "maybe"
    PROBABLY_NOT = "probably-not"
    NO = "no"


class LocationAccess(str, Enum):
    """Access to teachers and practice centers."""
    GOOD = "good"
    LIMITED = "limited"
    TRAVEL = "travel"
    SELF_GUIDED = "self-guided"


class CulturalBackground(str, Enum):
    """Cultural or spiritual background of the user."""
    SECULAR = "secular"
    BUDDHIST = "buddhist"
    HINDU = "hindu"
    SPIRITUAL = "spiritual"
    ABRAHAMIC = "abrahamic"
    AGNOSTIC = "agnostic"


# =============================================================================
# Catalog Models
# =============================================================================


class PracticeTags(FrozenModel):
    """Classification tags used by the scorers."""
    approach: list[Approach] = Field(..., min_length=1)
    structure: Structure
    difficulty_level: DifficultyLevel
    time_to_results: TimeToResults
    cultural_context: CulturalContext
    teacher_required: bool
    retreat_friendly: bool


class PracticeBenefits(FrozenModel):
    """Researched benefit phrases, grouped by kind."""
    cognitive: list[str] = Field(default_factory=list)
    emotional: list[str] = Field(default_factory=list)
    physical: list[str] = Field(default_factory=list)


class BookResource(FrozenModel):
    """A recommended book."""
    title: str
    author: str


class PracticeResources(FrozenModel):
    """Learning resources, in order of recommendation."""
    books: list[BookResource] = Field(default_factory=list)
    apps: list[str] = Field(default_factory=list)


class Practice(FrozenModel):
    """A meditation practice in the catalog."""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    tradition: Optional[str] = None
    description: Optional[str] = None
    benefits: PracticeBenefits = Field(default_factory=PracticeBenefits)
    goals: list[str] = Field(default_factory=list)
    resources: PracticeResources = Field(default_factory=PracticeResources)
    tags: PracticeTags

    def search_text(self) -> str:
        """Lower-cased benefit phrases and goals, the goal-matching surface."""
        phrases = [
            *self.benefits.cognitive,
            *self.benefits.emotional,
            *self.benefits.physical,
            *self.goals,
        ]
        return " ".join(phrases).lower()


# =============================================================================
# Profile Models
# =============================================================================


class GoalsSection(FrozenModel):
    """What the user wants from practice."""
    primary: list[Goal] = Field(default_factory=list, max_length=3)
    motivations: list[str] = Field(default_factory=list)


class PersonalitySection(FrozenModel):
    """Learning style and temperament answers."""
    structure_preference: Optional[int] = Field(
        None, ge=1, le=10,
        description="1 = wants maximum structure, 10 = wants minimal structure"
    )
    temperament: Optional[Temperament] = None
    learning_style: Optional[str] = None


class PracticalSection(FrozenModel):
    """Life-circumstance answers."""
    time_available: Optional[TimeAvailable] = None
    retreat_willingness: Optional[RetreatWillingness] = None
    location_access: Optional[LocationAccess] = None


class BackgroundSection(FrozenModel):
    """Cultural and spiritual background answers."""
    cultural: Optional[CulturalBackground] = None
    spiritual_openness: Optional[int] = Field(None, ge=1, le=10)
    previous_experience: list[str] = Field(default_factory=list)


class PrioritiesSection(FrozenModel):
    """Value ratings; carried for collaborators, not scored."""
    evidence_based: Optional[int] = Field(None, ge=1, le=10)
    traditional_authenticity: Optional[int] = Field(None, ge=1, le=10)
    quick_results: Optional[int] = Field(None, ge=1, le=10)
    spiritual_depth: Optional[int] = Field(None, ge=1, le=10)


class UserProfile(FrozenModel):
    """Assessment answers. Every field is optional; absence means no signal."""
    goals: GoalsSection = Field(default_factory=GoalsSection)
    personality: PersonalitySection = Field(default_factory=PersonalitySection)
    practical: PracticalSection = Field(default_factory=PracticalSection)
    background: BackgroundSection = Field(default_factory=BackgroundSection)
    priorities: PrioritiesSection = Field(default_factory=PrioritiesSection)

    @property
    def first_goal(self) -> Optional[Goal]:
        return self.goals.primary[0] if self.goals.primary else None


# =============================================================================
# Scoring and Output Models
# =============================================================================


class ScoreBreakdown(FrozenModel):
    """Per-dimension scores, each in [0, 1]."""
    goal_alignment: float = Field(..., ge=0, le=1)
    personality_fit: float = Field(..., ge=0, le=1)
    practical_fit: float = Field(..., ge=0, le=1)
    cultural_alignment: float = Field(..., ge=0, le=1)

    def items(self) -> list[tuple[str, float]]:
        """(dimension, score) pairs in declaration order."""
        return [(name, getattr(self, name)) for name in type(self).model_fields]

    def strongest(self) -> tuple[str, float]:
        """Highest-scoring dimension; the earliest wins a tie."""
        best = None
        for name, value in self.items():
            if best is None or value > best[1]:
                best = (name, value)
        return best

    def weakest(self) -> tuple[str, float]:
        """Lowest-scoring dimension; the earliest wins a tie."""
        worst = None
        for name, value in self.items():
            if worst is None or value < worst[1]:
                worst = (name, value)
        return worst


class PracticeScore(FrozenModel):
    """How well one practice fits one profile."""
    practice_id: str
    overall_score: float = Field(..., ge=0, le=1)
    breakdown: ScoreBreakdown
    concerns: tuple[str, ...] = ()
    adaptations: tuple[str, ...] = ()
    reasoning: str = ""


class TopRecommendation(FrozenModel):
    """The best-fitting practice with concrete first steps."""
    practice: Practice
    score: PracticeScore
    why: str
    next_steps: tuple[str, ...] = ()


class AlternativeRecommendation(FrozenModel):
    """A runner-up practice that still fits well."""
    practice: Practice
    score: PracticeScore
    why: str


class NotRecommendedPractice(FrozenModel):
    """A poorly-fitting practice and its weakest dimension."""
    practice: Practice
    score: PracticeScore
    why: str


class HybridApproach(FrozenModel):
    """Suggestion to combine near-tied, complementary practices."""
    description: str
    practices: tuple[str, ...]
    schedule: str


class RecommendationReport(FrozenModel):
    """Complete output of the recommendation engine."""
    top_recommendation: TopRecommendation
    alternatives: tuple[AlternativeRecommendation, ...] = ()
    not_recommended: tuple[NotRecommendedPractice, ...] = ()
    hybrid_approach: Optional[HybridApproach] = None
