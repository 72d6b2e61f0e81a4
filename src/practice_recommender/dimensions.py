"""Dimension scorers.

Each scorer rates one axis of fit between a practice and a user profile on a
0-1 scale. Scorers combine independent sub-signals and average whichever are
present; a dimension with no signal at all returns a neutral 0.5.
"""

from typing import Optional, Sequence

from .config import GoalMatchingConfig
from .schema import (
    Approach,
    CulturalBackground,
    CulturalContext,
    DifficultyLevel,
    Goal,
    LocationAccess,
    Practice,
    RetreatWillingness,
    Structure,
    Temperament,
    TimeAvailable,
    TimeToResults,
    UserProfile,
)

NEUTRAL_SCORE = 0.5

GOAL_KEYWORDS: dict[Goal, tuple[str, ...]] = {
    Goal.STRESS_REDUCTION: ("reduced anxiety", "lower cortisol", "stress reduction", "relaxation", "reduced stress markers"),
    Goal.AWAKENING: ("spiritual awakening", "enlightenment", "self-realization", "recognize", "buddha nature", "rigpa"),
    Goal.FOCUS: ("enhanced focus", "improved concentration", "sustained attention", "working memory", "cognitive control"),
    Goal.INSIGHT: ("insight", "understanding", "impermanence", "nature of mind", "meta-awareness", "awareness"),
    Goal.COMPASSION: ("compassion", "loving-kindness", "empathy", "social connection", "friendliness"),
    Goal.PAIN: ("pain management", "chronic pain", "pain reduction", "body awareness"),
    Goal.CONSCIOUSNESS: ("consciousness", "non-dual", "awareness aware of itself", "true nature", "self"),
    Goal.PEACE: ("peace", "tranquility", "contentment", "equanimity", "calm"),
    Goal.HEALING: ("trauma", "emotional release", "healing", "processing", "ptsd"),
}

# Representative points on the 1-10 structure preference scale
STRUCTURE_POINTS = {
    Structure.HIGHLY_STRUCTURED: 2,
    Structure.MODERATELY_STRUCTURED: 5,
    Structure.MINIMALLY_STRUCTURED: 9,
}
STRUCTURE_SPAN = 8

TEMPERAMENT_APPROACHES: dict[Temperament, frozenset[Approach]] = {
    Temperament.ANALYTICAL: frozenset({Approach.CONCENTRATION, Approach.INQUIRY}),
    Temperament.DEVOTIONAL: frozenset({Approach.MANTRA, Approach.HEART}),
    Temperament.EXPERIENTIAL: frozenset({Approach.NON_DUAL, Approach.AWARENESS}),
    Temperament.ACTIVE: frozenset({Approach.BODY}),
    Temperament.CONTEMPLATIVE: frozenset({Approach.CONCENTRATION, Approach.AWARENESS, Approach.INQUIRY}),
}

TIME_ORDINALS = {
    TimeAvailable.FIVE_TO_TEN: 1,
    TimeAvailable.FIFTEEN_TO_TWENTY: 2,
    TimeAvailable.THIRTY_TO_FORTY_FIVE: 3,
    TimeAvailable.SIXTY_PLUS: 4,
    TimeAvailable.VARIABLE: 2,
}

RESULTS_ORDINALS = {
    TimeToResults.QUICK: 1,
    TimeToResults.MODERATE: 2,
    TimeToResults.LONG_TERM: 4,
}

DIFFICULTY_ORDINALS = {
    DifficultyLevel.BEGINNER_FRIENDLY: 1,
    DifficultyLevel.INTERMEDIATE: 2,
    DifficultyLevel.ADVANCED: 3,
}

RETREAT_SCORES = {
    RetreatWillingness.YES_INTERESTED: 1.0,
    RetreatWillingness.MAYBE: 0.7,
    RetreatWillingness.PROBABLY_NOT: 0.4,
    RetreatWillingness.NO: 0.2,
}

CULTURAL_MATRIX: dict[CulturalBackground, dict[CulturalContext, float]] = {
    CulturalBackground.SECULAR: {
        CulturalContext.SECULAR: 1.0, CulturalContext.MIXED: 0.8,
        CulturalContext.BUDDHIST: 0.5, CulturalContext.HINDU: 0.5,
    },
    CulturalBackground.BUDDHIST: {
        CulturalContext.BUDDHIST: 1.0, CulturalContext.MIXED: 0.8,
        CulturalContext.SECULAR: 0.7, CulturalContext.HINDU: 0.5,
    },
    CulturalBackground.HINDU: {
        CulturalContext.HINDU: 1.0, CulturalContext.MIXED: 0.8,
        CulturalContext.SECULAR: 0.7, CulturalContext.BUDDHIST: 0.5,
    },
    CulturalBackground.SPIRITUAL: {
        CulturalContext.MIXED: 1.0, CulturalContext.BUDDHIST: 0.9,
        CulturalContext.HINDU: 0.9, CulturalContext.SECULAR: 0.7,
    },
    CulturalBackground.ABRAHAMIC: {
        CulturalContext.SECULAR: 0.9, CulturalContext.MIXED: 0.6,
        CulturalContext.BUDDHIST: 0.4, CulturalContext.HINDU: 0.4,
    },
    CulturalBackground.AGNOSTIC: {
        CulturalContext.SECULAR: 1.0, CulturalContext.MIXED: 0.8,
        CulturalContext.BUDDHIST: 0.6, CulturalContext.HINDU: 0.6,
    },
}


def _average(signals: Sequence[float]) -> float:
    """Mean of the present sub-signals, neutral when there are none."""
    if not signals:
        return NEUTRAL_SCORE
    return sum(signals) / len(signals)


def _tiered_capacity(available: int, required: int) -> float:
    """Full credit when capacity meets the need, partial one step short."""
    if available >= required:
        return 1.0
    if available >= required - 1:
        return 0.6
    return 0.3


# =============================================================================
# Goal Alignment
# =============================================================================


def match_goal(goal: Goal, practice: Practice, matching: GoalMatchingConfig) -> float:
    """Keyword credit for one goal against the practice's benefits and goals."""
    haystack = practice.search_text()
    hits = sum(1 for keyword in GOAL_KEYWORDS.get(goal, ()) if keyword in haystack)
    return min(hits * matching.match_credit, matching.goal_cap)


def goal_alignment(
    goals: Optional[Sequence[Goal]],
    practice: Practice,
    matching: Optional[GoalMatchingConfig] = None,
) -> float:
    """Average per-goal keyword credit; 0.5 when no goals were given."""
    if not goals:
        return NEUTRAL_SCORE
    matching = matching or GoalMatchingConfig()
    return sum(match_goal(goal, practice, matching) for goal in goals) / len(goals)


# =============================================================================
# Personality Fit
# =============================================================================


def match_structure_preference(preference: int, structure: Structure) -> float:
    """Distance on the 1-10 scale between preference and practice structure."""
    difference = abs(preference - STRUCTURE_POINTS[structure])
    return max(0.0, 1 - difference / STRUCTURE_SPAN)


def match_temperament(temperament: Temperament, practice: Practice) -> float:
    """Share of the temperament's compatible approaches the practice offers."""
    compatible = TEMPERAMENT_APPROACHES.get(temperament, frozenset())
    matches = compatible.intersection(practice.tags.approach)
    return len(matches) / max(len(compatible), 1)


def match_time_expectation(time_available: TimeAvailable, time_to_results: TimeToResults) -> float:
    """Whether daily time supports a practice's time to results."""
    return _tiered_capacity(TIME_ORDINALS.get(time_available, 2), RESULTS_ORDINALS[time_to_results])


def personality_fit(profile: UserProfile, practice: Practice) -> float:
    """Structure, temperament and patience fit."""
    personality = profile.personality
    signals = []

    if personality.structure_preference is not None:
        signals.append(match_structure_preference(
            personality.structure_preference, practice.tags.structure
        ))

    if personality.temperament is not None:
        signals.append(match_temperament(personality.temperament, practice))

    if profile.practical.time_available is not None:
        signals.append(match_time_expectation(
            profile.practical.time_available, practice.tags.time_to_results
        ))

    return _average(signals)


# =============================================================================
# Practical Fit
# =============================================================================


def match_teacher_requirement(access: LocationAccess, teacher_required: bool) -> float:
    if not teacher_required:
        return 1.0
    if access in (LocationAccess.GOOD, LocationAccess.TRAVEL):
        return 1.0
    if access == LocationAccess.LIMITED:
        return 0.5
    return 0.3


def match_retreat_requirement(willingness: RetreatWillingness, retreat_friendly: bool) -> float:
    if not retreat_friendly:
        return 1.0
    return RETREAT_SCORES.get(willingness, 0.2)


def match_time_commitment(time_available: TimeAvailable, difficulty: DifficultyLevel) -> float:
    """Whether daily time supports a practice's difficulty."""
    return _tiered_capacity(TIME_ORDINALS.get(time_available, 2), DIFFICULTY_ORDINALS[difficulty])


def practical_fit(profile: UserProfile, practice: Practice) -> float:
    """Teacher access, retreat willingness and daily time fit."""
    practical = profile.practical
    tags = practice.tags
    signals = []

    if practical.location_access is not None:
        signals.append(match_teacher_requirement(practical.location_access, tags.teacher_required))

    if practical.retreat_willingness is not None:
        signals.append(match_retreat_requirement(practical.retreat_willingness, tags.retreat_friendly))

    if practical.time_available is not None:
        signals.append(match_time_commitment(practical.time_available, tags.difficulty_level))

    return _average(signals)


# =============================================================================
# Cultural Alignment
# =============================================================================


def match_cultural_context(background: CulturalBackground, context: CulturalContext) -> float:
    return CULTURAL_MATRIX.get(background, {}).get(context, NEUTRAL_SCORE)


def match_spiritual_openness(openness: int, context: CulturalContext) -> float:
    """Low openness favours secular framing, high openness traditional framing."""
    if context == CulturalContext.SECULAR:
        return 1.0 if openness <= 5 else 0.7
    if context == CulturalContext.MIXED:
        return 0.8
    return 1.0 if openness >= 5 else max(0.3, openness / 10)


def cultural_alignment(profile: UserProfile, practice: Practice) -> float:
    """Background and spiritual openness fit."""
    background = profile.background
    context = practice.tags.cultural_context
    signals = []

    if background.cultural is not None:
        signals.append(match_cultural_context(background.cultural, context))

    if background.spiritual_openness is not None:
        signals.append(match_spiritual_openness(background.spiritual_openness, context))

    return _average(signals)
