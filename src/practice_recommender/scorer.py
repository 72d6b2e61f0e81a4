"""Practice scorer.

Scores a single practice against a user profile. Produces a 0-1 overall score
with a per-dimension breakdown, plus concerns, suggested adaptations and a
short rationale.
"""

import logging
import math
from typing import Optional

from . import dimensions
from .config import RecommenderConfig
from .schema import (
    CulturalContext,
    DifficultyLevel,
    Goal,
    LocationAccess,
    Practice,
    PracticeScore,
    RetreatWillingness,
    ScoreBreakdown,
    TimeAvailable,
    UserProfile,
)

logger = logging.getLogger(__name__)


class PracticeScorer:
    """Scores practices against a user profile.

    Scoring principles:
    - Missing answers are neutral, never penalizing
    - Dimensions are independent and combined with fixed weights
    - Every score carries its own explanation

    The scorer holds only its configuration and may be shared freely.
    """

    DIMENSION_STRENGTHS = {
        "goal_alignment": "aligns well with your stated goals. ",
        "personality_fit": "matches your learning style and personality. ",
        "practical_fit": "fits well with your practical circumstances. ",
        "cultural_alignment": "aligns with your cultural and spiritual background. ",
    }

    GOAL_DESCRIPTIONS = {
        Goal.STRESS_REDUCTION: "It offers proven stress-reduction benefits",
        Goal.AWAKENING: "It provides a path toward spiritual awakening",
        Goal.FOCUS: "It effectively develops concentration and focus",
        Goal.INSIGHT: "It cultivates deep insight into the nature of mind",
        Goal.COMPASSION: "It develops compassion and loving-kindness",
        Goal.PAIN: "It has strong evidence for managing chronic pain",
        Goal.CONSCIOUSNESS: "It explores the nature of consciousness",
        Goal.PEACE: "It cultivates deep inner peace",
        Goal.HEALING: "It supports emotional healing",
    }

    def __init__(self, config: Optional[RecommenderConfig] = None):
        """Initialize scorer with optional custom configuration."""
        self.config = config or RecommenderConfig()

    def score(self, practice: Practice, profile: UserProfile) -> PracticeScore:
        """Score one practice.

        Args:
            practice: Catalog entry to evaluate
            profile: Assessment answers

        Returns:
            Overall score, breakdown, concerns, adaptations and reasoning
        """
        breakdown = ScoreBreakdown(
            goal_alignment=dimensions.goal_alignment(
                profile.goals.primary, practice, self.config.goal_matching
            ),
            personality_fit=dimensions.personality_fit(profile, practice),
            practical_fit=dimensions.practical_fit(profile, practice),
            cultural_alignment=dimensions.cultural_alignment(profile, practice),
        )

        overall_score = self._weighted_total(breakdown)

        logger.debug(
            "Scored %s: overall=%.3f goal=%.3f personality=%.3f practical=%.3f cultural=%.3f",
            practice.id,
            overall_score,
            breakdown.goal_alignment,
            breakdown.personality_fit,
            breakdown.practical_fit,
            breakdown.cultural_alignment,
        )

        return PracticeScore(
            practice_id=practice.id,
            overall_score=overall_score,
            breakdown=breakdown,
            concerns=self._identify_concerns(practice, profile, breakdown),
            adaptations=self._suggest_adaptations(practice, profile),
            reasoning=self._generate_reasoning(practice, profile, breakdown),
        )

    def _weighted_total(self, breakdown: ScoreBreakdown) -> float:
        """Weighted sum of the breakdown, kept inside [0, 1]."""
        weights = self.config.scoring_weights
        total = math.fsum([
            breakdown.goal_alignment * weights.goal_alignment,
            breakdown.personality_fit * weights.personality_fit,
            breakdown.practical_fit * weights.practical_fit,
            breakdown.cultural_alignment * weights.cultural_alignment,
        ])
        return min(1.0, max(0.0, total))

    def _identify_concerns(
        self,
        practice: Practice,
        profile: UserProfile,
        breakdown: ScoreBreakdown,
    ) -> list[str]:
        """Flag circumstances likely to get in the way of this practice."""
        concerns = []
        tags = practice.tags
        practical = profile.practical

        if tags.teacher_required and practical.location_access == LocationAccess.SELF_GUIDED:
            concerns.append("This practice typically requires a qualified teacher for proper instruction")

        if (practical.time_available == TimeAvailable.FIVE_TO_TEN
                and tags.difficulty_level == DifficultyLevel.ADVANCED):
            concerns.append("This practice may require more daily time than you have available")

        if breakdown.cultural_alignment < 0.5:
            concerns.append("The cultural or spiritual context may feel unfamiliar or uncomfortable")

        if tags.retreat_friendly and practical.retreat_willingness == RetreatWillingness.NO:
            concerns.append("Deep progress often requires retreat practice")

        return concerns

    def _suggest_adaptations(self, practice: Practice, profile: UserProfile) -> list[str]:
        """Suggest ways to make the practice workable for this user."""
        adaptations = []
        tags = practice.tags
        openness = profile.background.spiritual_openness

        if profile.practical.time_available == TimeAvailable.FIVE_TO_TEN:
            adaptations.append("Start with shorter 5-10 minute sessions and gradually build up")

        if tags.teacher_required and profile.practical.location_access == LocationAccess.SELF_GUIDED:
            adaptations.append(
                "Use books, online courses, and recorded teachings as substitute for in-person teacher"
            )

        if (openness is not None and openness < 5
                and tags.cultural_context != CulturalContext.SECULAR):
            adaptations.append("Focus on the practical techniques rather than religious/spiritual elements")

        return adaptations

    def _generate_reasoning(
        self,
        practice: Practice,
        profile: UserProfile,
        breakdown: ScoreBreakdown,
    ) -> str:
        """Name the strongest dimension and the appeal for the first goal."""
        reasoning = f"{practice.name} "

        dimension, value = breakdown.strongest()
        if value > self.config.reasoning.strength_threshold:
            reasoning += self.DIMENSION_STRENGTHS[dimension]

        goal = profile.first_goal
        if goal is not None:
            reasoning += self.GOAL_DESCRIPTIONS.get(goal, "")
            reasoning += ". "

        return reasoning
