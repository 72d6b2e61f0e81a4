"""Report generator.

Ranks every practice in the catalog and partitions the ranking into a top
recommendation, alternatives, practices to avoid and an optional hybrid
approach.
"""

import logging
from typing import Mapping, NamedTuple, Optional

from .catalog import EmptyCatalogError
from .config import RecommenderConfig
from .schema import (
    AlternativeRecommendation,
    HybridApproach,
    NotRecommendedPractice,
    Practice,
    PracticeScore,
    RecommendationReport,
    RetreatWillingness,
    TopRecommendation,
    UserProfile,
)
from .scorer import PracticeScorer

logger = logging.getLogger(__name__)


class ScoredPractice(NamedTuple):
    practice: Practice
    score: PracticeScore


class ReportGenerator:
    """Builds a recommendation report from a catalog and a profile.

    Principles:
    - Ranking is deterministic: ties keep catalog order
    - Never pad a section; thresholds decide what is shown
    - Every entry carries an explanation
    """

    NOT_RECOMMENDED_REASONS = {
        "goal_alignment": "{name} doesn't align well with your stated goals",
        "personality_fit": "{name} may not match your learning style and personality",
        "practical_fit": "{name} may be difficult given your practical constraints",
        "cultural_alignment": "{name}'s cultural context may be uncomfortable for you",
    }

    HYBRID_DESCRIPTION = "You might benefit from a hybrid approach combining complementary practices"
    HYBRID_SCHEDULE = (
        "Alternate between practices throughout the week, or use one for daily "
        "practice and another for weekly deep sessions"
    )

    def __init__(self, config: Optional[RecommenderConfig] = None):
        self.config = config or RecommenderConfig()
        self.scorer = PracticeScorer(self.config)

    def rank(self, catalog: Mapping[str, Practice], profile: UserProfile) -> list[ScoredPractice]:
        """Score every practice and sort by overall score, best first.

        ``sorted`` is stable, so equal scores keep catalog iteration order.
        """
        scored = [
            ScoredPractice(practice, self.scorer.score(practice, profile))
            for practice in catalog.values()
        ]
        return sorted(scored, key=lambda sp: sp.score.overall_score, reverse=True)

    def generate(self, catalog: Mapping[str, Practice], profile: UserProfile) -> RecommendationReport:
        """Generate the full recommendation report.

        Args:
            catalog: Practices keyed by id, in authoring order
            profile: Assessment answers

        Returns:
            The recommendation report

        Raises:
            EmptyCatalogError: If the catalog has no practices
        """
        if not catalog:
            raise EmptyCatalogError("Cannot generate recommendations from an empty catalog")

        ranked = self.rank(catalog, profile)
        top = ranked[0]

        report = RecommendationReport(
            top_recommendation=TopRecommendation(
                practice=top.practice,
                score=top.score,
                why=top.score.reasoning,
                next_steps=self._generate_next_steps(top.practice, profile),
            ),
            alternatives=self._select_alternatives(ranked),
            not_recommended=self._select_not_recommended(ranked),
            hybrid_approach=self._generate_hybrid_approach(ranked),
        )

        logger.info(
            "Generated report over %d practices: top=%s (%.3f), %d alternatives, "
            "%d not recommended, hybrid=%s",
            len(ranked),
            top.practice.id,
            top.score.overall_score,
            len(report.alternatives),
            len(report.not_recommended),
            report.hybrid_approach is not None,
        )
        return report

    def _select_alternatives(self, ranked: list[ScoredPractice]) -> list[AlternativeRecommendation]:
        """Runners-up just after the top that still clear the score bar."""
        cfg = self.config.report
        return [
            AlternativeRecommendation(practice=sp.practice, score=sp.score, why=sp.score.reasoning)
            for sp in ranked[1:1 + cfg.max_alternatives]
            if sp.score.overall_score > cfg.alternative_min_score
        ]

    def _select_not_recommended(self, ranked: list[ScoredPractice]) -> list[NotRecommendedPractice]:
        """Weakest-fitting practices, in rank order."""
        cfg = self.config.report
        poor = [sp for sp in ranked if sp.score.overall_score < cfg.not_recommended_below]
        return [
            NotRecommendedPractice(
                practice=sp.practice,
                score=sp.score,
                why=self._generate_not_recommended_reason(sp),
            )
            for sp in poor[:cfg.max_not_recommended]
        ]

    def _generate_not_recommended_reason(self, scored: ScoredPractice) -> str:
        dimension, _ = scored.score.breakdown.weakest()
        template = self.NOT_RECOMMENDED_REASONS.get(dimension, "{name} is not a strong match")
        return template.format(name=scored.practice.name)

    def _generate_next_steps(self, practice: Practice, profile: UserProfile) -> list[str]:
        """Concrete first steps for the top recommendation."""
        steps = []
        resources = practice.resources

        if resources.books:
            book = resources.books[0]
            steps.append(f'Read "{book.title}" by {book.author}')

        if resources.apps:
            steps.append(f"Try the {resources.apps[0]} app for guided practice")

        if practice.tags.teacher_required:
            steps.append("Find a qualified teacher or center in your area")
        else:
            steps.append("Start with 10-15 minute daily sessions to establish the habit")

        if (practice.tags.retreat_friendly
                and profile.practical.retreat_willingness != RetreatWillingness.NO):
            steps.append("Consider attending a beginner retreat after 2-3 months of practice")

        return steps

    def _generate_hybrid_approach(self, ranked: list[ScoredPractice]) -> Optional[HybridApproach]:
        """Suggest combining the top practices when they are close and complementary."""
        cfg = self.config.report
        if len(ranked) < cfg.hybrid_size:
            return None

        leaders = ranked[:cfg.hybrid_size]
        spread = leaders[0].score.overall_score - leaders[-1].score.overall_score
        if spread >= cfg.hybrid_max_spread:
            return None

        approaches = {approach for sp in leaders for approach in sp.practice.tags.approach}
        if len(approaches) < cfg.hybrid_min_approaches:
            return None

        return HybridApproach(
            description=self.HYBRID_DESCRIPTION,
            practices=[sp.practice.name for sp in leaders],
            schedule=self.HYBRID_SCHEDULE,
        )
