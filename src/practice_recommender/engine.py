"""Recommendation engine entry points.

``generate_report`` is the single call the assessment UI makes: it takes a
catalog and a profile and returns a report. Nothing is cached between calls,
so it is safe to call concurrently with different inputs.
"""

from typing import Mapping, Optional

from .catalog import (
    CatalogError,
    EmptyCatalogError,
    load_catalog,
    load_default_catalog,
    validate_catalog,
)
from .config import RecommenderConfig
from .profile import ProfileError, load_profile, profile_from_answers, validate_profile
from .report import ReportGenerator
from .schema import Practice, PracticeScore, RecommendationReport, UserProfile
from .scorer import PracticeScorer

__all__ = [
    "CatalogError",
    "EmptyCatalogError",
    "ProfileError",
    "generate_report",
    "load_catalog",
    "load_default_catalog",
    "load_profile",
    "profile_from_answers",
    "score_practice",
    "validate_catalog",
    "validate_profile",
]


def generate_report(
    catalog: Mapping[str, Practice],
    profile: UserProfile,
    config: Optional[RecommenderConfig] = None,
) -> RecommendationReport:
    """Rank the catalog for a profile and build the recommendation report.

    Args:
        catalog: Practices keyed by id; iteration order breaks score ties
        profile: Assessment answers
        config: Scoring policy; defaults apply when omitted

    Raises:
        EmptyCatalogError: If the catalog has no practices
    """
    return ReportGenerator(config).generate(catalog, profile)


def score_practice(
    practice: Practice,
    profile: UserProfile,
    config: Optional[RecommenderConfig] = None,
) -> PracticeScore:
    """Score a single practice against a profile."""
    return PracticeScorer(config).score(practice, profile)
