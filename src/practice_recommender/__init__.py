"""Meditation practice recommendation engine."""

from practice_recommender.config import ConfigError, RecommenderConfig
from practice_recommender.engine import (
    CatalogError,
    EmptyCatalogError,
    ProfileError,
    generate_report,
    load_catalog,
    load_default_catalog,
    load_profile,
    profile_from_answers,
    score_practice,
)
from practice_recommender.schema import Practice, RecommendationReport, UserProfile

__version__ = "1.0.0"

__all__ = [
    "CatalogError",
    "ConfigError",
    "EmptyCatalogError",
    "Practice",
    "ProfileError",
    "RecommendationReport",
    "RecommenderConfig",
    "UserProfile",
    "generate_report",
    "load_catalog",
    "load_default_catalog",
    "load_profile",
    "profile_from_answers",
    "score_practice",
]
