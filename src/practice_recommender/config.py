"""Configuration management for the practice recommender.

Every tunable constant of the scoring policy lives here so that weights and
thresholds can be adjusted from a YAML file without touching the scorers.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, model_validator

WEIGHT_SUM_TOLERANCE = 1e-6


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or parsed."""


class ScoringWeightsConfig(BaseModel):
    """Weights for the four scoring dimensions.

    These weights control how much each dimension contributes to the overall
    score. They must be non-negative and sum to 1.0 so that the overall score
    stays within [0, 1].
    """
    goal_alignment: float = Field(
        0.35,
        ge=0,
        description="Weight for matching the user's primary goals against practice benefits"
    )
    personality_fit: float = Field(
        0.25,
        ge=0,
        description="Weight for structure preference, temperament and patience match"
    )
    practical_fit: float = Field(
        0.25,
        ge=0,
        description="Weight for teacher access, retreat willingness and daily time"
    )
    cultural_alignment: float = Field(
        0.15,
        ge=0,
        description="Weight for cultural background and spiritual openness match"
    )

    @model_validator(mode="after")
    def _check_sum(self) -> "ScoringWeightsConfig":
        total = (
            self.goal_alignment
            + self.personality_fit
            + self.practical_fit
            + self.cultural_alignment
        )
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(f"Scoring weights must sum to 1.0, got {total:.4f}")
        return self


class GoalMatchingConfig(BaseModel):
    """Keyword credit used by goal alignment."""
    match_credit: float = Field(
        0.3,
        gt=0,
        description="Score awarded per goal keyword found in a practice's benefits"
    )
    goal_cap: float = Field(
        1.0,
        gt=0,
        le=1.0,
        description="Maximum score a single goal can reach"
    )


class ReasoningConfig(BaseModel):
    """Thresholds for the explanatory text attached to each score."""
    strength_threshold: float = Field(
        0.7,
        ge=0,
        le=1.0,
        description="A dimension is called out as a strength only above this score"
    )


class ReportConfig(BaseModel):
    """Thresholds for partitioning the ranked catalog into a report."""
    alternative_min_score: float = Field(
        0.6,
        description="Alternatives must score strictly above this"
    )
    max_alternatives: int = Field(
        3,
        ge=0,
        description="Alternatives are drawn from this many ranks after the top"
    )
    not_recommended_below: float = Field(
        0.5,
        description="Practices scoring strictly below this are not recommended"
    )
    max_not_recommended: int = Field(
        3,
        ge=0,
        description="Maximum number of not-recommended practices to report"
    )
    hybrid_size: int = Field(
        3,
        ge=2,
        description="Number of top practices considered for a hybrid approach"
    )
    hybrid_max_spread: float = Field(
        0.15,
        ge=0,
        description="Top practices must be within this score spread for a hybrid"
    )
    hybrid_min_approaches: int = Field(
        2,
        ge=1,
        description="Minimum distinct approach tags across the top practices"
    )


class RecommenderConfig(BaseModel):
    """Complete configuration for the practice recommender."""
    scoring_weights: ScoringWeightsConfig = Field(default_factory=ScoringWeightsConfig)
    goal_matching: GoalMatchingConfig = Field(default_factory=GoalMatchingConfig)
    reasoning: ReasoningConfig = Field(default_factory=ReasoningConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)


def load_config(path: Path) -> RecommenderConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded RecommenderConfig. Missing sections keep their defaults.

    Raises:
        ConfigError: If the file is unreadable or not valid YAML.
        ValidationError: If a value is out of range or weights do not sum to 1.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config {path}: {e}") from e

    return RecommenderConfig.model_validate(data or {})


def find_config_file() -> Optional[Path]:
    """Find a recommender configuration file.

    Looks in (order of priority):
    1. PRACTICE_RECOMMENDER_CONFIG environment variable
    2. ./recommender-config.yaml
    3. ./recommender-config.yml
    4. ~/.config/practice-recommender/config.yaml
    """
    env_path = os.environ.get("PRACTICE_RECOMMENDER_CONFIG")
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    for name in ["recommender-config.yaml", "recommender-config.yml"]:
        path = Path(name)
        if path.exists():
            return path

    user_config = Path.home() / ".config" / "practice-recommender" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def resolve_config(path: Optional[Path] = None) -> RecommenderConfig:
    """Load the config at ``path``, else a discovered file, else defaults."""
    path = path or find_config_file()
    if path is None:
        return RecommenderConfig()
    return load_config(path)


def save_default_config(path: Path) -> None:
    """Save the default configuration to a YAML file.

    Args:
        path: Path where to save the configuration.
    """
    data = RecommenderConfig().model_dump()

    yaml_content = """# Practice Recommender Configuration
# ==================================
#
# This file configures the dimension weights, goal keyword credit,
# reasoning threshold and report partitioning.
#
# Copy this file to one of these locations:
#   - ./recommender-config.yaml (current directory)
#   - ~/.config/practice-recommender/config.yaml (user config)
#
# Or set the PRACTICE_RECOMMENDER_CONFIG environment variable.

"""
    yaml_content += yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)
