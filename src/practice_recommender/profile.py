"""User profiles from assessment answers and profile files."""

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from .schema import UserProfile

logger = logging.getLogger(__name__)


class ProfileError(Exception):
    """Raised when a user profile is unreadable or malformed."""


# Assessment question id -> (profile section, field)
ANSWER_FIELDS = {
    "cultural-background": ("background", "cultural"),
    "spiritual-openness": ("background", "spiritual_openness"),
    "previous-experience": ("background", "previous_experience"),
    "primary-goals": ("goals", "primary"),
    "learning-style": ("personality", "learning_style"),
    "structure-preference": ("personality", "structure_preference"),
    "temperament": ("personality", "temperament"),
    "time-available": ("practical", "time_available"),
    "retreat-willingness": ("practical", "retreat_willingness"),
    "teacher-access": ("practical", "location_access"),
    "evidence-importance": ("priorities", "evidence_based"),
    "tradition-importance": ("priorities", "traditional_authenticity"),
}

# Multi-select questions; a single string is split on commas
LIST_ANSWERS = {"primary-goals", "previous-experience"}

IMPATIENT_ANSWERS = {"immediate", "need-results"}


def _as_list(value: Any) -> list:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return list(value)


def profile_from_answers(
    answers: Mapping[str, Any],
    base: Optional[UserProfile] = None,
) -> UserProfile:
    """Build a profile from assessment answers keyed by question id.

    Args:
        answers: Question id to answer. Scale answers may be strings.
        base: Profile whose fields are kept unless an answer overrides them.

    Raises:
        ProfileError: If an answer is outside the question's vocabulary.
    """
    data = (base or UserProfile()).model_dump()

    for question_id, value in answers.items():
        if question_id == "patience-level":
            data["priorities"]["quick_results"] = 10 if value in IMPATIENT_ANSWERS else 5
            continue
        if question_id == "quick-vs-deep":
            data["priorities"]["spiritual_depth"] = 10 if value == "deep-transformation" else 5
            continue
        if question_id == "motivation-type":
            data["goals"]["motivations"] = [value]
            continue

        target = ANSWER_FIELDS.get(question_id)
        if target is None:
            logger.debug("Ignoring answer to unscored question %s", question_id)
            continue

        section, field = target
        data[section][field] = _as_list(value) if question_id in LIST_ANSWERS else value

    try:
        return UserProfile.model_validate(data)
    except ValidationError as e:
        raise ProfileError(f"Invalid assessment answers: {e}") from e


def load_profile(path: Union[str, Path]) -> UserProfile:
    """Load a profile JSON file (camelCase or snake_case keys)."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ProfileError(f"Cannot read profile {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ProfileError(f"Invalid JSON in profile {path}: {e}") from e

    try:
        return UserProfile.model_validate(data or {})
    except ValidationError as e:
        raise ProfileError(f"Invalid profile {path}: {e}") from e


def validate_profile(path: Union[str, Path]) -> tuple[bool, list[str]]:
    """Check a profile file.

    Returns:
        Tuple of (is_valid, issues).
    """
    try:
        load_profile(path)
    except ProfileError as e:
        cause = e.__cause__
        if isinstance(cause, ValidationError):
            return False, [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in cause.errors()
            ]
        return False, [str(e)]
    return True, []
