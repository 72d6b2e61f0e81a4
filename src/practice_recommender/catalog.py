"""Practice catalog loading and validation.

A catalog file is JSON, either a bare mapping of practice id to practice, a
bare list of practices, or an object with ``version`` and ``practices``
holding one of those. Authoring order is preserved because it breaks ties
when practices score equally.
"""

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Union

from pydantic import ValidationError

from .schema import Practice

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_RESOURCE = "practices.json"


class CatalogError(Exception):
    """Raised when a practice catalog is unreadable or malformed."""


class EmptyCatalogError(CatalogError):
    """Raised when a report is requested for a catalog with no practices."""


def _format_validation_error(practice_id: str, error: ValidationError) -> str:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )
    return f"Practice '{practice_id}' is invalid: {details}"


def _iter_raw_practices(data: Any) -> list[tuple[str, Any]]:
    """Pair each raw practice with the key it was declared under."""
    if isinstance(data, dict) and "practices" in data:
        data = data["practices"]

    if isinstance(data, dict):
        return list(data.items())
    if isinstance(data, list):
        entries = []
        for index, item in enumerate(data):
            practice_id = item.get("id") if isinstance(item, dict) else None
            if not isinstance(practice_id, str) or not practice_id:
                raise CatalogError(f"Practice #{index} has no id")
            entries.append((practice_id, item))
        return entries
    raise CatalogError("Catalog must be a JSON object or array of practices")


def _parse_practice(key: str, raw: Any) -> Practice:
    if not isinstance(raw, dict):
        raise CatalogError(f"Practice '{key}' must be a JSON object")

    raw = dict(raw)
    raw.setdefault("id", key)
    if raw["id"] != key:
        raise CatalogError(f"Practice key '{key}' does not match its id '{raw['id']}'")

    try:
        return Practice.model_validate(raw)
    except ValidationError as e:
        raise CatalogError(_format_validation_error(key, e)) from e


def parse_catalog(data: Any) -> dict[str, Practice]:
    """Build an ordered practice mapping from decoded catalog JSON.

    Raises:
        CatalogError: On structural problems, duplicate ids or an invalid
            practice. The first problem found is reported.
    """
    catalog: dict[str, Practice] = {}
    for key, raw in _iter_raw_practices(data):
        practice = _parse_practice(key, raw)
        if practice.id in catalog:
            raise CatalogError(f"Duplicate practice id: {practice.id}")
        if not practice.search_text():
            logger.warning("Practice %s has no benefits or goals; goal alignment will be 0", practice.id)
        catalog[practice.id] = practice
    return catalog


def _read_json(path: Union[str, Path]) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in catalog {path}: {e}") from e


def load_catalog(path: Union[str, Path]) -> dict[str, Practice]:
    """Load and validate a catalog file."""
    catalog = parse_catalog(_read_json(path))
    logger.info("Loaded %d practices from %s", len(catalog), path)
    return catalog


def load_default_catalog() -> dict[str, Practice]:
    """Load the catalog bundled with the package."""
    resource = resources.files("practice_recommender") / "data" / DEFAULT_CATALOG_RESOURCE
    text = resource.read_text(encoding="utf-8")
    return parse_catalog(json.loads(text))


def validate_catalog(path: Union[str, Path]) -> tuple[bool, list[str]]:
    """Check a catalog file and collect every problem instead of stopping.

    Returns:
        Tuple of (is_valid, issues).
    """
    issues: list[str] = []

    try:
        entries = _iter_raw_practices(_read_json(path))
    except CatalogError as e:
        return False, [str(e)]

    if not entries:
        issues.append("Catalog contains no practices")

    seen: set[str] = set()
    for key, raw in entries:
        try:
            practice = _parse_practice(key, raw)
        except CatalogError as e:
            issues.append(str(e))
            continue
        if practice.id in seen:
            issues.append(f"Duplicate practice id: {practice.id}")
        seen.add(practice.id)

    return not issues, issues
