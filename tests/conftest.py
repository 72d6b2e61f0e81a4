"""Shared fixtures for the practice recommender tests."""

import pytest

from practice_recommender.catalog import load_default_catalog
from practice_recommender.schema import (
    BookResource,
    Practice,
    PracticeBenefits,
    PracticeResources,
    PracticeTags,
)


def _make_practice(
    practice_id: str = "practice",
    name: str = None,
    approach=("concentration",),
    structure: str = "highly-structured",
    difficulty: str = "beginner-friendly",
    results: str = "quick",
    context: str = "secular",
    teacher: bool = False,
    retreat: bool = False,
    benefits=(),
    goals=(),
    books=(),
    apps=(),
) -> Practice:
    """Build a practice with sensible defaults for every tag."""
    return Practice(
        id=practice_id,
        name=name or practice_id.title(),
        benefits=PracticeBenefits(cognitive=list(benefits)),
        goals=list(goals),
        resources=PracticeResources(
            books=[BookResource(title=title, author=author) for title, author in books],
            apps=list(apps),
        ),
        tags=PracticeTags(
            approach=list(approach),
            structure=structure,
            difficulty_level=difficulty,
            time_to_results=results,
            cultural_context=context,
            teacher_required=teacher,
            retreat_friendly=retreat,
        ),
    )


@pytest.fixture
def make_practice():
    """Factory for practices; keyword arguments override tag defaults."""
    return _make_practice


@pytest.fixture
def make_catalog():
    """Factory for an ordered catalog from practices."""
    def _make(*practices: Practice) -> dict[str, Practice]:
        return {p.id: p for p in practices}
    return _make


@pytest.fixture(scope="session")
def default_catalog() -> dict[str, Practice]:
    """The catalog bundled with the package."""
    return load_default_catalog()
