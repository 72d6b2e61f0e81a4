"""Tests for practice catalog loading and validation."""

import json
import logging

import pytest

from practice_recommender.catalog import (
    CatalogError,
    load_catalog,
    load_default_catalog,
    parse_catalog,
    validate_catalog,
)
from practice_recommender.schema import Approach, CulturalContext


def _raw_practice(practice_id: str = "samatha", **overrides) -> dict:
    """Build a minimal practice as it appears in catalog JSON."""
    base = {
        "id": practice_id,
        "name": practice_id.title(),
        "benefits": {"cognitive": ["Enhanced focus"]},
        "goals": ["Develop concentration"],
        "tags": {
            "approach": ["concentration"],
            "structure": "highly-structured",
            "difficultyLevel": "beginner-friendly",
            "timeToResults": "moderate",
            "culturalContext": "buddhist",
            "teacherRequired": False,
            "retreatFriendly": True,
        },
    }
    base.update(overrides)
    return base


@pytest.fixture
def write_catalog(tmp_path):
    """Write catalog data to a JSON file and return its path."""
    def _write(data, name="practices.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


class TestDefaultCatalog:
    """Tests for the bundled catalog."""

    def test_loads_all_practices(self, default_catalog):
        assert len(default_catalog) == 12

    def test_authoring_order_preserved(self, default_catalog):
        ids = list(default_catalog)
        assert ids[:3] == ["samatha", "vipassana", "metta"]
        assert ids[-1] == "breathwork"

    def test_keys_match_ids(self, default_catalog):
        for key, practice in default_catalog.items():
            assert key == practice.id

    def test_every_practice_is_searchable(self, default_catalog):
        for practice in default_catalog.values():
            assert practice.search_text()
            assert practice.tags.approach

    def test_tags_are_parsed(self):
        breathwork = load_default_catalog()["breathwork"]
        assert breathwork.tags.approach == [Approach.BODY, Approach.CONCENTRATION]
        assert breathwork.tags.cultural_context == CulturalContext.MIXED
        assert breathwork.resources.books[0].author == "James Nestor"


class TestParseCatalog:
    """Tests for the accepted catalog shapes."""

    def test_wrapped_mapping(self):
        catalog = parse_catalog({"version": "2.0.0", "practices": {"samatha": _raw_practice()}})
        assert list(catalog) == ["samatha"]

    def test_bare_mapping_defaults_id_from_key(self):
        raw = _raw_practice()
        del raw["id"]
        catalog = parse_catalog({"samatha": raw})
        assert catalog["samatha"].id == "samatha"

    def test_list(self):
        catalog = parse_catalog([_raw_practice("metta"), _raw_practice("zazen")])
        assert list(catalog) == ["metta", "zazen"]

    def test_snake_case_tags_accepted(self):
        raw = _raw_practice()
        raw["tags"] = {
            "approach": ["heart"],
            "structure": "moderately-structured",
            "difficulty_level": "intermediate",
            "time_to_results": "quick",
            "cultural_context": "secular",
            "teacher_required": True,
            "retreat_friendly": False,
        }
        assert parse_catalog([raw])["samatha"].tags.teacher_required is True

    def test_rejects_list_entry_without_id(self):
        raw = _raw_practice()
        del raw["id"]
        with pytest.raises(CatalogError, match="Practice #1 has no id"):
            parse_catalog([_raw_practice("metta"), raw])

    def test_rejects_list_entry_with_non_string_id(self):
        with pytest.raises(CatalogError, match="Practice #0 has no id"):
            parse_catalog([_raw_practice(id=7)])

    def test_rejects_key_id_mismatch(self):
        with pytest.raises(CatalogError, match="does not match"):
            parse_catalog({"samatha": _raw_practice("metta")})

    def test_rejects_duplicate_ids(self):
        with pytest.raises(CatalogError, match="Duplicate practice id: metta"):
            parse_catalog([_raw_practice("metta"), _raw_practice("metta")])

    def test_rejects_missing_tags(self):
        raw = _raw_practice()
        del raw["tags"]
        with pytest.raises(CatalogError, match="Practice 'samatha' is invalid"):
            parse_catalog([raw])

    def test_rejects_empty_approach(self):
        raw = _raw_practice()
        raw["tags"]["approach"] = []
        with pytest.raises(CatalogError, match="tags.approach"):
            parse_catalog([raw])

    def test_rejects_unknown_tag_value(self):
        raw = _raw_practice()
        raw["tags"]["culturalContext"] = "taoist"
        with pytest.raises(CatalogError, match="culturalContext"):
            parse_catalog([raw])

    def test_rejects_non_object_practice(self):
        with pytest.raises(CatalogError, match="must be a JSON object"):
            parse_catalog({"samatha": "concentration"})

    def test_rejects_scalar_catalog(self):
        with pytest.raises(CatalogError, match="JSON object or array"):
            parse_catalog("samatha")

    def test_warns_on_unsearchable_practice(self, caplog):
        with caplog.at_level(logging.WARNING, logger="practice_recommender.catalog"):
            parse_catalog([_raw_practice(benefits={}, goals=[])])
        assert "samatha has no benefits or goals" in caplog.text


class TestLoadCatalog:
    """Tests for loading catalog files."""

    def test_loads_file(self, write_catalog):
        path = write_catalog({"practices": [_raw_practice("metta"), _raw_practice("zazen")]})
        assert list(load_catalog(path)) == ["metta", "zazen"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="Cannot read catalog"):
            load_catalog(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError, match="Invalid JSON"):
            load_catalog(path)


class TestValidateCatalog:
    """Tests for collecting catalog issues."""

    def test_valid_catalog(self, write_catalog):
        assert validate_catalog(write_catalog([_raw_practice()])) == (True, [])

    def test_collects_every_issue(self, write_catalog):
        missing_tags = _raw_practice("zazen")
        del missing_tags["tags"]
        path = write_catalog([_raw_practice("metta"), missing_tags, _raw_practice("metta")])

        is_valid, issues = validate_catalog(path)

        assert not is_valid
        assert len(issues) == 2
        assert issues[0].startswith("Practice 'zazen' is invalid")
        assert issues[1] == "Duplicate practice id: metta"

    def test_list_entry_without_id(self, write_catalog):
        raw = _raw_practice()
        del raw["id"]
        assert validate_catalog(write_catalog([raw])) == (False, ["Practice #0 has no id"])

    def test_empty_catalog(self, write_catalog):
        assert validate_catalog(write_catalog({"practices": {}})) == (False, ["Catalog contains no practices"])

    def test_unreadable_file(self, tmp_path):
        is_valid, issues = validate_catalog(tmp_path / "missing.json")
        assert not is_valid
        assert "Cannot read catalog" in issues[0]
