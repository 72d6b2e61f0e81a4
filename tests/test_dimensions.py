"""Tests for the four dimension scorers."""

import pytest

from practice_recommender import dimensions
from practice_recommender.config import GoalMatchingConfig
from practice_recommender.schema import (
    CulturalBackground,
    CulturalContext,
    DifficultyLevel,
    Goal,
    LocationAccess,
    RetreatWillingness,
    Structure,
    Temperament,
    TimeAvailable,
    TimeToResults,
    UserProfile,
)


class TestGoalAlignment:
    """Tests for keyword-based goal alignment."""

    def test_no_goals_is_neutral(self, make_practice):
        practice = make_practice(benefits=["Reduced anxiety"])
        assert dimensions.goal_alignment(None, practice) == 0.5
        assert dimensions.goal_alignment([], practice) == 0.5

    def test_credit_per_keyword(self, make_practice):
        """Three stress keywords earn 0.3 each."""
        practice = make_practice(benefits=["Reduced anxiety", "Lower cortisol levels", "Relaxation response"])
        score = dimensions.goal_alignment([Goal.STRESS_REDUCTION], practice)
        assert score == pytest.approx(0.9)

    def test_goal_score_is_capped(self, make_practice):
        practice = make_practice(benefits=["Reduced anxiety", "Lower cortisol", "Stress reduction", "Relaxation"])
        assert dimensions.goal_alignment([Goal.STRESS_REDUCTION], practice) == 1.0

    def test_matching_is_case_insensitive(self, make_practice):
        practice = make_practice(benefits=["REDUCED ANXIETY"])
        assert dimensions.goal_alignment([Goal.STRESS_REDUCTION], practice) == pytest.approx(0.3)

    def test_stated_goals_are_searched(self, make_practice):
        practice = make_practice(goals=["Cultivate compassion and empathy"])
        assert dimensions.goal_alignment([Goal.COMPASSION], practice) == pytest.approx(0.6)

    def test_average_over_goals(self, make_practice):
        """A goal with no matches pulls the average down."""
        practice = make_practice(benefits=["Reduced anxiety", "Lower cortisol levels", "Relaxation response"])
        score = dimensions.goal_alignment([Goal.STRESS_REDUCTION, Goal.FOCUS], practice)
        assert score == pytest.approx(0.45)

    def test_no_match_scores_zero(self, make_practice):
        practice = make_practice(benefits=["Better posture"])
        assert dimensions.goal_alignment([Goal.HEALING], practice) == 0.0

    def test_custom_credit(self, make_practice):
        practice = make_practice(benefits=["Reduced anxiety", "Relaxation"])
        matching = GoalMatchingConfig(match_credit=0.5, goal_cap=0.8)
        assert dimensions.goal_alignment([Goal.STRESS_REDUCTION], practice, matching) == 0.8


class TestPersonalityFit:
    """Tests for structure, temperament and patience matching."""

    @pytest.mark.parametrize("preference,structure,expected", [
        (2, Structure.HIGHLY_STRUCTURED, 1.0),
        (9, Structure.HIGHLY_STRUCTURED, 0.125),
        (5, Structure.MINIMALLY_STRUCTURED, 0.5),
        (10, Structure.HIGHLY_STRUCTURED, 0.0),
        (5, Structure.MODERATELY_STRUCTURED, 1.0),
    ])
    def test_structure_preference(self, preference, structure, expected):
        assert dimensions.match_structure_preference(preference, structure) == pytest.approx(expected)

    def test_temperament_partial_overlap(self, make_practice):
        practice = make_practice(approach=["concentration"])
        assert dimensions.match_temperament(Temperament.CONTEMPLATIVE, practice) == pytest.approx(1 / 3)

    def test_temperament_full_overlap(self, make_practice):
        practice = make_practice(approach=["body", "concentration"])
        assert dimensions.match_temperament(Temperament.ACTIVE, practice) == 1.0

    def test_temperament_no_overlap(self, make_practice):
        practice = make_practice(approach=["awareness"])
        assert dimensions.match_temperament(Temperament.DEVOTIONAL, practice) == 0.0

    @pytest.mark.parametrize("time,results,expected", [
        (TimeAvailable.FIVE_TO_TEN, TimeToResults.QUICK, 1.0),
        (TimeAvailable.FIVE_TO_TEN, TimeToResults.MODERATE, 0.6),
        (TimeAvailable.FIVE_TO_TEN, TimeToResults.LONG_TERM, 0.3),
        (TimeAvailable.THIRTY_TO_FORTY_FIVE, TimeToResults.LONG_TERM, 0.6),
        (TimeAvailable.SIXTY_PLUS, TimeToResults.LONG_TERM, 1.0),
        (TimeAvailable.VARIABLE, TimeToResults.MODERATE, 1.0),
    ])
    def test_time_expectation(self, time, results, expected):
        assert dimensions.match_time_expectation(time, results) == expected

    def test_empty_profile_is_neutral(self, make_practice):
        assert dimensions.personality_fit(UserProfile(), make_practice()) == 0.5

    def test_averages_present_signals(self, make_practice):
        """Minimal-structure user against a highly structured concentration practice."""
        profile = UserProfile.model_validate({
            "personality": {"structurePreference": 9, "temperament": "contemplative"},
        })
        practice = make_practice(approach=["concentration"], structure="highly-structured")
        assert dimensions.personality_fit(profile, practice) == pytest.approx((0.125 + 1 / 3) / 2)


class TestPracticalFit:
    """Tests for teacher, retreat and time commitment matching."""

    @pytest.mark.parametrize("access,expected", [
        (LocationAccess.GOOD, 1.0),
        (LocationAccess.TRAVEL, 1.0),
        (LocationAccess.LIMITED, 0.5),
        (LocationAccess.SELF_GUIDED, 0.3),
    ])
    def test_teacher_required(self, access, expected):
        assert dimensions.match_teacher_requirement(access, True) == expected

    def test_teacher_not_required(self):
        assert dimensions.match_teacher_requirement(LocationAccess.SELF_GUIDED, False) == 1.0

    @pytest.mark.parametrize("willingness,expected", [
        (RetreatWillingness.YES_INTERESTED, 1.0),
        (RetreatWillingness.MAYBE, 0.7),
        (RetreatWillingness.PROBABLY_NOT, 0.4),
        (RetreatWillingness.NO, 0.2),
    ])
    def test_retreat_friendly(self, willingness, expected):
        assert dimensions.match_retreat_requirement(willingness, True) == expected

    def test_not_retreat_friendly(self):
        assert dimensions.match_retreat_requirement(RetreatWillingness.NO, False) == 1.0

    @pytest.mark.parametrize("time,difficulty,expected", [
        (TimeAvailable.FIVE_TO_TEN, DifficultyLevel.BEGINNER_FRIENDLY, 1.0),
        (TimeAvailable.FIVE_TO_TEN, DifficultyLevel.INTERMEDIATE, 0.6),
        (TimeAvailable.FIVE_TO_TEN, DifficultyLevel.ADVANCED, 0.3),
        (TimeAvailable.FIFTEEN_TO_TWENTY, DifficultyLevel.ADVANCED, 0.6),
    ])
    def test_time_commitment(self, time, difficulty, expected):
        assert dimensions.match_time_commitment(time, difficulty) == expected

    def test_empty_profile_is_neutral(self, make_practice):
        assert dimensions.practical_fit(UserProfile(), make_practice(teacher=True)) == 0.5

    def test_all_signals_poor(self, make_practice):
        profile = UserProfile.model_validate({
            "practical": {
                "timeAvailable": "5-10",
                "retreatWillingness": "no",
                "locationAccess": "self-guided",
            },
        })
        practice = make_practice(teacher=True, retreat=True, difficulty="advanced")
        assert dimensions.practical_fit(profile, practice) == pytest.approx((0.3 + 0.2 + 0.3) / 3)


class TestCulturalAlignment:
    """Tests for background matrix and spiritual openness."""

    @pytest.mark.parametrize("background,context,expected", [
        (CulturalBackground.SECULAR, CulturalContext.SECULAR, 1.0),
        (CulturalBackground.ABRAHAMIC, CulturalContext.HINDU, 0.4),
        (CulturalBackground.SPIRITUAL, CulturalContext.MIXED, 1.0),
        (CulturalBackground.AGNOSTIC, CulturalContext.BUDDHIST, 0.6),
        (CulturalBackground.HINDU, CulturalContext.SECULAR, 0.7),
    ])
    def test_background_matrix(self, background, context, expected):
        assert dimensions.match_cultural_context(background, context) == expected

    @pytest.mark.parametrize("openness,context,expected", [
        (5, CulturalContext.SECULAR, 1.0),
        (6, CulturalContext.SECULAR, 0.7),
        (1, CulturalContext.MIXED, 0.8),
        (10, CulturalContext.MIXED, 0.8),
        (5, CulturalContext.BUDDHIST, 1.0),
        (4, CulturalContext.HINDU, 0.4),
        (1, CulturalContext.BUDDHIST, 0.3),
    ])
    def test_spiritual_openness(self, openness, context, expected):
        assert dimensions.match_spiritual_openness(openness, context) == pytest.approx(expected)

    def test_empty_profile_is_neutral(self, make_practice):
        assert dimensions.cultural_alignment(UserProfile(), make_practice(context="hindu")) == 0.5

    def test_averages_both_signals(self, make_practice):
        profile = UserProfile.model_validate({
            "background": {"cultural": "abrahamic", "spiritualOpenness": 2},
        })
        practice = make_practice(context="buddhist")
        assert dimensions.cultural_alignment(profile, practice) == pytest.approx(0.35)
