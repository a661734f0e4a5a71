import pytest

from creator_match.models.campaign import CampaignObjective
from creator_match.models.creator import AudienceDemographics
from creator_match.services.scoring import (
    DEFAULT_WEIGHTS,
    WEIGHT_PROFILES,
    ScoringError,
    ScoringService,
    weights_for,
)


@pytest.fixture
def scoring():
    return ScoringService()


@pytest.mark.parametrize("rate", [100, 150, 299.99, 300])
def test_budget_fit_is_full_inside_range(scoring, rate):
    assert scoring.calculate_budget_fit(rate, [100, 300]).value == 1.0


def test_budget_fit_decreases_outside_range_and_floors_at_zero(scoring):
    below = [scoring.calculate_budget_fit(rate, [200, 300]).value for rate in (150, 100, 0)]
    above = [scoring.calculate_budget_fit(rate, [200, 300]).value for rate in (450, 600, 900)]

    assert below == pytest.approx([0.75, 0.5, 0.0])
    assert above == pytest.approx([0.5, 0.0, 0.0])


@pytest.mark.parametrize("budget", [[100], None, [], [100, 200, 300], ["a", "b"], [True, 5], "100-300"])
def test_budget_fit_is_neutral_for_malformed_budget(scoring, budget):
    result = scoring.calculate_budget_fit(10_000, budget)

    assert result.value == 0.5
    assert result.fallback


def test_budget_fit_zero_bounds_score_zero(scoring):
    assert scoring.calculate_budget_fit(-5, [0, 100]).value == 0.0
    assert scoring.calculate_budget_fit(10, [0, 0]).value == 0.0


def test_budget_fit_needs_hourly_rate(scoring):
    with pytest.raises(ScoringError):
        scoring.calculate_budget_fit(None, [100, 300])


def test_content_relevance(scoring):
    assert scoring.calculate_content_relevance([], ["tech"]).value == 1.0
    assert scoring.calculate_content_relevance(None, []).value == 1.0
    assert scoring.calculate_content_relevance(["tech"], []).value == 0.0
    assert scoring.calculate_content_relevance(["tech"], None).value == 0.0
    assert scoring.calculate_content_relevance(["tech", "ai"], ["ai", "tech", "music"]).value == 1.0
    assert scoring.calculate_content_relevance(
        ["tech", "gaming"], ["tech", "music"]
    ).value == pytest.approx(0.5)


def test_audience_fit_neutral_without_targets_or_demographics(scoring):
    demographics = AudienceDemographics(age={"18-24": 100}, gender={"male": 100})

    assert scoring.calculate_audience_fit(None, ["18-24"], ["male"]).value == 1.0
    assert scoring.calculate_audience_fit(demographics, None, ["male"]).value == 1.0
    assert scoring.calculate_audience_fit(demographics, ["18-24"], None).value == 1.0
    assert scoring.calculate_audience_fit(demographics, [], []).value == 1.0


def test_audience_fit_age_is_normalized_by_distribution_total(scoring):
    demographics = AudienceDemographics(age={"18-24": 60, "25-34": 20}, gender={"male": 50})

    result = scoring.calculate_audience_fit(demographics, ["18-24"], [])

    # 60 / 80 for age, neutral 0.5 for gender
    assert result.value == pytest.approx(0.625)


def test_audience_fit_gender_is_normalized_by_fixed_hundred(scoring):
    demographics = AudienceDemographics(age={"18-24": 100}, gender={"male": 40, "female": 40})

    result = scoring.calculate_audience_fit(demographics, [], ["male"])

    assert result.value == pytest.approx((0.5 + 0.4) / 2)


def test_audience_fit_zero_age_total_uses_hundred(scoring):
    demographics = AudienceDemographics(age={"18-24": 0}, gender={})

    assert scoring.calculate_audience_fit(demographics, ["18-24"], []).value == pytest.approx(0.25)


def test_audience_fit_both_dimensions(scoring):
    demographics = AudienceDemographics(
        age={"18-24": 30, "25-34": 50, "35-44": 20},
        gender={"female": 70, "male": 30},
    )

    result = scoring.calculate_audience_fit(demographics, ["18-24", "25-34"], ["female"])

    assert result.value == pytest.approx((0.8 + 0.7) / 2)


def test_audience_fit_needs_age_distribution_when_targeting_age(scoring):
    with pytest.raises(ScoringError):
        scoring.calculate_audience_fit(AudienceDemographics(gender={"male": 100}), ["18-24"], [])


def test_engagement_quality(scoring):
    assert scoring.calculate_engagement_quality(5, 500_000).value == pytest.approx(0.308333, abs=1e-6)
    assert scoring.calculate_engagement_quality(30, 5_000_000).value == pytest.approx(1.0)
    assert scoring.calculate_engagement_quality(0, 0).value == 0.0


def test_engagement_quality_uses_configured_ceilings():
    scoring = ScoringService(engagement_rate_ceiling=10.0, follower_ceiling=1_000_000)

    assert scoring.calculate_engagement_quality(5, 500_000).value == pytest.approx(0.5)


def test_engagement_quality_needs_metrics(scoring):
    with pytest.raises(ScoringError):
        scoring.calculate_engagement_quality(None, 1000)


def test_previous_performance_is_not_clamped(scoring):
    assert scoring.calculate_previous_performance(80).value == pytest.approx(0.8)
    assert scoring.calculate_previous_performance(150).value == pytest.approx(1.5)


def test_every_objective_has_a_weight_profile_summing_to_one():
    assert set(WEIGHT_PROFILES) == set(CampaignObjective)
    for profile in [*WEIGHT_PROFILES.values(), DEFAULT_WEIGHTS]:
        assert sum(profile.as_dict().values()) == pytest.approx(1.0)


def test_weights_for_objective():
    assert weights_for(None) is DEFAULT_WEIGHTS
    assert weights_for(CampaignObjective.PRODUCT_LAUNCH).content_relevance == 0.24
    assert weights_for(CampaignObjective.COMMUNITY_ENGAGEMENT).audience_fit == 0.24
