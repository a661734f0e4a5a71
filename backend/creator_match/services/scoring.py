from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from numbers import Real
from typing import Any, NamedTuple, Optional

from creator_match.models.campaign import CampaignObjective, CampaignSettings
from creator_match.models.creator import AudienceDemographics, CreatorProfile


BUDGET_FIT = "budget_fit"
CONTENT_RELEVANCE = "content_relevance"
AUDIENCE_FIT = "audience_fit"
ENGAGEMENT_QUALITY = "engagement_quality"
PREVIOUS_PERFORMANCE = "previous_performance"

SUB_SCORES = (
    BUDGET_FIT,
    CONTENT_RELEVANCE,
    AUDIENCE_FIT,
    ENGAGEMENT_QUALITY,
    PREVIOUS_PERFORMANCE,
)

NEUTRAL_BUDGET_FIT = 0.5
NEUTRAL_DIMENSION = 0.5

# Engagement rate dominates reach
ENGAGEMENT_SHARE = 0.7
FOLLOWER_SHARE = 0.3


class ScoringError(ValueError):
    """A creator record lacks a value a calculator cannot do without."""


class SubScore(NamedTuple):
    value: float
    # Why a fallback constant was used instead of a computed value, if it was
    fallback: Optional[str] = None


@dataclass(frozen=True)
class WeightProfile:
    budget_fit: float
    content_relevance: float
    audience_fit: float
    engagement_quality: float
    previous_performance: float

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


DEFAULT_WEIGHTS = WeightProfile(0.22, 0.22, 0.22, 0.18, 0.16)

WEIGHT_PROFILES: dict[CampaignObjective, WeightProfile] = {
    CampaignObjective.BRAND_AWARENESS: WeightProfile(0.22, 0.22, 0.22, 0.18, 0.16),
    CampaignObjective.PRODUCT_LAUNCH: WeightProfile(0.22, 0.24, 0.20, 0.18, 0.16),
    CampaignObjective.COMMUNITY_ENGAGEMENT: WeightProfile(0.20, 0.20, 0.24, 0.20, 0.16),
    CampaignObjective.CONVERSION: WeightProfile(0.22, 0.22, 0.20, 0.20, 0.16),
}


def weights_for(objective: Optional[CampaignObjective]) -> WeightProfile:
    """Weight vector for a campaign objective; no objective means the default."""
    if objective is None:
        return DEFAULT_WEIGHTS
    return WEIGHT_PROFILES[objective]


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _require(value: Any, field: str) -> float:
    if value is None:
        raise ScoringError(f"{field} is missing")
    return value


class ScoringService:
    def __init__(
        self,
        engagement_rate_ceiling: float = 15.0,
        follower_ceiling: int = 2_000_000,
    ):
        self.engagement_rate_ceiling = engagement_rate_ceiling
        self.follower_ceiling = follower_ceiling

    def calculate_budget_fit(self, hourly_rate: Optional[float], budget: Any) -> SubScore:
        """1 inside [min, max], falling linearly to 0 as the rate drifts outside."""
        if (
            not isinstance(budget, (list, tuple))
            or len(budget) != 2
            or not all(_is_number(bound) for bound in budget)
        ):
            return SubScore(NEUTRAL_BUDGET_FIT, "budget range not specified")

        min_budget, max_budget = budget
        rate = _require(hourly_rate, "hourlyRate")

        if rate < min_budget:
            if min_budget == 0:
                return SubScore(0.0, "zero minimum budget")
            return SubScore(max(0.0, 1 - (min_budget - rate) / min_budget))
        if rate > max_budget:
            if max_budget == 0:
                return SubScore(0.0, "zero maximum budget")
            return SubScore(max(0.0, 1 - (rate - max_budget) / max_budget))
        return SubScore(1.0)

    def calculate_content_relevance(
        self,
        target_genres: Optional[list[str]],
        content_categories: Optional[list[str]],
    ) -> SubScore:
        if not target_genres:
            return SubScore(1.0, "no target genres")
        if not content_categories:
            return SubScore(0.0)

        targets = set(target_genres)
        categories = set(content_categories)
        if targets <= categories:
            return SubScore(1.0)
        return SubScore(len(targets & categories) / len(targets))

    def calculate_audience_fit(
        self,
        demographics: Optional[AudienceDemographics],
        target_age_groups: Optional[list[str]],
        target_genders: Optional[list[str]],
    ) -> SubScore:
        """Mean of the age and gender shares that fall inside the targets.

        The age share is taken against the creator's own age total (100 when
        that total is zero); the gender share is always taken against 100.
        """
        if demographics is None or target_age_groups is None or target_genders is None:
            return SubScore(1.0, "audience targeting not specified")
        if not target_age_groups and not target_genders:
            return SubScore(1.0, "audience targeting not specified")

        age_score = NEUTRAL_DIMENSION
        gender_score = NEUTRAL_DIMENSION

        if target_age_groups:
            ages = _require(demographics.age, "audienceDemographics.age")
            matched = sum(ages.get(label, 0) for label in target_age_groups)
            total = sum(ages.values()) or 100
            age_score = matched / total

        if target_genders:
            genders = _require(demographics.gender, "audienceDemographics.gender")
            matched = sum(genders.get(label, 0) for label in target_genders)
            gender_score = matched / 100

        return SubScore((age_score + gender_score) / 2)

    def calculate_engagement_quality(
        self, engagement_rate: Optional[float], followers: Optional[int]
    ) -> SubScore:
        rate = _require(engagement_rate, "engagementRate")
        reach = _require(followers, "followers")
        normalized_engagement = min(1.0, rate / self.engagement_rate_ceiling)
        normalized_followers = min(1.0, reach / self.follower_ceiling)
        return SubScore(
            normalized_engagement * ENGAGEMENT_SHARE + normalized_followers * FOLLOWER_SHARE
        )

    def calculate_previous_performance(self, performance: Optional[float]) -> SubScore:
        # Not clamped: ratings above 100 carry through as scores above 1
        return SubScore(_require(performance, "previousCampaignPerformance") / 100)

    def calculate_sub_scores(
        self, creator: CreatorProfile, campaign: CampaignSettings
    ) -> dict[str, SubScore]:
        return {
            BUDGET_FIT: self.calculate_budget_fit(creator.hourly_rate, campaign.budget),
            CONTENT_RELEVANCE: self.calculate_content_relevance(
                campaign.target_genres, creator.content_categories
            ),
            AUDIENCE_FIT: self.calculate_audience_fit(
                creator.audience_demographics,
                campaign.target_age_groups,
                campaign.target_genders,
            ),
            ENGAGEMENT_QUALITY: self.calculate_engagement_quality(
                creator.engagement_rate, creator.followers
            ),
            PREVIOUS_PERFORMANCE: self.calculate_previous_performance(
                creator.previous_campaign_performance
            ),
        }
