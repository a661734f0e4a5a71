import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from creator_match.models.campaign import CampaignObjective, CampaignSettings
from creator_match.models.creator import Platform
from creator_match.services.scoring import (
    AUDIENCE_FIT,
    CONTENT_RELEVANCE,
    ENGAGEMENT_QUALITY,
    PREVIOUS_PERFORMANCE,
)

logger = logging.getLogger(__name__)

CampaignPredicate = Callable[[CampaignSettings], bool]

YOUNG_AUDIENCE_AGE = 30

_LEADING_AGE = re.compile(r"^\s*(\d+)")


@dataclass(frozen=True)
class PlatformRule:
    platform: Platform
    applies: CampaignPredicate
    target: str
    multiplier: float
    description: str


def always(campaign: CampaignSettings) -> bool:
    return True


def objective_is(objective: CampaignObjective) -> CampaignPredicate:
    def predicate(campaign: CampaignSettings) -> bool:
        return campaign.campaign_objective == objective

    return predicate


def targets_genre(genre: str) -> CampaignPredicate:
    def predicate(campaign: CampaignSettings) -> bool:
        return genre in (campaign.target_genres or [])

    return predicate


def targets_only_gender(gender: str) -> CampaignPredicate:
    def predicate(campaign: CampaignSettings) -> bool:
        return set(campaign.target_genders or []) == {gender}

    return predicate


def _age_lower_bound(label: str) -> Optional[int]:
    match = _LEADING_AGE.match(label)
    return int(match.group(1)) if match else None


def targets_age_under(age: int) -> CampaignPredicate:
    """True when any target bucket starts below ``age``.

    Range labels count by their lower bound, so "18-24" is under 30 and
    "35-44" is not. Labels with no leading number never match.
    """

    def predicate(campaign: CampaignSettings) -> bool:
        for label in campaign.target_age_groups or []:
            lower = _age_lower_bound(label)
            if lower is not None and lower < age:
                return True
        return False

    return predicate


# Evaluated top to bottom; every matching rule applies.
PLATFORM_RULES: tuple[PlatformRule, ...] = (
    PlatformRule(Platform.TIKTOK, targets_age_under(YOUNG_AUDIENCE_AGE), AUDIENCE_FIT, 1.1,
                 "younger audiences"),
    PlatformRule(Platform.TIKTOK, objective_is(CampaignObjective.BRAND_AWARENESS),
                 ENGAGEMENT_QUALITY, 1.1, "viral reach potential"),
    PlatformRule(Platform.TIKTOK, objective_is(CampaignObjective.PRODUCT_LAUNCH),
                 CONTENT_RELEVANCE, 1.05, "quick product impressions"),

    PlatformRule(Platform.YOUTUBE, always, PREVIOUS_PERFORMANCE, 1.2,
                 "long-form content shows execution quality"),
    PlatformRule(Platform.YOUTUBE, objective_is(CampaignObjective.CONVERSION),
                 CONTENT_RELEVANCE, 1.1, "in-depth reviews and calls to action"),
    PlatformRule(Platform.YOUTUBE, objective_is(CampaignObjective.COMMUNITY_ENGAGEMENT),
                 ENGAGEMENT_QUALITY, 1.05, "comment sections and subscriber loyalty"),

    PlatformRule(Platform.INSTAGRAM, objective_is(CampaignObjective.PRODUCT_LAUNCH),
                 CONTENT_RELEVANCE, 1.15, "aesthetic product showcases"),
    PlatformRule(Platform.INSTAGRAM, objective_is(CampaignObjective.BRAND_AWARENESS),
                 AUDIENCE_FIT, 1.05, "visual brand consistency"),
    PlatformRule(Platform.INSTAGRAM, objective_is(CampaignObjective.CONVERSION),
                 ENGAGEMENT_QUALITY, 1.1, "link clicks and story interaction"),

    PlatformRule(Platform.TWITCH, objective_is(CampaignObjective.COMMUNITY_ENGAGEMENT),
                 ENGAGEMENT_QUALITY, 1.2, "real-time chat interaction"),
    PlatformRule(Platform.TWITCH, targets_genre("gaming"), CONTENT_RELEVANCE, 1.15,
                 "gaming content match"),
    PlatformRule(Platform.TWITCH, targets_only_gender("male"), AUDIENCE_FIT, 1.05,
                 "predominantly male audience"),

    PlatformRule(Platform.TWITTER, objective_is(CampaignObjective.BRAND_AWARENESS),
                 ENGAGEMENT_QUALITY, 1.1, "quick viral potential"),
    PlatformRule(Platform.TWITTER, objective_is(CampaignObjective.PRODUCT_LAUNCH),
                 CONTENT_RELEVANCE, 1.05, "real-time buzz"),
    PlatformRule(Platform.TWITTER, always, AUDIENCE_FIT, 0.95,
                 "less control over targeting"),
)


class PlatformAdjuster:
    """Apply platform-specific multipliers to computed sub-scores.

    Adjusted values are not clamped; only the final weighted score is.
    """

    def __init__(self, rules: tuple[PlatformRule, ...] = PLATFORM_RULES):
        self.rules = rules

    def rules_for(self, platform: Optional[Platform]) -> list[PlatformRule]:
        if platform is None:
            return []
        return [rule for rule in self.rules if rule.platform == platform]

    def adjust(
        self,
        platform: Optional[Platform],
        scores: dict[str, float],
        campaign: CampaignSettings,
    ) -> dict[str, float]:
        """Return adjusted copies of ``scores``; on any fault, unadjusted copies."""
        adjusted = dict(scores)
        try:
            for rule in self.rules_for(platform):
                if rule.applies(campaign):
                    adjusted[rule.target] *= rule.multiplier
        except Exception as e:
            logger.warning("Platform adjustment failed for %s, using unadjusted scores: %s",
                           platform, e)
            return dict(scores)
        return adjusted
