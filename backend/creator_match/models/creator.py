from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Platform(str, Enum):
    TIKTOK = "TikTok"
    YOUTUBE = "YouTube"
    INSTAGRAM = "Instagram"
    TWITCH = "Twitch"
    TWITTER = "Twitter"
    OTHER = "other"


class AudienceDemographics(BaseModel):
    """Percentage breakdowns of a creator's audience.

    Totals are not required to reach 100 and insertion order is preserved,
    since the summarizer breaks ties by order.
    """

    model_config = ConfigDict(extra="allow")

    age: Optional[dict[str, float]] = None
    gender: Optional[dict[str, float]] = None


class CreatorProfile(BaseModel):
    """A creator record as supplied by the store.

    Every field except ``username`` may be missing; calculators decide what a
    missing value means. Unknown keys are kept so results can echo the record.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    username: Optional[str] = None
    platform: Optional[Platform] = None
    followers: Optional[int] = None
    engagement_rate: Optional[float] = Field(None, alias="engagementRate")
    hourly_rate: Optional[float] = Field(None, alias="hourlyRate")
    content_categories: Optional[list[str]] = Field(None, alias="contentCategories")
    audience_demographics: Optional[AudienceDemographics] = Field(
        None, alias="audienceDemographics"
    )
    verified: bool = False
    location: Optional[str] = None
    previous_campaign_performance: Optional[float] = Field(
        None, alias="previousCampaignPerformance"
    )
    match_score: Optional[int] = Field(None, alias="matchScore")

    @field_validator("platform", mode="before")
    @classmethod
    def _unknown_platform_is_other(cls, value):
        # Unknown platforms are still scored, they just get no adjustments
        if value is None or isinstance(value, Platform):
            return value
        for platform in Platform:
            if value == platform.value:
                return platform
        return Platform.OTHER

    @field_validator("verified", mode="before")
    @classmethod
    def _none_is_unverified(cls, value):
        return False if value is None else value
