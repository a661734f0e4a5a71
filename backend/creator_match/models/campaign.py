import logging
from enum import Enum
from numbers import Real
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class CampaignObjective(str, Enum):
    BRAND_AWARENESS = "brand_awareness"
    PRODUCT_LAUNCH = "product_launch"
    COMMUNITY_ENGAGEMENT = "community_engagement"
    CONVERSION = "conversion"


def _as_label_list(value: Any) -> Optional[list[str]]:
    """Normalize a targeting field to a de-duplicated list of labels.

    A bare string is treated as a one-element set, so ``"male"`` and
    ``["male"]`` target the same audience. ``None`` stays ``None`` (absent),
    which is different from an empty list (present, nothing selected).
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set, frozenset)):
        return None

    labels: list[str] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (str, Real)):
            continue
        label = str(item)
        if label not in labels:
            labels.append(label)
    return labels


class CampaignSettings(BaseModel):
    """Targeting criteria for one scoring request.

    Validation is shallow: odd field values are normalized or left for the
    calculators' fallbacks instead of rejecting the request.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    budget: Optional[Any] = None
    target_genres: Optional[list[str]] = Field(None, alias="targetGenres")
    target_age_groups: Optional[list[str]] = Field(None, alias="targetAgeGroups")
    target_genders: Optional[list[str]] = Field(None, alias="targetGenders")
    campaign_objective: Optional[CampaignObjective] = Field(
        None, alias="campaignObjective"
    )

    @field_validator("target_genres", "target_age_groups", "target_genders", mode="before")
    @classmethod
    def _normalize_labels(cls, value):
        return _as_label_list(value)

    @field_validator("campaign_objective", mode="before")
    @classmethod
    def _unknown_objective_is_default(cls, value):
        if value is None or isinstance(value, CampaignObjective):
            return value
        try:
            return CampaignObjective(value)
        except (ValueError, TypeError):
            logger.debug("Unrecognized campaign objective %r, using default weights", value)
            return None
