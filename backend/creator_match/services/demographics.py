from collections.abc import Mapping
from typing import Optional

from creator_match.models.creator import AudienceDemographics


UNKNOWN_LABEL = "unknown"

# Separator between the bounds of an age bucket label, e.g. "25-34"
AGE_RANGE_DELIMITER = "-"


class DemographicsService:
    """Reduce audience distributions to a single representative label."""

    def summarize(self, distribution: Optional[Mapping[str, float]]) -> tuple[str, float]:
        """Return (dominant_label, value).

        Ties keep the label seen first. Only an empty or missing distribution
        gives ("unknown", 0).
        """
        if not distribution:
            return UNKNOWN_LABEL, 0

        items = iter(distribution.items())
        best_label, best_value = next(items)
        for label, value in items:
            if value > best_value:
                best_label, best_value = label, value
        return best_label, best_value

    def dominant_age(self, distribution: Optional[Mapping[str, float]]) -> Optional[str]:
        """Representative age for the dominant bucket: "25-34" -> "25", "65+" -> "65+"."""
        label, _ = self.summarize(distribution)
        if label == UNKNOWN_LABEL:
            return None
        if AGE_RANGE_DELIMITER in label:
            return label.split(AGE_RANGE_DELIMITER)[0]
        return label

    def dominant_gender(self, distribution: Optional[Mapping[str, float]]) -> Optional[str]:
        label, _ = self.summarize(distribution)
        return None if label == UNKNOWN_LABEL else label

    def summarize_audience(self, demographics: Optional[AudienceDemographics]) -> dict:
        """Age and gender summaries for a creator's audience, None where unknown."""
        if demographics is None:
            return {"age": None, "gender": None}
        return {
            "age": self.dominant_age(demographics.age),
            "gender": self.dominant_gender(demographics.gender),
        }
