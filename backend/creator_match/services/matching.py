"""Combine sub-scores into one 0-100 match score per creator.

Scoring never writes to the records it reads; each call returns its own
result set.
"""

import logging
import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from creator_match.config import Settings
from creator_match.models.campaign import CampaignSettings
from creator_match.models.creator import CreatorProfile
from creator_match.services.demographics import DemographicsService
from creator_match.services.platform_rules import PlatformAdjuster
from creator_match.services.scoring import SUB_SCORES, ScoringService, WeightProfile, weights_for

logger = logging.getLogger(__name__)

NEUTRAL_MATCH_SCORE = 50
MATCH_ERROR = "Failed to calculate match score"

CreatorRecord = Union[Mapping[str, Any], CreatorProfile]


@dataclass(frozen=True)
class MatchOutcome:
    username: Optional[str]
    score: int
    age: Optional[str] = None
    gender: Optional[str] = None
    sub_scores: dict[str, float] = field(default_factory=dict)
    weights: Optional[WeightProfile] = None
    fallbacks: dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.error is not None

    def breakdown(self) -> dict:
        return {
            "subScores": dict(self.sub_scores),
            "weights": self.weights.as_dict() if self.weights else None,
            "fallbacks": dict(self.fallbacks),
        }


@dataclass(frozen=True)
class MatchResultSet:
    outcomes: tuple[MatchOutcome, ...]

    def __iter__(self) -> Iterator[MatchOutcome]:
        return iter(self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)

    @property
    def scores(self) -> dict[str, int]:
        """username -> score for every creator that has a username."""
        return {o.username: o.score for o in self.outcomes if o.username is not None}

    @property
    def degraded(self) -> list[MatchOutcome]:
        return [o for o in self.outcomes if o.degraded]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _username_of(record: Any) -> Optional[str]:
    if isinstance(record, CreatorProfile):
        return record.username
    if isinstance(record, Mapping):
        username = record.get("username")
        return username if isinstance(username, str) else None
    return None


class MatchScoreEngine:
    def __init__(
        self,
        scoring: Optional[ScoringService] = None,
        adjuster: Optional[PlatformAdjuster] = None,
        demographics: Optional[DemographicsService] = None,
        neutral_score: int = NEUTRAL_MATCH_SCORE,
    ):
        self.scoring = scoring or ScoringService()
        self.adjuster = adjuster or PlatformAdjuster()
        self.demographics = demographics or DemographicsService()
        self.neutral_score = neutral_score

    @classmethod
    def from_settings(cls, settings: Settings) -> "MatchScoreEngine":
        return cls(
            scoring=ScoringService(
                engagement_rate_ceiling=settings.engagement_rate_ceiling,
                follower_ceiling=settings.follower_ceiling,
            ),
            neutral_score=settings.neutral_match_score,
        )

    @staticmethod
    def _profile(record: CreatorRecord) -> CreatorProfile:
        if isinstance(record, CreatorProfile):
            return record
        return CreatorProfile.model_validate(record)

    def _fallback(self, username: Optional[str], reason: str) -> MatchOutcome:
        logger.warning("Match score for %s fell back to neutral: %s", username, reason)
        return MatchOutcome(username=username, score=self.neutral_score, error=reason)

    def evaluate(self, record: CreatorRecord, campaign: CampaignSettings) -> MatchOutcome:
        """Score one creator. Never raises; faults give the neutral score."""
        username = _username_of(record)
        try:
            creator = self._profile(record)
            weights = weights_for(campaign.campaign_objective)
            sub_scores = self.scoring.calculate_sub_scores(creator, campaign)
            adjusted = self.adjuster.adjust(
                creator.platform,
                {name: sub.value for name, sub in sub_scores.items()},
                campaign,
            )
            total = sum(adjusted[name] * getattr(weights, name) for name in SUB_SCORES)
            score = min(100, max(0, _round_half_up(total * 100)))
            audience = self.demographics.summarize_audience(creator.audience_demographics)
        except (ValueError, TypeError, ArithmeticError, KeyError) as e:
            return self._fallback(username, str(e))
        except Exception as e:
            logger.exception("Unexpected error scoring creator %s", username)
            return self._fallback(username, f"unexpected error: {e}")

        return MatchOutcome(
            username=username,
            score=score,
            age=audience["age"],
            gender=audience["gender"],
            sub_scores=adjusted,
            weights=weights,
            fallbacks={name: sub.fallback for name, sub in sub_scores.items() if sub.fallback},
        )

    def compute(self, record: CreatorRecord, campaign: CampaignSettings) -> int:
        return self.evaluate(record, campaign).score

    def score_all(
        self, records: Iterable[CreatorRecord], campaign: CampaignSettings
    ) -> MatchResultSet:
        outcomes = tuple(self.evaluate(record, campaign) for record in records)
        degraded = sum(1 for o in outcomes if o.degraded)
        logger.info("Scored %d creators (%d fell back to neutral)", len(outcomes), degraded)
        return MatchResultSet(outcomes)

    def describe(self, record: CreatorRecord) -> dict:
        """A record with its audience summaries and no match score."""
        result = self._as_dict(record)
        try:
            audience = self.demographics.summarize_audience(
                self._profile(record).audience_demographics
            )
        except (ValueError, TypeError) as e:
            logger.warning("Could not summarize audience for %s: %s", _username_of(record), e)
            audience = {"age": None, "gender": None}
        result.update(audience)
        result["matchScore"] = None
        return result

    def augment(
        self,
        record: CreatorRecord,
        outcome: MatchOutcome,
        include_breakdown: bool = False,
    ) -> dict:
        """The record plus age, gender, matchScore and, if degraded, matchError."""
        result = self._as_dict(record)
        result["age"] = outcome.age
        result["gender"] = outcome.gender
        result["matchScore"] = outcome.score
        if outcome.degraded:
            result["matchError"] = MATCH_ERROR
        elif include_breakdown:
            result["scoreBreakdown"] = outcome.breakdown()
        return result

    @staticmethod
    def _as_dict(record: Any) -> dict:
        if isinstance(record, CreatorProfile):
            return record.model_dump(by_alias=True, mode="json")
        if isinstance(record, Mapping):
            return dict(record)
        return {}
