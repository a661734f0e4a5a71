import json
import logging
import math
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("username", "platform", "followers")


class CreatorFilter(BaseModel):
    platforms: list[str] = []
    categories: list[str] = []
    genres: list[str] = []
    follower_min: int = 0
    follower_max: Optional[int] = None
    engagement_rate_min: Optional[float] = None
    regions: list[str] = []
    verified_only: bool = False


def parse_follower_range(values: Optional[list[str]]) -> Optional[tuple[int, Optional[int]]]:
    """Parse ``followerRange`` given as two query values or one JSON "[min, max]".

    Returns None when the range cannot be read, in which case no follower
    filter applies. A negative min becomes 0, a max of 0 means unbounded and
    a max below min becomes min.
    """
    if not values:
        return None
    if len(values) == 1:
        try:
            values = json.loads(values[0])
        except (TypeError, ValueError) as e:
            logger.warning("Ignoring unparsable follower range %r: %s", values[0], e)
            return None
        if not isinstance(values, list) or len(values) < 2:
            return None

    min_followers = _as_int(values[0]) or 0
    # A zero or unreadable max means no upper bound
    max_followers = _as_int(values[1]) or None
    if min_followers < 0:
        min_followers = 0
    if max_followers is not None and max_followers < min_followers:
        max_followers = min_followers
    return min_followers, max_followers


def _as_int(value: Any) -> Optional[int]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _categories(record: Mapping) -> list:
    categories = record.get("contentCategories")
    return categories if isinstance(categories, list) else []


class CreatorStore:
    """Read-only, ordered collection of creator records.

    Records are kept as loaded; nothing here validates them beyond logging
    the ones missing identifying fields.
    """

    def __init__(self, records: Optional[Iterable[Mapping]] = None):
        self._records: list[dict] = [dict(r) for r in records or [] if isinstance(r, Mapping)]

    @classmethod
    def from_json_file(cls, path: str) -> "CreatorStore":
        file_path = Path(path)
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.error("Creator data file not found: %s", file_path)
            return cls()
        except (OSError, ValueError) as e:
            logger.error("Failed to load creator data from %s: %s", file_path, e)
            return cls()

        if not isinstance(data, list):
            logger.error("Invalid creator data in %s: expected a list of creators", file_path)
            return cls()

        for index, record in enumerate(data):
            if not isinstance(record, Mapping):
                logger.warning("Skipping creator at index %d: not an object", index)
            elif not all(record.get(key) for key in REQUIRED_FIELDS):
                logger.warning("Creator at index %d is missing required fields", index)

        store = cls(data)
        logger.info("Loaded %d creators from %s", len(store), file_path)
        return store

    def __len__(self) -> int:
        return len(self._records)

    def all(self) -> list[dict]:
        return [dict(r) for r in self._records]

    def filter(self, criteria: CreatorFilter) -> list[dict]:
        creators = self._records

        if criteria.platforms:
            creators = [c for c in creators if c.get("platform") in criteria.platforms]

        for wanted in (criteria.categories, criteria.genres):
            if wanted:
                creators = [
                    c for c in creators
                    if any(category in wanted for category in _categories(c))
                ]

        if criteria.follower_min or criteria.follower_max is not None:
            upper = criteria.follower_max if criteria.follower_max is not None else math.inf
            creators = [
                c for c in creators
                if criteria.follower_min <= _as_number(c.get("followers")) <= upper
            ]

        if criteria.engagement_rate_min is not None:
            creators = [
                c for c in creators
                if _as_number(c.get("engagementRate")) >= criteria.engagement_rate_min
            ]

        if criteria.regions:
            creators = [c for c in creators if c.get("location") in criteria.regions]

        if criteria.verified_only:
            creators = [c for c in creators if c.get("verified") is True]

        return [dict(c) for c in creators]
