from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import ValidationError

from creator_match.config import get_settings
from creator_match.models.campaign import CampaignSettings
from creator_match.services.creator_store import (
    CreatorFilter,
    CreatorStore,
    parse_follower_range,
)
from creator_match.services.matching import MatchScoreEngine

router = APIRouter(prefix="/api", tags=["creators"])


def get_store(request: Request) -> CreatorStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Creator data not loaded")
    return store


@lru_cache()
def get_engine() -> MatchScoreEngine:
    return MatchScoreEngine.from_settings(get_settings())


@router.get("/creators")
async def list_creators(
    store: CreatorStore = Depends(get_store),
    engine: MatchScoreEngine = Depends(get_engine),
):
    return [engine.describe(c) for c in store.all()]


@router.get("/creators/filter")
async def filter_creators(
    platforms: list[str] = Query([], description="Platforms to include"),
    categories: list[str] = Query([], description="Content categories (any match)"),
    genres: list[str] = Query([], description="Genres (any match)"),
    follower_range: Optional[list[str]] = Query(
        None, alias="followerRange", description="[min, max] as two values or JSON"
    ),
    engagement_rate_min: Optional[float] = Query(None, alias="engagementRateMin"),
    regions: list[str] = Query([], description="Creator locations"),
    verified_only: bool = Query(False, alias="verifiedOnly"),
    store: CreatorStore = Depends(get_store),
    engine: MatchScoreEngine = Depends(get_engine),
):
    criteria = CreatorFilter(
        platforms=platforms,
        categories=categories,
        genres=genres,
        engagement_rate_min=engagement_rate_min,
        regions=regions,
        verified_only=verified_only,
    )
    follower_bounds = parse_follower_range(follower_range)
    if follower_bounds:
        criteria.follower_min, criteria.follower_max = follower_bounds

    return [engine.describe(c) for c in store.filter(criteria)]


@router.post("/match")
async def match_creators(
    request: Request,
    match_score_min: Optional[int] = Query(None, alias="matchScoreMin"),
    include_breakdown: bool = Query(False, alias="includeBreakdown"),
    store: CreatorStore = Depends(get_store),
    engine: MatchScoreEngine = Depends(get_engine),
):
    """Score every creator against the posted campaign settings.

    Scores belong to this response only; the store is left untouched.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid campaign settings format")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Invalid campaign settings format")
    try:
        campaign = CampaignSettings.model_validate(payload)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid campaign settings format")

    creators = store.all()
    results = engine.score_all(creators, campaign)

    matched = []
    for creator, outcome in zip(creators, results):
        if match_score_min is not None and outcome.score < match_score_min:
            continue
        matched.append(engine.augment(creator, outcome, include_breakdown=include_breakdown))
    return matched
