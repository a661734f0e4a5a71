import pytest

from creator_match.models.campaign import CampaignSettings


@pytest.fixture
def youtube_creator():
    return {
        "username": "techwithmaya",
        "platform": "YouTube",
        "followers": 500000,
        "engagementRate": 5,
        "hourlyRate": 200,
        "contentCategories": ["tech"],
        "previousCampaignPerformance": 80,
    }


@pytest.fixture
def conversion_campaign():
    return CampaignSettings.model_validate(
        {
            "budget": [100, 300],
            "targetGenres": ["tech"],
            "campaignObjective": "conversion",
        }
    )


@pytest.fixture
def creators():
    return [
        {
            "username": "dancewithleo",
            "platform": "TikTok",
            "followers": 1900000,
            "engagementRate": 11.4,
            "hourlyRate": 300,
            "contentCategories": ["dance", "music"],
            "audienceDemographics": {
                "age": {"13-17": 22, "18-24": 47, "25-34": 21, "35-44": 10},
                "gender": {"female": 58, "male": 40, "other": 2},
            },
            "verified": True,
            "location": "UK",
            "previousCampaignPerformance": 74,
        },
        {
            "username": "pixelraider",
            "platform": "Twitch",
            "followers": 310000,
            "engagementRate": 9.1,
            "hourlyRate": 220,
            "contentCategories": ["gaming", "esports"],
            "audienceDemographics": {
                "age": {"18-24": 44, "25-34": 31, "35-44": 10},
                "gender": {"male": 78, "female": 20},
            },
            "verified": False,
            "location": "US",
            "previousCampaignPerformance": 68,
        },
        {
            "username": "brokenrate",
            "platform": "Instagram",
            "followers": 42000,
            "engagementRate": 3.0,
            "hourlyRate": "call me",
            "contentCategories": ["beauty"],
            "verified": True,
            "location": "CA",
            "previousCampaignPerformance": 50,
        },
    ]
