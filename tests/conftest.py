"""Shared fixtures: the shipped source profiles and page-state payloads shaped like the real sites."""

import copy
import json

import pytest

from config.settings import PROFILES_PATH
from pagefeed.profiles import load_profiles

KOHLER_EP1 = "https://www.abc.net.au/news/programs/kohler-report/rates-on-hold/103812944"
KOHLER_EP2 = "https://www.abc.net.au/news/programs/kohler-report/housing-squeeze/103790110"
KOHLER_EP3 = "https://www.abc.net.au/news/programs/kohler-report/iron-ore/103771502"
KOHLER_IMG = "https://live-production.wcms.abc-cdn.net.au/kohler-rates.jpg"

_KOHLER_STATE = {
    "props": {
        "pageProps": {
            "channelpage": {
                "headTagsPagePrepared": {
                    "title": "The Kohler Report",
                    "canonicalURL": "https://www.abc.net.au/news/programs/kohler-report",
                    "description": "Alan Kohler on finance and the economy.",
                },
                "components": [
                    {"documentId": "hdr", "component": {"name": "ProgramHeader", "props": {}}},
                    {
                        "documentId": "player",
                        "component": {
                            "name": "VideoPlayer",
                            "props": {
                                "video": {
                                    "title": "Rates on hold",
                                    "share": {"shareLink": KOHLER_EP1, "synopsis": "The RBA waits."},
                                    "postDate": {"publishedDate": "2024-05-07T08:30:00Z"},
                                    "config": {"image": KOHLER_IMG},
                                },
                                "list": [
                                    {
                                        "card": {"title": {"children": "Housing squeeze"}},
                                        "player": {
                                            "share": {"shareLink": KOHLER_EP2, "synopsis": "Rents &amp; prices."},
                                            "postDate": {"publishedDate": "2024-04-30T08:30:00.000Z"},
                                        },
                                    },
                                    {
                                        "card": {"title": {"children": "Rates on hold (again)"}},
                                        "player": {
                                            "share": {"shareLink": KOHLER_EP1, "synopsis": "Repeat card."},
                                            "postDate": {"publishedDate": "2024-05-07T08:30:00Z"},
                                        },
                                    },
                                    {
                                        "card": {"title": {"children": "Iron ore"}},
                                        "player": {"share": {"shareLink": KOHLER_EP3}},
                                    },
                                ],
                            },
                        },
                    },
                ],
            }
        },
        "__N_SSP": True,
    },
    "page": "/news/programs/[...channel]",
}

_MEDIAWATCH_STATE = {
    "props": {
        "pageProps": {
            "headTagsSocialPrepared": {
                "site": "Media Watch",
                "canonicalURL": "https://www.abc.net.au/mediawatch/episodes",
                "description": "Media Watch episodes.",
            },
            "data": {
                "componentsContent": [
                    {"key": "heading", "component": "PageHeading", "componentProps": {"title": "Episodes"}},
                    {
                        "key": "episodes",
                        "component": "EpisodeCollection",
                        "componentProps": {
                            "items": [
                                {
                                    "articleLink": "/mediawatch/episodes/ep-12/103884",
                                    "cardTitle": "Episode 12",
                                    "description": "Paul Barry on press releases.",
                                    "cardAttributionPrepared": {"publishedDate": "2024-05-06T10:05:00+10:00"},
                                },
                                {
                                    "articleLink": "/mediawatch/episodes/ep-11/103800",
                                    "cardTitle": "Episode 11",
                                    "description": "Paul Barry on polls.",
                                    "cardAttributionPrepared": {"publishedDate": "not a date"},
                                },
                                {"cardTitle": "Card without a link"},
                            ]
                        },
                    },
                ]
            },
        }
    },
    "page": "/mediawatch/episodes",
    "buildId": "abc123",
}


@pytest.fixture(scope="session")
def profiles():
    return load_profiles(PROFILES_PATH)


@pytest.fixture
def kohler(profiles):
    return profiles["abc-kohler-report"]


@pytest.fixture
def mediawatch(profiles):
    return profiles["abc-mediawatch"]


@pytest.fixture
def kohler_state():
    return copy.deepcopy(_KOHLER_STATE)


@pytest.fixture
def mediawatch_state():
    return copy.deepcopy(_MEDIAWATCH_STATE)


@pytest.fixture
def kohler_page():
    """Page with a bootstrap script that also mentions "components" ahead of the full state."""

    def build(state: dict) -> str:
        return (
            "<html><head><title>Kohler</title>"
            '<script>window.__boot = {"components": []};</script>'
            "</head><body><div id=\"root\"></div>"
            f"<script>{json.dumps(state)}</script>"
            "<script>console.log('analytics')</script>"
            "</body></html>"
        )

    return build


@pytest.fixture
def mediawatch_page():
    def build(state: dict) -> str:
        return (
            "<html><head><script src=\"/app.js\"></script></head><body>"
            f'<script id="__NEXT_DATA__" type="application/json">{json.dumps(state)}</script>'
            "</body></html>"
        )

    return build
