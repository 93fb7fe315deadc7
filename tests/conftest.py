"""
Shared fixtures for the grabber test suite.
"""
import json
from collections.abc import Callable

import httpx
import pytest

from vodafone_epg.services.api_client import VodafoneApiClient
from vodafone_epg.services.fetch_types import ChannelEntry


BASE_URL = "https://epg.example.test/epg"
SUFFIX = ".tv.vodafone.pt"


def json_response(payload, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode("utf-8"),
        headers={"content-type": "application/json"},
    )


def envelope(*objects: dict) -> dict:
    return {"result": {"objects": list(objects)}}


@pytest.fixture
def sample_programme() -> dict:
    """Provider programme object with every mapped field populated."""
    return {
        "name": "Os Filhos do Rock",
        "description": "Drama sobre uma banda portuguesa.",
        "startDate": 1700000000,
        "endDate": 1700003600,
        "tags": {
            "genre": {"objects": [{"value": "Drama"}, {"value": "Música"}]},
            "country of production": {"objects": [{"value": "Portugal"}, {"value": "Espanha"}]},
            "parental Rating": {"objects": [{"value": 12}]},
            "actors": {"objects": [{"value": "Ana Moreira"}, {"value": "Rui Unas"}]},
            "director": {"objects": [{"value": "Patrícia Sequeira"}]},
        },
        "metas": {
            "display duration": {"value": "PT1H0M0S"},
            "year": {"value": 2013},
            "season number": {"value": 3},
            "episode num": {"value": 5},
        },
        "images": [
            {"url": "https://img.example.test/still", "imageTypeName": "cc"},
            {"url": "https://img.example.test/poster", "imageTypeName": "ca"},
            {"url": "https://img.example.test/backdrop", "imageTypeName": "bg"},
        ],
    }


@pytest.fixture
def catalog() -> dict[str, ChannelEntry]:
    return {
        "abc": ChannelEntry(key="abc", name="Canal ABC", icon_url="https://img.example.test/abc.png"),
        "sicn": ChannelEntry(key="sicn", name="SIC Notícias", icon_url=None),
    }


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], VodafoneApiClient]:
    """Build an API client whose requests are answered by a handler."""
    clients = []

    def factory(handler, **kwargs) -> VodafoneApiClient:
        kwargs.setdefault("delay", 0)
        kwargs.setdefault("sleep", lambda seconds: None)
        client = VodafoneApiClient(BASE_URL, transport=httpx.MockTransport(handler), **kwargs)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()
