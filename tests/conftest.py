from collections.abc import Mapping
from unittest.mock import AsyncMock

import httpx
import pytest

from crowdin_ota import routes
from crowdin_ota.config import settings

HASH = "e-1234abcd"
BASE = f"https://distributions.crowdin.net/{HASH}"
MANIFEST_URL = f"{BASE}/manifest.json"
TIMESTAMP = 1700000000

SAMPLE_MANIFEST = {
    "files": ["/main.json", "/menu.json", "/readme.txt"],
    "languages": ["en", "de"],
    "language_mapping": [],
    "custom_languages": [],
    "timestamp": TIMESTAMP,
}


def content_url(lang: str, file: str) -> str:
    return f"{BASE}/content/{lang}{file}"


def json_response(data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=data)


def text_response(text: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, text=text)


def mock_cdn(routes_by_url: Mapping[str, httpx.Response]) -> AsyncMock:
    """Create a mock httpx.AsyncClient answering GETs from ``routes_by_url``.

    URLs are matched without their query string; anything unknown is a 404.
    """
    async def get(url: str, *args, **kwargs) -> httpx.Response:
        response = routes_by_url.get(url.split("?", 1)[0])
        return response if response is not None else httpx.Response(404, text="Not Found")

    client = AsyncMock()
    client.get.side_effect = get
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


def get_count(client: AsyncMock, url: str) -> int:
    """Number of GETs issued for ``url`` (query string ignored)."""
    return sum(1 for call in client.get.call_args_list if call[0][0].split("?", 1)[0] == url)


def sample_cdn(manifest: dict | None = None, extra: Mapping[str, httpx.Response] | None = None) -> AsyncMock:
    """A CDN serving the sample manifest plus English and German content."""
    responses = {
        MANIFEST_URL: json_response(manifest or SAMPLE_MANIFEST),
        content_url("en", "/main.json"): json_response({"hello": "Hello", "menu": {"title": "Main"}}),
        content_url("en", "/menu.json"): json_response({"menu": {"quit": "Quit"}}),
        content_url("en", "/readme.txt"): text_response("Read me"),
        content_url("de", "/main.json"): json_response({"hello": "Hallo", "menu": {"title": "Haupt"}}),
        content_url("de", "/menu.json"): json_response({"menu": {"quit": "Beenden"}}),
    }
    responses.update(extra or {})
    return mock_cdn(responses)


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch):
    for name in ("CROWDIN_OTA_HASH", "CROWDIN_OTA_LANGUAGE", "CROWDIN_OTA_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr(settings, name, None)
    routes.reset_client()
    yield
    routes.reset_client()
