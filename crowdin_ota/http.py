"""HTTP helpers for talking to the distribution CDN."""

import logging
from typing import Any

import httpx

logger = logging.getLogger("crowdin_ota.http")

JSON_MEDIA_TYPE = "application/json"


class OtaHttpError(Exception):
    def __init__(self, status_code: int, url: str):
        self.status_code = status_code
        self.url = url
        super().__init__(f"bad http response code {status_code} for {url}")


def raise_on_error(response: httpx.Response, url: str) -> None:
    """Raise OtaHttpError unless the CDN answered 200."""
    if response.status_code == 200:
        return
    raise OtaHttpError(response.status_code, url)


def is_json_response(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower() == JSON_MEDIA_TYPE


def decode_payload(response: httpx.Response) -> Any:
    """Return the decoded JSON body for JSON responses, raw text otherwise."""
    if is_json_response(response):
        return response.json()
    return response.text


async def fetch_response(
    url: str,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> httpx.Response:
    """GET ``url`` and return the response once it is known to be a 200.

    Uses ``client`` when given (the caller owns its lifecycle), otherwise
    opens a short-lived client for the single request.
    """
    logger.debug("GET %s", url)
    if client is not None:
        response = await client.get(url)
    else:
        async with httpx.AsyncClient(timeout=timeout) as http:
            response = await http.get(url)
    raise_on_error(response, url)
    return response


async def fetch_payload(
    url: str,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> Any:
    response = await fetch_response(url, client=client, timeout=timeout)
    return decode_payload(response)
