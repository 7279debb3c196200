"""Client for Crowdin Over-The-Air content delivery.

An ``OtaClient`` is bound to one distribution hash.  It resolves the
distribution manifest, downloads per-file translations and merges JSON
files into a single key→value mapping per language.

Two caches live on the instance:

- the manifest future, shared by every caller until it fails or caching
  is disabled;
- one future per ``(file, language)`` pair, used by the merged-strings
  operations until ``clear_strings_cache()`` is called.

Usage::

    client = OtaClient("e-1234abcd", {"languageCode": "de"})
    title = await client.get_string_by_key(["menu", "title"])
"""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import httpx

from crowdin_ota.config import ClientOptions, settings
from crowdin_ota.http import OtaHttpError, fetch_payload, fetch_response
from crowdin_ota.schemas import Manifest
from crowdin_ota.util import deep_merge, is_json_file, lookup_path, shallow_merge

logger = logging.getLogger("crowdin_ota.client")

Payload = Any


@dataclass
class FileTranslation:
    file: str
    content: Payload


class OtaClient:
    BASE_URL = "https://distributions.crowdin.net"

    def __init__(
        self,
        hash: str,
        options: ClientOptions | Mapping[str, Any] | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not isinstance(hash, str):
            raise TypeError(f"invalid hash given to OtaClient: {hash!r}")

        self.options = ClientOptions.coerce(options)
        self._hash = hash
        self._locale = (
            self.options.language_code
            if self.options.language_code is not None
            else settings.preferred_language()
        )
        self._http_client = http_client
        self._timeout = self.options.timeout or settings.timeout()

        self._manifest_cache: asyncio.Future[Manifest] | None = None
        self._strings_cache: dict[str, dict[str, asyncio.Future[Payload]]] = {}

    @property
    def hash(self) -> str:
        return self._hash

    @property
    def locale(self) -> str:
        return self._locale

    @locale.setter
    def locale(self, value: str) -> None:
        self._locale = value

    def get_language_code(self, lang: str | None = None) -> str:
        """Return ``lang`` when given (even if empty), else the current locale."""
        return lang if lang is not None else self._locale

    # --- Manifest ---

    async def get_manifest(self) -> Manifest:
        """Return the distribution manifest, fetching it at most once while cached.

        Concurrent callers share one in-flight request.  A failed fetch is
        dropped from the cache so the next call retries.
        """
        if self._manifest_cache is None or self.options.disable_manifest_cache:
            future = asyncio.ensure_future(self._fetch_manifest())
            future.add_done_callback(self._forget_failed_manifest)
            self._manifest_cache = future
        return await asyncio.shield(self._manifest_cache)

    async def _fetch_manifest(self) -> Manifest:
        url = f"{self.BASE_URL}/{self._hash}/manifest.json"
        response = await fetch_response(url, client=self._http_client, timeout=self._timeout)
        manifest = Manifest.model_validate(response.json())
        logger.debug("Manifest for %s: %d files, %d languages", self._hash, len(manifest.files), len(manifest.languages))
        return manifest

    def _forget_failed_manifest(self, future: asyncio.Future) -> None:
        if future.cancelled() or future.exception() is not None:
            if self._manifest_cache is future:
                self._manifest_cache = None

    async def get_manifest_timestamp(self) -> int:
        return (await self.get_manifest()).timestamp

    async def list_files(self) -> list[str]:
        return list((await self.get_manifest()).files)

    async def list_languages(self) -> list[str]:
        return list((await self.get_manifest()).languages)

    async def get_language_mappings(self) -> dict[str, dict[str, str]]:
        return (await self.get_manifest()).language_mapping

    async def get_custom_languages(self) -> dict[str, Any]:
        return (await self.get_manifest()).custom_languages

    async def get_languages(self) -> list[Any]:
        """Not implemented: always resolves to an empty list."""
        return []

    async def get_json_files(self, file: str | None = None) -> list[str]:
        """Return the manifest's ``.json`` files, optionally only ``file``."""
        files = await self.list_files()
        return [f for f in files if (file is None or f == file) and is_json_file(f)]

    # --- Translations ---

    async def get_file_translations(self, file: str, lang: str | None = None) -> Payload:
        """Download one file for one language.

        Returns decoded JSON for JSON responses and raw text otherwise.  A
        missing or unreadable file resolves to None instead of raising;
        manifest failures still propagate.
        """
        lang = self.get_language_code(lang)
        timestamp = await self.get_manifest_timestamp()
        # language placeholders from get_language_mappings() are not substituted yet
        url = f"{self.BASE_URL}/{self._hash}/content/{lang}{file}?timestamp={timestamp}"
        try:
            return await fetch_payload(url, client=self._http_client, timeout=self._timeout)
        except (OtaHttpError, httpx.HTTPError, ValueError) as exc:
            logger.warning("No translations for %s [%s]: %s", file, lang, exc)
            return None

    async def get_language_translations(self, lang: str | None = None) -> list[FileTranslation]:
        lang = self.get_language_code(lang)
        files = await self.list_files()
        contents = await asyncio.gather(*(self.get_file_translations(f, lang) for f in files))
        return [FileTranslation(file=f, content=c) for f, c in zip(files, contents)]

    async def get_translations(self) -> dict[str, list[FileTranslation]]:
        languages = await self.list_languages()
        results = await asyncio.gather(*(self.get_language_translations(lang) for lang in languages))
        return dict(zip(languages, results))

    # --- Merged strings ---

    def _cached_file_translations(self, file: str, lang: str) -> asyncio.Future[Payload]:
        # get-or-create without a suspension point: concurrent callers share one fetch
        by_lang = self._strings_cache.setdefault(file, {})
        future = by_lang.get(lang)
        if future is None:
            logger.debug("Strings cache miss for %s [%s]", file, lang)
            future = asyncio.ensure_future(self.get_file_translations(file, lang))
            future.add_done_callback(lambda f: self._forget_failed_strings(file, lang, f))
            by_lang[lang] = future
        return future

    def _forget_failed_strings(self, file: str, lang: str, future: asyncio.Future) -> None:
        if not (future.cancelled() or future.exception() is not None):
            return
        by_lang = self._strings_cache.get(file)
        if by_lang is not None and by_lang.get(lang) is future:
            del by_lang[lang]

    async def get_strings_by_files_and_locale(
        self, files: Sequence[str], lang: str | None = None
    ) -> dict[str, Any]:
        """Merge the JSON content of ``files`` for one language.

        Files are applied strictly in order, so later files win on key
        collisions.  Files without usable content contribute nothing.
        """
        lang = self.get_language_code(lang)
        strings: dict[str, Any] = {}
        for file in files:
            if self.options.disable_strings_cache:
                content = await self.get_file_translations(file, lang)
            else:
                content = await asyncio.shield(self._cached_file_translations(file, lang))

            if not isinstance(content, Mapping):
                if content is not None:
                    logger.debug("Skipping non-mapping content of %s [%s]", file, lang)
                continue
            if self.options.disable_json_deep_merge:
                shallow_merge(strings, content)
            else:
                deep_merge(strings, content)
        return strings

    async def get_strings_by_locale(self, file: str | None = None, lang: str | None = None) -> dict[str, Any]:
        files = await self.get_json_files(file)
        return await self.get_strings_by_files_and_locale(files, lang)

    async def get_string_by_key(
        self,
        key: str | Sequence[str],
        file: str | None = None,
        lang: str | None = None,
    ) -> Any:
        """Look up ``key`` in the merged strings.

        ``key`` is a single key or a sequence of path segments into nested
        mappings.  Returns None as soon as a segment is missing.
        """
        path = [key] if isinstance(key, str) else list(key)
        if not path:
            return None
        strings = await self.get_strings_by_locale(file, lang)
        return lookup_path(strings, path)

    async def get_strings(self, file: str | None = None) -> dict[str, dict[str, Any]]:
        files = await self.get_json_files(file)
        languages = await self.list_languages()
        results = await asyncio.gather(
            *(self.get_strings_by_files_and_locale(files, lang) for lang in languages)
        )
        return dict(zip(languages, results))

    def clear_strings_cache(self) -> None:
        """Drop every cached file future; futures already handed out still resolve."""
        self._strings_cache.clear()
