"""Global configuration singleton for crowdin_ota.

Reads settings from environment variables by default.  When embedded,
the host can populate the singleton *before* creating clients so that
values don't have to live in the process environment.

    from crowdin_ota.config import settings
    settings.CROWDIN_OTA_LANGUAGE = "de"
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Optional

logger = logging.getLogger("crowdin_ota.config")

DEFAULT_LANGUAGE = "en"
DEFAULT_TIMEOUT = 30.0


class Settings:
    """Lightweight mutable config — one global instance."""

    CROWDIN_OTA_HASH: Optional[str] = None
    CROWDIN_OTA_LANGUAGE: Optional[str] = None
    CROWDIN_OTA_TIMEOUT: Optional[float] = None

    def get(self, name: str) -> Optional[str]:
        """Return the attribute value if set, otherwise fall back to env."""
        value = getattr(self, name, None)
        if value is not None:
            return value if not isinstance(value, float) else str(value)
        return os.getenv(name)

    def preferred_language(self) -> str:
        return self.get("CROWDIN_OTA_LANGUAGE") or DEFAULT_LANGUAGE

    def timeout(self) -> float:
        value = self.get("CROWDIN_OTA_TIMEOUT")
        if not value:
            return DEFAULT_TIMEOUT
        try:
            return float(value)
        except ValueError:
            logger.warning("Ignoring invalid CROWDIN_OTA_TIMEOUT %r, using %s", value, DEFAULT_TIMEOUT)
            return DEFAULT_TIMEOUT


settings = Settings()


# camelCase spellings accepted in option mappings
_OPTION_ALIASES = {
    "disableManifestCache": "disable_manifest_cache",
    "disableStringsCache": "disable_strings_cache",
    "disableJsonDeepMerge": "disable_json_deep_merge",
    "languageCode": "language_code",
}


@dataclass(frozen=True)
class ClientOptions:
    disable_manifest_cache: bool = False
    disable_strings_cache: bool = False
    disable_json_deep_merge: bool = False
    language_code: str | None = None
    timeout: float | None = None

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "ClientOptions":
        """Build options from a plain mapping; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in params.items():
            name = _OPTION_ALIASES.get(key, key)
            if name in known:
                values[name] = value
        for flag in ("disable_manifest_cache", "disable_strings_cache", "disable_json_deep_merge"):
            if flag in values:
                values[flag] = bool(values[flag])
        if values.get("language_code") is None:
            values.pop("language_code", None)
        return cls(**values)

    @classmethod
    def coerce(cls, options: "ClientOptions | Mapping[str, Any] | None") -> "ClientOptions":
        if options is None:
            return cls()
        if isinstance(options, ClientOptions):
            return options
        if isinstance(options, Mapping):
            return cls.from_mapping(options)
        raise TypeError(f"options must be ClientOptions or a mapping, not {type(options).__name__}")
