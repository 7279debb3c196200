from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class Manifest(BaseModel):
    """Distribution manifest published at ``/{hash}/manifest.json``."""

    model_config = ConfigDict(extra="allow", frozen=True)

    timestamp: int
    files: list[str]
    languages: list[str]
    language_mapping: dict[str, dict[str, str]] = {}
    custom_languages: dict[str, Any] = {}

    @field_validator("language_mapping", "custom_languages", mode="before")
    @classmethod
    def _empty_array_is_empty_mapping(cls, value: Any) -> Any:
        # the CDN serializes empty mappings as []
        if value is None or value == []:
            return {}
        return value


class FilesResponse(BaseModel):
    files: list[str]


class LanguagesResponse(BaseModel):
    languages: list[str]


class StringResponse(BaseModel):
    key: list[str]
    value: Any = None


class FileTranslationResponse(BaseModel):
    file: str
    content: Any = None


class CacheClearResponse(BaseModel):
    cleared: bool
