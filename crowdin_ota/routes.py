from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from crowdin_ota.client import OtaClient
from crowdin_ota.config import settings
from crowdin_ota.schemas import (
    CacheClearResponse,
    FilesResponse,
    FileTranslationResponse,
    LanguagesResponse,
    Manifest,
    StringResponse,
)

router = APIRouter()

_client: OtaClient | None = None


def get_client() -> OtaClient:
    """Return the process-wide client, creating it from settings on first use."""
    global _client
    if _client is None:
        ota_hash = settings.get("CROWDIN_OTA_HASH")
        if not ota_hash:
            raise HTTPException(status_code=503, detail="CROWDIN_OTA_HASH is not configured")
        _client = OtaClient(ota_hash)
    return _client


def reset_client() -> None:
    global _client
    _client = None


@router.get("/api/manifest", response_model=Manifest)
async def get_manifest(client: OtaClient = Depends(get_client)) -> Manifest:
    return await client.get_manifest()


@router.get("/api/files", response_model=FilesResponse)
async def list_files(json_only: bool = False, client: OtaClient = Depends(get_client)) -> FilesResponse:
    files = await client.get_json_files() if json_only else await client.list_files()
    return FilesResponse(files=files)


@router.get("/api/languages", response_model=LanguagesResponse)
async def list_languages(client: OtaClient = Depends(get_client)) -> LanguagesResponse:
    return LanguagesResponse(languages=await client.list_languages())


@router.get("/api/strings")
async def get_strings_by_locale(
    file: str | None = None,
    lang: str | None = None,
    client: OtaClient = Depends(get_client),
) -> dict[str, Any]:
    return await client.get_strings_by_locale(file, lang)


@router.get("/api/strings/all")
async def get_strings(file: str | None = None, client: OtaClient = Depends(get_client)) -> dict[str, Any]:
    return await client.get_strings(file)


@router.get("/api/string", response_model=StringResponse)
async def get_string_by_key(
    key: list[str] = Query(...),
    file: str | None = None,
    lang: str | None = None,
    client: OtaClient = Depends(get_client),
) -> StringResponse:
    value = await client.get_string_by_key(key, file, lang)
    if value is None:
        raise HTTPException(status_code=404, detail=f"No string for key {'.'.join(key)}")
    return StringResponse(key=key, value=value)


@router.get("/api/translations/{lang}", response_model=list[FileTranslationResponse])
async def get_language_translations(
    lang: str, client: OtaClient = Depends(get_client)
) -> list[FileTranslationResponse]:
    translations = await client.get_language_translations(lang)
    return [FileTranslationResponse(**asdict(t)) for t in translations]


@router.post("/api/cache/clear", response_model=CacheClearResponse)
async def clear_strings_cache(client: OtaClient = Depends(get_client)) -> CacheClearResponse:
    client.clear_strings_cache()
    return CacheClearResponse(cleared=True)
