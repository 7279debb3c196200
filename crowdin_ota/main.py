"""HTTP service exposing one OtaClient.

Run with:
    uvicorn crowdin_ota.main:app --host 0.0.0.0 --port 8070

The distribution hash comes from ``CROWDIN_OTA_HASH`` (environment,
``.env`` file, or the ``crowdin_ota.config.settings`` singleton).
"""

import logging
from contextlib import asynccontextmanager

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from crowdin_ota import __version__
from crowdin_ota.http import OtaHttpError
from crowdin_ota.routes import router

logger = logging.getLogger("crowdin_ota.main")


@asynccontextmanager
async def lifespan(_: FastAPI):
    load_dotenv()
    yield


app = FastAPI(title="crowdin-ota", version=__version__, lifespan=lifespan)


@app.exception_handler(OtaHttpError)
async def ota_http_error_handler(_request: Request, exc: OtaHttpError) -> JSONResponse:
    return JSONResponse(
        status_code=502,
        content={"detail": str(exc), "status_code": exc.status_code},
    )


@app.exception_handler(httpx.HTTPError)
async def transport_error_handler(_request: Request, exc: httpx.HTTPError) -> JSONResponse:
    logger.error("CDN request failed: %s", exc)
    return JSONResponse(status_code=502, content={"detail": f"CDN request failed: {exc}"})


app.include_router(router)
