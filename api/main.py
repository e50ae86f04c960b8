# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-02-04
# Description: main.py
# -----------------------------------------------------------------------------
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

import settings
from api.AppContainer import get_app_container
from api.routers import cache, health, search
from utility.errors import EmptyQuery, InvalidRequest, ProductSearchError
from utility.logging_utils import get_logger

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = get_app_container()

    # InitialLoadFailure propagates: with nothing to serve the process must not start
    await run_in_threadpool(container.coordinator.initialize)

    if settings.REFRESH_ENABLED:
        await container.scheduler.start()
    yield
    await container.scheduler.stop()


app = FastAPI(title="Product Semantic Search API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ProductSearchError)
async def product_search_error_handler(_: Request, exc: ProductSearchError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s -> %d: %s", type(exc).__name__, exc.status_code, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": str(exc)},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    query_invalid = False
    for err in exc.errors():
        loc = tuple(err.get("loc", ()))
        # A missing body or a non-string query is the same as an empty query
        if loc in (("body",), ("body", "query")):
            query_invalid = True
        field = ".".join(str(part) for part in loc[1:]) or "body"
        problems.append(f"{field}: {err.get('msg', 'invalid')}")

    message = "; ".join(problems)
    if query_invalid:
        return await product_search_error_handler(request, EmptyQuery(f"query must be a non-empty string ({message})"))
    return await product_search_error_handler(request, InvalidRequest(message))


app.include_router(health.router)
app.include_router(search.router)
app.include_router(cache.router)
