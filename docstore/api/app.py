"""FastAPI dispatcher mapping HTTP routes onto store capabilities."""

from __future__ import annotations

import json
import logging
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from docstore.infra.config import ServerConfig
from docstore.infra.storage import epoch_millis
from docstore.store.database import Database
from docstore.store.documents import render
from docstore.store.errors import ParseError, StoreError

NOT_FOUND_PAGE = """<!DOCTYPE html>
<html>
  <head><title>404 Not Found</title></head>
  <body><h1>404</h1><p>Nothing lives at this address.</p></body>
</html>
"""

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


class InvalidArguments(Exception):
    """A required query parameter was missing or empty."""


def require(*values: Optional[str]) -> None:
    if not all(values):
        raise InvalidArguments()


def create_app(db: Database, config: Optional[ServerConfig] = None) -> FastAPI:
    config = config or ServerConfig()
    logger = logging.getLogger(__name__)
    app = FastAPI(title="docstore", version="0.1.0")
    app.state.db = db

    @app.exception_handler(StoreError)
    async def store_error(request: Request, exc: StoreError) -> PlainTextResponse:
        logger.info(
            "Request failed: %s", exc,
            extra={"event": "store_error", "kind": type(exc).__name__, "path": request.url.path},
        )
        return PlainTextResponse(str(exc), status_code=400)

    @app.exception_handler(InvalidArguments)
    async def invalid_arguments(request: Request, exc: InvalidArguments) -> PlainTextResponse:
        return PlainTextResponse("Invalid arguments", status_code=400)

    @app.get("/")
    async def home() -> PlainTextResponse:
        return PlainTextResponse(
            "Welcome to my server",
            headers={"my-custom-header": "This is a great API", "another-header": "More metadata"},
        )

    @app.get("/status")
    async def status() -> dict:
        return {"up": True, "owner": config.owner, "timestamp": epoch_millis()}

    @app.get("/get")
    async def get_value(file: Optional[str] = None, key: Optional[str] = None) -> PlainTextResponse:
        require(file, key)
        value = await db.get(file, key)
        return PlainTextResponse(render(value))

    @app.patch("/set")
    async def set_value(
        file: Optional[str] = None, key: Optional[str] = None, value: Optional[str] = None
    ) -> PlainTextResponse:
        require(file, key, value)
        await db.set(file, key, value)
        return PlainTextResponse(f"{file}: Successfully set {key} to {value}")

    @app.patch("/remove")
    async def remove_key(file: Optional[str] = None, key: Optional[str] = None) -> PlainTextResponse:
        require(file, key)
        return PlainTextResponse(await db.remove(file, key))

    @app.delete("/delete")
    async def delete_file(file: Optional[str] = None) -> PlainTextResponse:
        require(file)
        return PlainTextResponse(await db.delete_file(file))

    @app.post("/write/{file}")
    async def write_file(file: str, request: Request) -> Response:
        if not file.endswith(".json"):
            return HTMLResponse(NOT_FOUND_PAGE, status_code=404)

        try:
            body = json.loads(await request.body())
        except ValueError as exc:
            raise ParseError(f"{file}: Unable to create. Malformed data") from exc
        if not isinstance(body, dict):
            raise ParseError(f"{file}: Unable to create. Body must be a JSON object")

        await db.create_file(file, body)
        return PlainTextResponse(f"{file}: Successfully created", status_code=201)

    @app.get("/merge")
    async def merge() -> JSONResponse:
        return JSONResponse(await db.merge_data())

    @app.get("/union")
    async def union(a: Optional[str] = None, b: Optional[str] = None) -> PlainTextResponse:
        require(a, b)
        return PlainTextResponse(",".join(await db.union(a, b)))

    @app.get("/intersect")
    async def intersect(a: Optional[str] = None, b: Optional[str] = None) -> PlainTextResponse:
        require(a, b)
        return PlainTextResponse(",".join(await db.intersect(a, b)))

    @app.get("/difference")
    async def difference(a: Optional[str] = None, b: Optional[str] = None) -> PlainTextResponse:
        require(a, b)
        return PlainTextResponse(",".join(await db.difference(a, b)))

    @app.post("/reset")
    async def reset() -> PlainTextResponse:
        return PlainTextResponse(await db.reset())

    @app.api_route("/{path:path}", methods=ALL_METHODS)
    async def not_found(path: str) -> HTMLResponse:
        return HTMLResponse(NOT_FOUND_PAGE, status_code=404)

    return app


__all__ = ["create_app", "InvalidArguments", "NOT_FOUND_PAGE"]
