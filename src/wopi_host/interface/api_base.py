# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""FastAPI application factory and WOPI protocol routes.

Components:
    create_app: FastAPI application factory.
    register_wopi_endpoints: Mount CheckFileInfo/GetFile/PutFile on a router.

Routes:
    GET  /health                      Health check
    GET  /wopi/files/{file_id}          CheckFileInfo
    GET  /wopi/files/{file_id}/contents GetFile
    POST /wopi/files/{file_id}/contents PutFile

Example:
    Create and run the API server::

        from wopi_host import WopiConfig, WopiProxy
        from wopi_host.interface import create_app

        proxy = WopiProxy(config=WopiConfig(storage_root="/data/documents"))
        app = create_app(proxy)

        import uvicorn
        uvicorn.run(app, host="0.0.0.0", port=8000)

Note:
    Handlers raise WopiError subclasses. A single exception handler maps
    them to their status code with a short ``{"detail": ...}`` body and logs
    the underlying cause server-side.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from ..errors import PayloadTooLarge, WopiError

if TYPE_CHECKING:
    from ..wopi_proxy import WopiProxy

logger = logging.getLogger(__name__)

WOPI_PREFIX = "/wopi"


def create_app(
    svc: WopiProxy,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[None]] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        svc: WopiProxy instance implementing the WOPI operations.
        lifespan: Optional lifespan context manager. If None, creates
            default that starts/stops the proxy service.

    Returns:
        Configured FastAPI application with all routes registered.
    """
    if lifespan is None:

        @asynccontextmanager
        async def default_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
            """Default lifespan: start and stop the WopiProxy service."""
            logger.info("Starting wopi-host service...")
            await svc.start()
            try:
                yield
            finally:
                logger.info("Stopping wopi-host service...")
                await svc.stop()

        lifespan = default_lifespan

    app = FastAPI(title="WOPI Host", lifespan=lifespan)
    app.state.proxy = svc

    app.add_middleware(
        CORSMiddleware,
        allow_origins=svc.config.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    @app.exception_handler(WopiError)
    async def wopi_exception_handler(request: Request, exc: WopiError) -> JSONResponse:
        """Map WOPI errors to HTTP status codes, logging the cause."""
        where = f"{request.method} {request.url.path}"
        if exc.status_code >= 500:
            cause = exc.__cause__ or exc
            logger.error(f"{where} failed: {exc}", exc_info=cause)
        else:
            logger.warning(f"{where}: {exc}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.get("/health")
    async def health() -> dict:
        """Health check endpoint for container orchestration."""
        return {"status": "ok"}

    router = APIRouter(prefix=WOPI_PREFIX)
    register_wopi_endpoints(router, svc)
    app.include_router(router)

    return app


def register_wopi_endpoints(router: FastAPI | APIRouter, svc: WopiProxy) -> None:
    """Register WOPI protocol endpoints for document editing."""

    @router.get("/files/{file_id}")
    async def wopi_check_file_info(file_id: str) -> dict:
        """WOPI CheckFileInfo: Return file metadata."""
        logger.info(f"WOPI CheckFileInfo: file_id={file_id}")
        info = await svc.check_file_info(file_id)
        return info.to_wopi()

    @router.get("/files/{file_id}/contents", response_class=Response)
    async def wopi_get_file(file_id: str) -> Response:
        """WOPI GetFile: Download file content."""
        logger.info(f"WOPI GetFile: file_id={file_id}")
        content = await svc.get_file(file_id)
        return Response(content=content, media_type="application/octet-stream")

    @router.post("/files/{file_id}/contents", response_class=Response)
    async def wopi_put_file(request: Request, file_id: str) -> Response:
        """WOPI PutFile: Save edited file content."""
        logger.info(f"WOPI PutFile: file_id={file_id}")

        # Refuse oversized uploads before reading them; unknown ids stay 404.
        declared = request.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > svc.config.max_document_size:
            await svc.resolver.resolve(file_id)
            raise PayloadTooLarge(
                f"Declared Content-Length {declared} exceeds {svc.config.max_document_size}"
            )

        # Chunked uploads carry no Content-Length; stop reading past the limit.
        body = bytearray()
        async for chunk in request.stream():
            body.extend(chunk)
            if len(body) > svc.config.max_document_size:
                await svc.resolver.resolve(file_id)
                raise PayloadTooLarge(
                    f"Upload exceeds {svc.config.max_document_size} bytes"
                )

        st = await svc.put_file(file_id, bytes(body))
        return Response(status_code=200, headers={"X-WOPI-ItemVersion": st.version})


__all__ = ["WOPI_PREFIX", "create_app", "register_wopi_endpoints"]
