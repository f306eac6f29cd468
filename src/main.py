import multiprocessing
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Awaitable, Callable

import uvicorn
from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response, StreamingResponse

from api.model.download_request_payload import DownloadRequestPayload
from api.model.media_request_payload import MediaRequestPayload
from di.di import DI
from util import log
from util.config import Config, config
from util.error_codes import INVALID_REQUEST_PAYLOAD, UNEXPECTED_ERROR
from util.errors import InternalError, ServiceError, ValidationError
from util.functions import iso_timestamp


def get_di(request: Request) -> DI:
    return request.app.state.di


def create_app(app_config: Config) -> FastAPI:

    # noinspection PyUnusedLocal
    @asynccontextmanager
    async def lifespan(owner: FastAPI):
        process_name = multiprocessing.current_process().name
        worker_type = "main" if process_name == "MainProcess" else "worker"
        worker_info = f"[{worker_type}-{os.getpid()}] {process_name}"
        log.i(f"Lifecycle: Starting up {worker_info} on port {app_config.port}")
        access_key_state = "configured" if app_config.is_access_key_configured else "NOT SET"
        log.i(f"Lifecycle: Bird access key is {access_key_state}")
        yield  # this holds the app alive until the server is shut down
        log.i(f"Lifecycle: Shutting down {worker_info}...")

    app = FastAPI(
        docs_url = None,
        redoc_url = None,
        title = app_config.service_name,
        description = "Retrieves pre-signed media URLs from Bird.com and relays media downloads.",
        version = app_config.version,
        debug = app_config.is_debug,
        lifespan = lifespan,
    )
    app.state.di = DI(app_config)
    log.register_secrets(app_config.all_secrets())

    # keep registered ahead of CORS, which has to wrap these envelopes as well
    @app.middleware("http")
    async def handle_unexpected_error(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            log.e(f"Unhandled error on '{request.url.path}'", e)
            message = str(e) if app_config.is_debug else "Something went wrong"
            wrapped = InternalError(message, UNEXPECTED_ERROR)
            return JSONResponse(status_code = wrapped.http_status, content = wrapped.to_api_dict())

    # noinspection PyTypeChecker
    app.add_middleware(
        CORSMiddleware,
        allow_origins = ["*"],
        allow_credentials = False,
        allow_methods = ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers = ["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
    )

    # === Error boundary ===

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, error: ServiceError) -> JSONResponse:
        if isinstance(error, ValidationError):
            log.w(f"Rejected request to '{request.url.path}': {error.message}")
        else:
            log.e(f"Request to '{request.url.path}' failed", error)
        return JSONResponse(status_code = error.http_status, content = error.to_api_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, error: RequestValidationError) -> JSONResponse:
        problems = [
            {"location": ".".join(str(part) for part in problem.get("loc", [])), "problem": problem.get("msg")}
            for problem in error.errors()
        ]
        wrapped = ValidationError("Malformed request", INVALID_REQUEST_PAYLOAD, details = problems)
        return await handle_service_error(request, wrapped)

    # === Routes ===

    @app.get("/")
    def root() -> dict:
        return {
            "service": f"{app_config.service_name} (media retrieval)",
            "version": app_config.version,
            "endpoints": {
                "POST /bird-media": "Retrieve media URL from Bird.com",
                "GET /get-media": "Retrieve the raw Bird.com media response",
                "POST /download-media": "Download media file directly",
                "GET /health": "Health check",
                "GET /": "API documentation",
            },
            "usage": {
                "/bird-media": {
                    "method": "POST",
                    "headers": {"Content-Type": "application/json"},
                    "body": {
                        "workspaceId": "your_workspace_id",
                        "messageId": "your_message_id",
                        "fileId": "your_file_id",
                    },
                    "response": {
                        "success": True,
                        "mediaUrl": "https://presigned-url-to-media",
                        "expiresIn": app_config.media_url_expires_in,
                    },
                },
                "/get-media": {
                    "method": "GET",
                    "query": "?workspaceId=...&messageId=...&fileId=...",
                },
                "/download-media": {
                    "method": "POST",
                    "headers": {"Content-Type": "application/json"},
                    "body": {"mediaUrl": "https://presigned-url-to-media", "filename": "optional-name.jpg"},
                },
            },
            "environment": {
                "BIRD_ACCESS_KEY": "***configured***" if app_config.is_access_key_configured else "NOT SET",
            },
        }

    @app.get("/health")
    def health() -> dict:
        return {
            "status": "healthy",
            "timestamp": iso_timestamp(),
            "service": app_config.service_name,
            "version": app_config.version,
        }

    @app.post("/bird-media")
    def bird_media(
        payload: MediaRequestPayload | None = None,
        di: DI = Depends(get_di),
    ) -> dict:
        payload = payload or MediaRequestPayload()
        log.i("Bird media request received")
        log.d("Request body", payload.model_dump(by_alias = True))
        response = di.media_controller.resolve_media_url(payload)
        return response.model_dump(by_alias = True)

    @app.get("/get-media")
    def get_media(
        workspace_id: str | None = Query(default = None, alias = "workspaceId"),
        message_id: str | None = Query(default = None, alias = "messageId"),
        file_id: str | None = Query(default = None, alias = "fileId"),
        di: DI = Depends(get_di),
    ):
        log.i("Raw media request received")
        payload = MediaRequestPayload(
            workspace_id = workspace_id,
            message_id = message_id,
            file_id = file_id,
        )
        return JSONResponse(content = di.media_controller.fetch_raw_media(payload))

    @app.post("/download-media")
    def download_media(
        payload: DownloadRequestPayload | None = None,
        di: DI = Depends(get_di),
    ) -> StreamingResponse:
        payload = payload or DownloadRequestPayload()
        log.i("Media download request received")
        download = di.media_controller.download_media(payload)
        return StreamingResponse(
            download.iter_bytes(),
            headers = {
                "Content-Type": download.content_type,
                "Content-Disposition": download.content_disposition,
            },
        )

    return app


app = create_app(config)


# The main runner
if __name__ == "__main__":
    if "--dev" in sys.argv:  # when running locally...
        os.environ["LOG_LEVEL"] = "debug"
        config.log_level = "debug"
        workers = 1
        reload = True
        print("INFO:     Launching in dev mode...")
    else:  # when running in production...
        workers = 2
        reload = False
        print("INFO:     Launching in production mode...")
    if not config.is_access_key_configured:
        print("WARN:     BIRD_ACCESS_KEY is not set, media requests will fail", file = sys.stderr)
    uvicorn_log_level = "debug" if config.log_level == "local" else config.log_level

    # get the service version
    if (version_file := Path("./.version")).exists():
        version_name = version_file.read_text().strip()
        if version_name:
            os.environ["VERSION"] = version_name
            config.version = version_name
            print("INFO:     Version file found", f"v{config.version}")
        else:
            print("ERROR:    Version file empty", file = sys.stderr)

    # finally, start the server
    uvicorn.run(
        "main:app",
        host = "0.0.0.0",
        port = config.port,
        log_level = uvicorn_log_level,
        workers = workers,
        reload = reload,
    )
