"""FastAPI service exposing the renumber pipelines.

* Pydantic models capture request/response payloads.
* Routers group health checks and processing endpoints.
* Swagger UI (``/docs``) and ReDoc (``/redoc``) document each endpoint.

Run locally::

    uvicorn renumber.api:app --host 0.0.0.0 --port 8000

Or via console script::

    renumber-api --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import asyncio
import base64
from typing import List, Literal, Optional

from fastapi import (
    APIRouter,
    Depends,
    FastAPI,
    File,
    Form,
    HTTPException,
    Query,
    Response,
    Security,
    UploadFile,
    status,
)
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from .core import Mode, ProcessOutcome, RunConfig, process_document
from .errors import (
    CleanupFailure,
    ParseFailure,
    RenderFailure,
    RenumberError,
    SourceUnavailable,
)
from .health import run_readiness_checks
from .logging import get_logger
from .settings import ServiceSettings, get_settings
from .sources import fetch_bytes, safe_file_name

settings: ServiceSettings = get_settings()
logger = get_logger(__name__)

auth_scheme = HTTPBearer(auto_error=False)

PREVIEW_TEXT = {
    Mode.IN_PLACE: "Numbers replaced in place; layout preserved.",
    Mode.REBUILD: "Rebuilt PDF created.",
    Mode.PRESENTABLE: "Heading preserved; body reflowed with all numbers replaced.",
}

# error class -> HTTP status at the request boundary
_ERROR_STATUS = {
    SourceUnavailable: status.HTTP_502_BAD_GATEWAY,
    ParseFailure: status.HTTP_422_UNPROCESSABLE_ENTITY,
    CleanupFailure: status.HTTP_502_BAD_GATEWAY,
    RenderFailure: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ProcessRequest(BaseModel):
    """Request payload for processing a remote PDF."""

    pdf_url: Optional[str] = None
    new_number: Optional[str] = None
    mode: Mode = Mode.REBUILD
    use_llm: bool = False


class ProcessResponse(BaseModel):
    """Processed document as a base64 data URI."""

    file_name: str
    preview: str
    download_url: str
    replacements: int = 0


class HealthResponse(BaseModel):
    """Canonical health endpoint payload."""

    status: Literal["ok"] = "ok"


class ReadinessCheckModel(BaseModel):
    """Single readiness check result."""

    name: str
    status: Literal["pass", "warn", "fail"]
    detail: Optional[str] = None
    required: bool


class ReadyResponse(BaseModel):
    """Aggregated readiness response."""

    ready: bool
    checks: List[ReadinessCheckModel]


app = FastAPI(
    title="renumber API",
    description="Find and replace phone numbers in PDF documents.",
    version="0.1.0",
    openapi_tags=[
        {"name": "health", "description": "Service health and readiness probes."},
        {"name": "process", "description": "Rewrite PDFs with a new phone number."},
    ],
)

if settings.cors_origins:
    allow_origins = ["*"] if "*" in settings.cors_origins else settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )


health_router = APIRouter(tags=["health"])
process_router = APIRouter(tags=["process"])


def require_auth(
    credentials: HTTPAuthorizationCredentials = Security(auth_scheme),
) -> None:
    """Simple bearer-token protection for shared deployments."""

    token = settings.api_token
    if token is None:
        return
    if credentials is None or credentials.credentials != token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )


def _run_config(mode: Mode, use_llm: bool) -> RunConfig:
    return RunConfig(
        mode=mode,
        font_path=settings.font_path,
        font_url=settings.font_url,
        fetch_timeout=settings.fetch_timeout,
        use_llm=use_llm,
        llm_url=settings.llm_generate_url,
    )


def _process(source: bytes, new_number: str, mode: Mode, use_llm: bool) -> ProcessOutcome:
    try:
        return process_document(source, new_number, _run_config(mode, use_llm))
    except RenumberError as exc:
        code = _ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        logger.warning("request failed", extra={"error": str(exc), "status": code})
        raise HTTPException(status_code=code, detail=str(exc)) from exc


def _respond(file_name: str, outcome: ProcessOutcome) -> ProcessResponse:
    encoded = base64.b64encode(outcome.output).decode("ascii")
    return ProcessResponse(
        file_name=file_name,
        preview=PREVIEW_TEXT[outcome.mode],
        download_url=f"data:application/pdf;base64,{encoded}",
        replacements=outcome.replacements,
    )


@health_router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse()


@health_router.get("/livez", response_model=HealthResponse)
def livez() -> HealthResponse:
    return HealthResponse(status="ok")


@health_router.get("/readyz", response_model=ReadyResponse)
def readyz():
    checks = run_readiness_checks(settings)
    ready = True
    payload: List[ReadinessCheckModel] = []
    for check in checks:
        payload.append(
            ReadinessCheckModel(
                name=check.name,
                status=check.status,
                detail=check.detail,
                required=check.required,
            )
        )
        if check.required and check.status == "fail":
            ready = False
        if (
            check.required
            and check.status == "warn"
            and not settings.allowance_warn_only_checks
        ):
            ready = False
    response = ReadyResponse(ready=ready, checks=payload)
    status_code = status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=status_code, content=response.model_dump())


@process_router.post("/process", response_model=ProcessResponse)
def process_remote(
    payload: ProcessRequest,
    auth: None = Depends(require_auth),
) -> ProcessResponse:
    if not payload.pdf_url or not payload.new_number:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing pdf_url or new_number",
        )
    try:
        source = fetch_bytes(payload.pdf_url, timeout=settings.fetch_timeout)
    except SourceUnavailable as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    outcome = _process(source, payload.new_number, payload.mode, payload.use_llm)
    return _respond(safe_file_name(payload.pdf_url), outcome)


@process_router.post("/process/upload", response_model=ProcessResponse)
async def process_upload(
    file: UploadFile = File(...),
    new_number: str = Form(...),
    mode: Mode = Form(Mode.IN_PLACE),
    use_llm: bool = Form(False),
    auth: None = Depends(require_auth),
) -> ProcessResponse:
    data = await file.read()
    if len(data) > settings.max_upload_mb * 1024 * 1024:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="Upload too large",
        )
    outcome = await asyncio.to_thread(_process, data, new_number, mode, use_llm)
    return _respond(safe_file_name(file.filename or "output.pdf"), outcome)


@process_router.get("/fetch")
def fetch_proxy(
    url: str = Query(..., description="PDF location to fetch"),
    auth: None = Depends(require_auth),
) -> Response:
    """Fetch a remote PDF on behalf of a browser client."""

    try:
        data = fetch_bytes(url, timeout=settings.fetch_timeout)
    except SourceUnavailable as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return Response(content=data, media_type="application/pdf")


app.include_router(health_router)
app.include_router(process_router)


def run(
    host: Optional[str] = None,
    port: Optional[int] = None,
    reload: bool = False,
    workers: int = 1,
    log_level: str = "info",
) -> None:
    """Launch the API server via ``uvicorn``."""

    import uvicorn

    bind_host = host or settings.api_host
    bind_port = port or settings.api_port
    uvicorn.run(
        "renumber.api:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )
