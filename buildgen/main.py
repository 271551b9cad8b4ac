import logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from buildgen.config import MAX_DIM, MAX_HEIGHT
from buildgen.dimensions import resolve_limits
from buildgen.errors import BuildGenError, ModelOutputError
from buildgen.llm_client import client_status, create_client
from buildgen.models import ErrorModel, GenerateRequest, StructureModel, ValidateRequest
from buildgen.service import StructureGenerator
from buildgen.validators import collect_content_errors, collect_errors

if not logging.getLogger().handlers:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

log = logging.getLogger(__name__)


def create_app(generator: Optional[StructureGenerator] = None) -> FastAPI:
    """
    Build the HTTP app. The generator (and the model client inside it) is
    created once here; pass one in to run without touching the environment.
    """
    if generator is None:
        generator = StructureGenerator(client=create_client())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info(
            "startup: using=%s profile=%s sanitize=%s max_dim=%d max_height=%d blocks=%d",
            client_status(generator.client)["using"],
            generator.profile.name,
            generator.profile.sanitize_mode,
            MAX_DIM,
            MAX_HEIGHT,
            len(generator.allowed_blocks),
        )
        yield

    app = FastAPI(title="buildgen", lifespan=lifespan)
    app.state.generator = generator

    allow_origins = [o.strip() for o in os.getenv("ALLOW_ORIGINS", "*").split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        rid = str(uuid.uuid4())
        start = time.time()
        request.state.request_id = rid
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            dur_ms = int((time.time() - start) * 1000)
            log.info(
                "rid=%s method=%s path=%s status=%s dur_ms=%d",
                rid,
                request.method,
                request.url.path,
                getattr(response, "status_code", "?"),
                dur_ms,
            )

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/llm/status")
    def llm_status_endpoint() -> Dict[str, Any]:
        info = client_status(generator.client)
        info["profile"] = generator.profile.name
        info["sanitize_mode"] = generator.profile.sanitize_mode
        return info

    @app.get("/blocks")
    def blocks_endpoint() -> Dict[str, List[str]]:
        return {"blocks": sorted(generator.allowed_blocks)}

    @app.post(
        "/generate",
        responses={200: {"model": StructureModel}, 400: {"model": ErrorModel}, 500: {"model": ErrorModel}},
    )
    def generate_endpoint(req: GenerateRequest, request: Request):
        prompt = (req.prompt or "").strip()
        if not prompt:
            return JSONResponse(status_code=400, content={"error": "prompt required"})

        limits = resolve_limits(req.max_dim, req.width, req.depth, req.height)
        try:
            structure, source = generator.generate(prompt, limits)
        except ModelOutputError as e:
            # raw model text was logged by the parser; keep the reply generic
            return JSONResponse(status_code=500, content={"error": e.message})
        except BuildGenError as e:
            log.error(
                "generate: rid=%s failed: %s",
                getattr(request.state, "request_id", None),
                e.message,
            )
            return JSONResponse(status_code=500, content={"error": e.message})
        except Exception:
            log.exception("generate: unexpected failure")
            return JSONResponse(status_code=500, content={"error": "internal error"})

        return JSONResponse(structure, headers={"X-Structure-Source": source})

    @app.post("/validate")
    def validate_endpoint(req: ValidateRequest):
        """
        Check a structure without repairing it.
        200 {"detail": {"valid": true, ...}} or 422 {"detail": {"valid": false, "errors": [...]}}.
        Content problems only invalidate the structure in strict mode; in
        lenient mode they come back as warnings.
        """
        errors = collect_errors(req.structure)
        warnings: List[Dict[str, str]] = []
        if not errors:
            limits = resolve_limits(req.max_dim, req.width, req.depth, req.height)
            content = collect_content_errors(req.structure, limits, generator.allowed_blocks)
            if generator.profile.sanitize_mode == "strict":
                errors = content
            else:
                warnings = content
        detail: Dict[str, Any] = {"valid": not errors, "mode": generator.profile.sanitize_mode}
        if warnings:
            detail["warnings"] = warnings
        if errors:
            detail["errors"] = errors
            return JSONResponse(status_code=422, content={"detail": detail})
        return {"detail": detail}

    return app


app = create_app()
