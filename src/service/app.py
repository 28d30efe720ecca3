"""
FastAPI application for the configuration service.

Exposes the component catalog and parses and validates algorithm
configuration scripts over HTTP.
"""

import os
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn
import sentry_sdk
from sentry_sdk.integrations.starlette import StarletteIntegration
from sentry_sdk.integrations.fastapi import FastApiIntegration

from utils.common_utils import get_logger
from recconfig import __version__
from recconfig.components.spec import ComponentKind
from recconfig.core.errors import ConfigurationError, ConfigurationValidationError
from service.configuration_service import ConfigurationService
from service.models import (
    AlgorithmListResponse,
    AlgorithmResponse,
    ComponentResponse,
    ErrorResponse,
    ParseRequest,
    component_to_response,
)

# Initialize Sentry for error monitoring (no-op unless SENTRY_DSN is set)
sentry_sdk.init(
    integrations=[
        StarletteIntegration(
            transaction_style="endpoint",
            failed_request_status_codes={403, *range(500, 599)},
            http_methods_to_capture=("GET", "POST"),
        ),
        FastApiIntegration(
            transaction_style="endpoint",
            failed_request_status_codes={403, *range(500, 599)},
            http_methods_to_capture=("GET", "POST"),
        ),
    ],
    traces_sample_rate=float(os.environ.get("SENTRY_TRACES_SAMPLE_RATE", 0.0)),
)

logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Recommender Configuration API",
    description="API for loading and validating recommender algorithm configurations",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_service() -> ConfigurationService:
    return ConfigurationService.get_instance()


@app.on_event("startup")
async def startup_event():
    """Initialize configuration service on startup."""
    logger.info("Starting up configuration service")
    try:
        service = get_service()
        service.list_algorithms()
        logger.info("Configuration service initialized")
    except Exception as e:
        logger.error(f"Failed to initialize configuration service: {e}")
        raise


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    logger.error(f"Request validation error: {exc}")
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({"detail": exc.errors(), "body": exc.body}),
    )


@app.exception_handler(ConfigurationError)
async def configuration_exception_handler(request: Request, exc: ConfigurationError):
    """Handle configuration errors raised while parsing or validating."""
    logger.warning(f"Configuration error: {exc}")
    if isinstance(exc, ConfigurationValidationError):
        errors = [str(e) for e in exc.errors]
    else:
        errors = [str(exc)]
    content = ErrorResponse(error=exc.__class__.__name__, errors=errors)
    return JSONResponse(status_code=422, content=content.model_dump())


@app.get("/", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "message": "Configuration service is running"}


@app.get("/components", response_model=List[ComponentResponse], tags=["Components"])
async def list_components(kind: Optional[ComponentKind] = None):
    """List catalog components, optionally filtered by kind."""
    specs = get_service().list_components(kind.value if kind else None)
    return [component_to_response(spec) for spec in specs]


@app.get("/algorithms", response_model=AlgorithmListResponse, tags=["Algorithms"])
async def list_algorithms():
    """List the algorithm configurations found in the search directories."""
    service = get_service()
    return {"algorithms": [service.to_response(a) for a in service.list_algorithms()]}


@app.get("/algorithms/{name}", response_model=AlgorithmResponse, tags=["Algorithms"])
async def get_algorithm(name: str):
    """Get one algorithm configuration by name."""
    service = get_service()
    algo = service.get_algorithm(name)
    if algo is None:
        raise HTTPException(status_code=404, detail=f"No algorithm named {name}")
    return service.to_response(algo)


@app.post(
    "/algorithms/parse",
    response_model=AlgorithmResponse,
    responses={422: {"model": ErrorResponse}},
    tags=["Algorithms"],
)
def parse_algorithm(request: ParseRequest):
    """Parse and validate a configuration script."""
    service = get_service()
    algo = service.parse(request.script, name=request.name, strict=request.strict)
    return service.to_response(algo)


def start():
    """Start the FastAPI application."""
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(
        "service.app:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=port,
        reload=False,
        log_level="info",
        workers=int(os.environ.get("WORKERS", 1)),
        access_log=False,
    )


if __name__ == "__main__":
    start()
