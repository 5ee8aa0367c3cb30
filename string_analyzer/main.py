from fastapi import FastAPI, Request, status, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
import logging

from string_analyzer.config import Settings, get_settings
from string_analyzer.database import StringStore, close_store, get_store, init_store
from string_analyzer.api.routes import router
from string_analyzer.exceptions import (
    FilterValidationError,
    InvalidInputError,
    StringAlreadyExistsError,
    StringAnalyzerError,
    StringNotFoundError,
    UnparseableQueryError,
)
from string_analyzer.schemas.strings import StringResponse

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing string store...")
    app.state.store = init_store()
    yield
    close_store(app.state.store)


def _error_response(exc: StringAnalyzerError):
    """Map a domain error to a status code and JSON body"""
    if isinstance(exc, StringAlreadyExistsError):
        body = {
            "error": "Conflict",
            "message": str(exc),
            "existing": jsonable_encoder(StringResponse.model_validate(exc.existing)),
        }
        return status.HTTP_409_CONFLICT, body

    if isinstance(exc, StringNotFoundError):
        return status.HTTP_404_NOT_FOUND, {"error": "Not Found", "message": str(exc)}

    if isinstance(exc, FilterValidationError):
        body = {
            "error": "Bad Request",
            "message": "Invalid query parameter values",
            "details": exc.errors,
        }
        return status.HTTP_400_BAD_REQUEST, body

    if isinstance(exc, UnparseableQueryError):
        return status.HTTP_400_BAD_REQUEST, {"error": "Bad Request", "message": str(exc)}

    if isinstance(exc, InvalidInputError) and not exc.missing:
        return status.HTTP_422_UNPROCESSABLE_ENTITY, {"error": "Unprocessable Content", "message": str(exc)}

    return status.HTTP_400_BAD_REQUEST, {"error": "Bad Request", "message": str(exc)}


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Analyze strings and query the stored results",
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(router, tags=["strings"])

    # Root endpoint
    @app.get("/")
    def root():
        return {
            "message": settings.app_name,
            "version": settings.app_version,
            "status": "operational",
            "endpoints": {
                "POST /strings": "Analyze and store a string",
                "GET /strings/{string_value}": "Get specific string analysis",
                "GET /strings": "Get all strings with optional filters",
                "GET /strings/filter-by-natural-language": "Filter using natural language",
                "DELETE /strings/{string_value}": "Delete a string",
                "GET /health": "Health check",
                "GET /docs": "API documentation"
            }
        }

    @app.get("/health")
    def health_check(store: StringStore = Depends(get_store)):
        """Health check endpoint"""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "total_strings": len(store)
        }

    # Domain error handler
    @app.exception_handler(StringAnalyzerError)
    async def string_analyzer_exception_handler(request: Request, exc: StringAnalyzerError):
        status_code, content = _error_response(exc)
        logger.warning(f"{request.method} {request.url.path} -> {status_code}: {exc}")
        return JSONResponse(status_code=status_code, content=content)

    # Validation error handler
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = {}
        for error in exc.errors():
            field = error['loc'][-1] if error['loc'] else "body"
            errors[str(field)] = error['msg']

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Bad Request",
                "message": "Invalid request body or parameters",
                "details": errors
            }
        )

    # Generic error handler
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {str(exc)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error"
            }
        )

    return app


_settings = get_settings()
configure_logging(_settings.log_level)
app = create_app(_settings)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "string_analyzer.main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.reload
    )
