"""
FastAPI main application.
Entry point for the MIXR cocktail API.
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager

from mixr.core.config import get_settings
from mixr.core.exceptions import (
    CatalogSelectionError, GenerationUnavailable, RecipeParseError, PersistenceError
)
from mixr.db.session import init_db
from mixr.api import routes_catalog, routes_recipes, routes_users
from mixr.api.responses import error_response
from mixr.core.logging import setup_logging

logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    logger.info("Starting MIXR API...")
    init_db()
    logger.info("Database initialized.")
    yield
    logger.info("Shutting down MIXR API...")


# Create FastAPI app
app = FastAPI(
    title="MIXR API",
    description="AI-powered cocktail recipes from the equipment and ingredients you have",
    version="1.0.0",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origin_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(routes_catalog.router)
app.include_router(routes_recipes.router)
app.include_router(routes_users.router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "message": "MIXR API is running",
        "version": "1.0.0"
    }


@app.get("/health")
async def health_check():
    """Detailed health check."""
    settings = get_settings()
    return {
        "status": "healthy",
        "llm_backend": settings.llm_backend.value
    }


@app.exception_handler(CatalogSelectionError)
async def catalog_selection_handler(request: Request, exc: CatalogSelectionError):
    logger.warning(f"Invalid selection on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_response(exc.message))


@app.exception_handler(GenerationUnavailable)
async def generation_unavailable_handler(request: Request, exc: GenerationUnavailable):
    logger.error(f"Generation backend unavailable: {exc.message}")
    return JSONResponse(status_code=503, content=error_response(exc.message))


@app.exception_handler(RecipeParseError)
async def recipe_parse_handler(request: Request, exc: RecipeParseError):
    logger.error(f"Unusable recipe from backend ({exc.cause.value}): {exc.message}")
    return JSONResponse(
        status_code=502,
        content=error_response(exc.message, cause=exc.cause.value)
    )


@app.exception_handler(PersistenceError)
async def persistence_handler(request: Request, exc: PersistenceError):
    logger.error(f"Persistence failure: {exc.message}")
    return JSONResponse(status_code=500, content=error_response(exc.message))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
    else:
        logger.info(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'] if part != 'body')}: {error['msg']}"
        for error in exc.errors()
    )
    logger.info(f"Validation failed on {request.url.path}: {message}")
    return JSONResponse(status_code=400, content=error_response(message))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=error_response("Internal server error"),
    )


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "mixr.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True
    )
