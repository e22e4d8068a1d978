"""
Flight Deal Search API - FastAPI Application
"""

import logging
from typing import List
from fastapi import FastAPI, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings, get_global_settings
from app.core.error_handler import ErrorCode, error_handler
from app.models.requests import SearchRequest
from app.models.responses import DestinationInfo, ErrorResponse, Offer
from app.services.destinations import DESTINATIONS, get_base_price
from app.services.search_handler import SearchHandler

settings = get_global_settings()

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create FastAPI application instance
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description="API for finding destination flight deals within a budget"
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Dependency injection for SearchHandler
async def get_search_handler(
    settings: Settings = Depends(get_global_settings)
) -> SearchHandler:
    """Dependency to provide a SearchHandler bound to the current settings."""
    return SearchHandler.from_settings(settings)


# Global exception handlers
@app.exception_handler(StarletteHTTPException)
async def starlette_http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle Starlette HTTP exceptions with consistent error response format."""
    logger.error(f"Starlette HTTP Exception: {exc.status_code} - {exc.detail} - URL: {request.url}")

    headers = getattr(exc, "headers", None)

    if exc.status_code >= 500:
        return error_handler.create_json_response(ErrorCode.INTERNAL_SERVER_ERROR)

    error_code = error_handler.error_code_for_status(exc.status_code)
    if error_code is not None:
        return error_handler.create_json_response(error_code, headers=headers)

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(mode='json'),
        headers=headers
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions with consistent error response format."""
    error_handler.log_error(
        error_code=ErrorCode.INTERNAL_SERVER_ERROR,
        message=f"Unhandled Exception: {type(exc).__name__}: {str(exc)}",
        request=request,
        exception=exc
    )
    return error_handler.create_json_response(ErrorCode.INTERNAL_SERVER_ERROR)


@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs"
    }


@app.get("/health")
async def health_check(handler: SearchHandler = Depends(get_search_handler)):
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "flight-deal-search",
        "mode": "provider" if handler.provider_enabled else "mock"
    }


@app.get("/api/destinations", response_model=List[DestinationInfo])
async def list_destinations():
    """Static destination table with base prices."""
    return [
        DestinationInfo(
            code=destination.code,
            city=destination.city,
            country=destination.country,
            flag=destination.flag,
            base_price=get_base_price(code)
        )
        for code, destination in DESTINATIONS.items()
    ]


@app.post(
    "/api/search",
    responses={
        200: {"model": List[Offer]},
        500: {"model": ErrorResponse},
    }
)
async def search(
    request: Request,
    handler: SearchHandler = Depends(get_search_handler)
):
    """
    Search destinations within a budget.

    The body is read without schema validation: missing or malformed fields
    lead to degenerate results, not to a validation error. Provider outages
    are absorbed and answered with mock offers.

    Args:
        request: Incoming request carrying {origin, budget, period}
        handler: Search handler (injected dependency)

    Returns:
        JSONResponse: list of offers, or the fixed internal error payload
    """
    try:
        body = await request.json()
        search_request = SearchRequest.from_payload(body)
        logger.info(
            f"Processing search: origin={search_request.origin!r} "
            f"budget={search_request.budget!r} period={search_request.period!r}"
        )

        results = await handler.search(search_request)
        return JSONResponse(content=results)

    except Exception as e:
        error_handler.log_error(
            error_code=ErrorCode.INTERNAL_SERVER_ERROR,
            message=f"Fatal error: {type(e).__name__}: {str(e)}",
            request=request,
            exception=e
        )
        return error_handler.create_json_response(ErrorCode.INTERNAL_SERVER_ERROR)
