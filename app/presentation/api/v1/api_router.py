"""
Main API router for version 1 of the MindCheck Assessment API.

Aggregates all endpoint routers for this version.
"""

from fastapi import APIRouter

from app.presentation.api.v1.endpoints.assessments import router as assessments_router

# Create the main router for API v1
api_v1_router = APIRouter()

api_v1_router.include_router(assessments_router, prefix="/assessments", tags=["Assessments"])


# Add a simple health check endpoint for v1
@api_v1_router.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Check the health of the API."""
    return {"status": "OK"}
