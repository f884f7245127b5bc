"""Health check endpoints."""

from typing import Any, Dict

from fastapi import APIRouter

from ...infrastructure.dependencies import get_service_container

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Check the health of all service components.

    Returns:
        Whether services are built, plus AI provider and source availability
    """
    container = get_service_container()
    return {
        "status": "healthy",
        "services_ready": container.is_ready,
        **container.component_status(),
    }
