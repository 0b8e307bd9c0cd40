from fastapi import APIRouter

from campusconnect.api import (
    auth,
    connections,
    dashboard,
    equipment,
    equipment_requests,
    messages,
    organizations,
    service_requests,
    services,
)
from campusconnect.schemas import ErrorResponse

api_router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        403: {"model": ErrorResponse, "description": "Not allowed for this organization"},
        404: {"model": ErrorResponse, "description": "Resource not found"},
        409: {"model": ErrorResponse, "description": "Conflicts with current state"},
    }
)

# Register every module's routes
api_router.include_router(auth.router)
api_router.include_router(organizations.router)
api_router.include_router(services.router)
api_router.include_router(equipment.router)
api_router.include_router(service_requests.router)
api_router.include_router(equipment_requests.router)
api_router.include_router(connections.router)
api_router.include_router(messages.router)
api_router.include_router(dashboard.router)
