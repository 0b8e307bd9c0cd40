from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.api.deps import get_client_ip, get_current_organization
from campusconnect.api.serializers import service_request_to_dict
from campusconnect.core.enums import RequestDirection, ServiceRequestStatus
from campusconnect.database import get_db
from campusconnect.models.organizations import Organization
from campusconnect.schemas.requests import ServiceRequestList, ServiceRequestResponse, ServiceRequestStatusUpdate
from campusconnect.services.requests import request_service

router = APIRouter(prefix="/service-requests", tags=["service-requests"])


@router.get("", response_model=ServiceRequestList)
async def list_my_service_requests(
    direction: RequestDirection = Query(RequestDirection.incoming, description="incoming or outgoing"),
    status_filter: Optional[ServiceRequestStatus] = Query(None, alias="status", description="Status filter"),
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Requests on the caller's services (incoming) or sent by the caller (outgoing)
    """
    requests = await request_service.list_service_requests(
        db,
        current_organization,
        direction=direction,
        status=status_filter.value if status_filter else None,
    )
    return {"success": True, "data": {"requests": [service_request_to_dict(r) for r in requests]}}


@router.get("/{request_id}", response_model=ServiceRequestResponse)
async def get_service_request(
    request_id: int,
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    service_request = await request_service.get_service_request(db, current_organization, request_id)
    return {"success": True, "data": service_request_to_dict(service_request)}


@router.put("/{request_id}/status", response_model=ServiceRequestResponse)
async def update_service_request_status(
    request_id: int,
    status_in: ServiceRequestStatusUpdate,
    current_organization: Organization = Depends(get_current_organization),
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Accept, reject or complete a request; service owner only
    """
    service_request = await request_service.update_service_request_status(
        db, current_organization, request_id, status_in.status, ip_address=ip_address
    )
    return {"success": True, "data": service_request_to_dict(service_request)}
