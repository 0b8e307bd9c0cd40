from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.api.deps import get_client_ip, get_current_organization
from campusconnect.api.serializers import equipment_request_to_dict
from campusconnect.core.enums import EquipmentRequestStatus, RequestDirection
from campusconnect.database import get_db
from campusconnect.models.organizations import Organization
from campusconnect.schemas.requests import (
    EquipmentRequestList,
    EquipmentRequestResponse,
    EquipmentRequestStatusUpdate,
)
from campusconnect.services.requests import request_service

router = APIRouter(prefix="/equipment-requests", tags=["equipment-requests"])


@router.get("", response_model=EquipmentRequestList)
async def list_my_equipment_requests(
    direction: RequestDirection = Query(RequestDirection.incoming, description="incoming or outgoing"),
    status_filter: Optional[EquipmentRequestStatus] = Query(None, alias="status", description="Status filter"),
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Borrowing requests on the caller's equipment (incoming) or sent by the caller (outgoing)
    """
    requests = await request_service.list_equipment_requests(
        db,
        current_organization,
        direction=direction,
        status=status_filter.value if status_filter else None,
    )
    return {"success": True, "data": {"requests": [equipment_request_to_dict(r) for r in requests]}}


@router.get("/{request_id}", response_model=EquipmentRequestResponse)
async def get_equipment_request(
    request_id: int,
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    equipment_request = await request_service.get_equipment_request(db, current_organization, request_id)
    return {"success": True, "data": equipment_request_to_dict(equipment_request)}


@router.put("/{request_id}/status", response_model=EquipmentRequestResponse)
async def update_equipment_request_status(
    request_id: int,
    status_in: EquipmentRequestStatusUpdate,
    current_organization: Organization = Depends(get_current_organization),
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Approve, reject or mark a borrowing returned; equipment owner only
    """
    equipment_request = await request_service.update_equipment_request_status(
        db, current_organization, request_id, status_in.status, ip_address=ip_address
    )
    return {"success": True, "data": equipment_request_to_dict(equipment_request)}
