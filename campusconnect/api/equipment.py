from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.api.deps import get_client_ip, get_current_organization
from campusconnect.api.serializers import equipment_request_to_dict, equipment_to_dict
from campusconnect.core.enums import EquipmentStatus
from campusconnect.database import get_db
from campusconnect.models.organizations import Organization
from campusconnect.schemas.equipment import EquipmentCreate, EquipmentList, EquipmentResponse, EquipmentUpdate
from campusconnect.schemas.requests import EquipmentRequestCreate, EquipmentRequestList, EquipmentRequestResponse
from campusconnect.services.listings import listing_service
from campusconnect.services.requests import request_service

router = APIRouter(prefix="/equipment", tags=["equipment"])


@router.get("", response_model=EquipmentList)
async def list_equipment(
    status_filter: Optional[EquipmentStatus] = Query(None, alias="status", description="Status filter"),
    q: Optional[str] = Query(None, description="Search in name and description"),
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Discover equipment across all organizations
    """
    equipment = await listing_service.list_equipment(
        db, status=status_filter.value if status_filter else None, q=q
    )
    return {"success": True, "data": {"equipment": [equipment_to_dict(e) for e in equipment]}}


@router.post("", response_model=EquipmentResponse, status_code=status.HTTP_201_CREATED)
async def create_equipment(
    equipment_in: EquipmentCreate,
    current_organization: Organization = Depends(get_current_organization),
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    List a new piece of equipment owned by the caller
    """
    equipment = await listing_service.create_equipment(db, current_organization, equipment_in, ip_address=ip_address)
    return {"success": True, "data": equipment_to_dict(equipment)}


@router.get("/{equipment_id}", response_model=EquipmentResponse)
async def get_equipment(
    equipment_id: int,
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    equipment = await listing_service.get_equipment(db, equipment_id)
    return {"success": True, "data": equipment_to_dict(equipment)}


@router.put("/{equipment_id}", response_model=EquipmentResponse)
async def update_equipment(
    equipment_id: int,
    equipment_in: EquipmentUpdate,
    current_organization: Organization = Depends(get_current_organization),
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Update equipment details; owner only
    """
    equipment = await listing_service.update_equipment(
        db, current_organization, equipment_id, equipment_in, ip_address=ip_address
    )
    return {"success": True, "data": equipment_to_dict(equipment)}


@router.delete("/{equipment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_equipment(
    equipment_id: int,
    current_organization: Organization = Depends(get_current_organization),
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """
    Delete equipment that is not currently lent out; owner only
    """
    await listing_service.delete_equipment(db, current_organization, equipment_id, ip_address=ip_address)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{equipment_id}/requests", response_model=EquipmentRequestList)
async def list_equipment_requests(
    equipment_id: int,
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Borrowing requests on a piece of equipment; owner only
    """
    requests = await request_service.list_requests_for_equipment(db, current_organization, equipment_id)
    return {"success": True, "data": {"requests": [equipment_request_to_dict(r) for r in requests]}}


@router.post(
    "/{equipment_id}/requests", response_model=EquipmentRequestResponse, status_code=status.HTTP_201_CREATED
)
async def create_equipment_request(
    equipment_id: int,
    request_in: EquipmentRequestCreate,
    current_organization: Organization = Depends(get_current_organization),
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Ask to borrow another organization's equipment
    """
    equipment_request = await request_service.create_equipment_request(
        db, current_organization, equipment_id, request_in, ip_address=ip_address
    )
    return {"success": True, "data": equipment_request_to_dict(equipment_request)}
