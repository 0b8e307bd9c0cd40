from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.api.deps import get_client_ip, get_current_organization
from campusconnect.api.serializers import equipment_to_dict, organization_to_dict, service_to_dict
from campusconnect.database import get_db
from campusconnect.models.organizations import Organization
from campusconnect.schemas.equipment import EquipmentList
from campusconnect.schemas.organizations import OrganizationList, OrganizationResponse, OrganizationUpdate
from campusconnect.schemas.services import ServiceList
from campusconnect.services.listings import listing_service
from campusconnect.services.organizations import organization_service

router = APIRouter(prefix="/organizations", tags=["organizations"])


@router.get("", response_model=OrganizationList)
async def list_organizations(
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Organization directory
    """
    organizations = await organization_service.list_all(db)
    return {"success": True, "data": {"organizations": [organization_to_dict(o) for o in organizations]}}


@router.get("/recommended", response_model=OrganizationList)
async def recommended_organizations(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum number of suggestions"),
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Organizations the caller has not connected with yet
    """
    organizations = await organization_service.recommended(db, current_organization, limit=limit)
    return {"success": True, "data": {"organizations": [organization_to_dict(o) for o in organizations]}}


@router.put("/me", response_model=OrganizationResponse)
async def update_my_profile(
    profile_in: OrganizationUpdate,
    current_organization: Organization = Depends(get_current_organization),
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Update the caller's own profile
    """
    organization = await organization_service.update_profile(
        db, current_organization, profile_in, ip_address=ip_address
    )
    return {"success": True, "data": organization_to_dict(organization)}


@router.get("/{organization_id}", response_model=OrganizationResponse)
async def get_organization(
    organization_id: int,
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    organization = await organization_service.get(db, organization_id)
    return {"success": True, "data": organization_to_dict(organization)}


@router.get("/{organization_id}/services", response_model=ServiceList)
async def get_organization_services(
    organization_id: int,
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Services offered by one organization
    """
    services = await listing_service.list_services_by_organization(db, organization_id)
    return {"success": True, "data": {"services": [service_to_dict(s) for s in services]}}


@router.get("/{organization_id}/equipment", response_model=EquipmentList)
async def get_organization_equipment(
    organization_id: int,
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Equipment listed by one organization
    """
    equipment = await listing_service.list_equipment_by_organization(db, organization_id)
    return {"success": True, "data": {"equipment": [equipment_to_dict(e) for e in equipment]}}
