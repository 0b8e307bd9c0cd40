from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.api.deps import get_client_ip, get_current_organization
from campusconnect.api.serializers import service_request_to_dict, service_to_dict
from campusconnect.core.enums import Pricing, ServiceStatus
from campusconnect.database import get_db
from campusconnect.models.organizations import Organization
from campusconnect.schemas.requests import ServiceRequestCreate, ServiceRequestList, ServiceRequestResponse
from campusconnect.schemas.services import ServiceCreate, ServiceList, ServiceResponse, ServiceUpdate
from campusconnect.services.listings import listing_service
from campusconnect.services.requests import request_service

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=ServiceList)
async def list_services(
    service_type: Optional[str] = Query(None, alias="serviceType", description="Category filter"),
    pricing: Optional[Pricing] = Query(None, description="free or paid"),
    status_filter: Optional[ServiceStatus] = Query(None, alias="status", description="active or inactive"),
    q: Optional[str] = Query(None, description="Search in title and description"),
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Discover services across all organizations
    """
    services = await listing_service.list_services(
        db,
        service_type=service_type,
        pricing=pricing.value if pricing else None,
        status=status_filter.value if status_filter else None,
        q=q,
    )
    return {"success": True, "data": {"services": [service_to_dict(s) for s in services]}}


@router.post("", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_service(
    service_in: ServiceCreate,
    current_organization: Organization = Depends(get_current_organization),
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Offer a new service owned by the caller
    """
    service = await listing_service.create_service(db, current_organization, service_in, ip_address=ip_address)
    return {"success": True, "data": service_to_dict(service)}


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: int,
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    service = await listing_service.get_service(db, service_id)
    return {"success": True, "data": service_to_dict(service)}


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: int,
    service_in: ServiceUpdate,
    current_organization: Organization = Depends(get_current_organization),
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Update a service; owner only
    """
    service = await listing_service.update_service(
        db, current_organization, service_id, service_in, ip_address=ip_address
    )
    return {"success": True, "data": service_to_dict(service)}


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service(
    service_id: int,
    current_organization: Organization = Depends(get_current_organization),
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """
    Delete a service and its requests; owner only
    """
    await listing_service.delete_service(db, current_organization, service_id, ip_address=ip_address)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{service_id}/requests", response_model=ServiceRequestList)
async def list_service_requests(
    service_id: int,
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Requests made on a service; owner only
    """
    requests = await request_service.list_requests_for_service(db, current_organization, service_id)
    return {"success": True, "data": {"requests": [service_request_to_dict(r) for r in requests]}}


@router.post("/{service_id}/requests", response_model=ServiceRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_service_request(
    service_id: int,
    request_in: ServiceRequestCreate,
    current_organization: Organization = Depends(get_current_organization),
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Request another organization's service
    """
    service_request = await request_service.create_service_request(
        db, current_organization, service_id, request_in, ip_address=ip_address
    )
    return {"success": True, "data": service_request_to_dict(service_request)}
