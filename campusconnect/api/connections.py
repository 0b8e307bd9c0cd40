from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.api.deps import get_client_ip, get_current_organization
from campusconnect.api.serializers import connection_to_dict
from campusconnect.core.enums import ConnectionStatus
from campusconnect.database import get_db
from campusconnect.models.organizations import Organization
from campusconnect.schemas.connections import (
    ConnectionCreate,
    ConnectionList,
    ConnectionResponse,
    ConnectionStatusUpdate,
)
from campusconnect.services.connections import connection_service

router = APIRouter(prefix="/connections", tags=["connections"])


@router.get("", response_model=ConnectionList)
async def list_connections(
    status_filter: Optional[ConnectionStatus] = Query(None, alias="status", description="Status filter"),
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Connections the caller takes part in, newest first
    """
    connections = await connection_service.list_connections(
        db, current_organization, status=status_filter.value if status_filter else None
    )
    return {"success": True, "data": {"connections": [connection_to_dict(c) for c in connections]}}


@router.post("", response_model=ConnectionResponse, status_code=status.HTTP_201_CREATED)
async def request_connection(
    connection_in: ConnectionCreate,
    current_organization: Organization = Depends(get_current_organization),
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Ask another organization to connect
    """
    connection = await connection_service.request_connection(
        db, current_organization, connection_in, ip_address=ip_address
    )
    return {"success": True, "data": connection_to_dict(connection)}


@router.put("/{connection_id}/status", response_model=ConnectionResponse)
async def respond_to_connection(
    connection_id: int,
    status_in: ConnectionStatusUpdate,
    current_organization: Organization = Depends(get_current_organization),
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Accept or reject a pending connection; receiver only
    """
    connection = await connection_service.respond(
        db, current_organization, connection_id, status_in.status, ip_address=ip_address
    )
    return {"success": True, "data": connection_to_dict(connection)}
