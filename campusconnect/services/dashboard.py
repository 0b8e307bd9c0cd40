from typing import Dict

from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.core.enums import ConnectionStatus, RequestDirection, ServiceStatus
from campusconnect.crud.connections import connection as crud_connection
from campusconnect.crud.equipment import equipment as crud_equipment
from campusconnect.crud.messages import message as crud_message
from campusconnect.crud.services import service as crud_service
from campusconnect.models.organizations import Organization
from campusconnect.services.requests import request_service


class DashboardService:
    """
    Summary counters for an organization's dashboard
    """

    @staticmethod
    async def get_stats(db: AsyncSession, actor: Organization) -> Dict[str, int]:
        services = await crud_service.get_by_organization(db, organization_id=actor.id)
        equipment = await crud_equipment.get_by_organization(db, organization_id=actor.id)
        connections = await crud_connection.count_by_organization(
            db, organization_id=actor.id, status=ConnectionStatus.accepted.value
        )
        unread = await crud_message.count_unread(db, receiver_id=actor.id)
        pending_services = await request_service.list_service_requests(
            db, actor, direction=RequestDirection.incoming, status="pending"
        )
        pending_equipment = await request_service.list_equipment_requests(
            db, actor, direction=RequestDirection.incoming, status="pending"
        )

        return {
            "activeServices": sum(1 for s in services if s.status == ServiceStatus.active.value),
            "equipmentCount": len(equipment),
            "networkConnections": connections,
            "unreadMessages": unread,
            "pendingIncomingRequests": len(pending_services) + len(pending_equipment),
        }


dashboard_service = DashboardService()
