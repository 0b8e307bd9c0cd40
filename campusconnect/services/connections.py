"""
Connections between organizations.

A connection starts pending and is accepted or rejected by the receiver.
Only one record may ever exist per unordered pair of organizations, so a
resolved pair (accepted or rejected) cannot be requested again from either
side.
"""

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.core.enums import ConnectionStatus
from campusconnect.core.exceptions import ConflictError, NotFoundError
from campusconnect.core.permissions import ensure_acting_as, ensure_connection_receiver, ensure_not_self
from campusconnect.core.transitions import CONNECTION_TRANSITIONS, ensure_transition
from campusconnect.crud.connections import connection as crud_connection
from campusconnect.crud.organizations import organization as crud_organization
from campusconnect.models.connections import Connection
from campusconnect.models.organizations import Organization
from campusconnect.schemas.connections import ConnectionCreate
from campusconnect.services.logging import logging_service


class ConnectionService:
    """
    Connection lifecycle: request, list, accept or reject
    """

    @staticmethod
    def _duplicate(existing_id: Optional[int], status: Optional[str]) -> ConflictError:
        details = {}
        if existing_id is not None:
            details = {"connectionId": existing_id, "status": status}
        return ConflictError(
            "A connection between these organizations already exists",
            code="DUPLICATE_RESOURCE",
            details=details or None,
        )

    @classmethod
    async def request_connection(
        cls, db: AsyncSession, actor: Organization, obj_in: ConnectionCreate, ip_address: Optional[str] = None
    ) -> Connection:
        actor_id = actor.id
        ensure_acting_as(actor, obj_in.requesterId, field="requesterId")
        ensure_not_self(actor_id, obj_in.receiverId, message="Cannot connect with yourself")

        receiver = await crud_organization.get(db, obj_in.receiverId)
        if receiver is None:
            raise NotFoundError("Organization not found", details={"organizationId": obj_in.receiverId})

        existing = await crud_connection.check_connection(db, org_a=actor_id, org_b=obj_in.receiverId)
        if existing:
            raise cls._duplicate(existing.id, existing.status)

        connection = await crud_connection.create_pair(
            db, requester_id=actor_id, receiver_id=obj_in.receiverId, message=obj_in.message
        )
        if connection is None:
            # Lost a race against a concurrent request for the same pair
            raise cls._duplicate(None, None)

        await logging_service.audit(
            db,
            component="connection",
            action="create",
            organization_id=actor_id,
            resource_type="connection",
            resource_id=connection.id,
            details={"receiverId": connection.receiver_id},
            ip_address=ip_address,
        )
        return connection

    @staticmethod
    async def list_connections(
        db: AsyncSession, actor: Organization, status: Optional[str] = None
    ) -> List[Connection]:
        return await crud_connection.get_by_organization(db, organization_id=actor.id, status=status)

    @staticmethod
    async def respond(
        db: AsyncSession,
        actor: Organization,
        connection_id: int,
        status: ConnectionStatus,
        ip_address: Optional[str] = None,
    ) -> Connection:
        """Accept or reject a pending connection as its receiver"""
        connection = await crud_connection.get(db, connection_id)
        if connection is None:
            raise NotFoundError("Connection not found", details={"connectionId": connection_id})
        ensure_connection_receiver(actor, connection)

        current = connection.status
        ensure_transition(CONNECTION_TRANSITIONS, current, status.value, entity="Connection")

        updated = await crud_connection.update_status(
            db, connection_id=connection_id, expected=current, new_status=status.value
        )
        if updated is None:
            raise ConflictError(
                "Connection status changed concurrently",
                code="INVALID_STATE",
                details={"connectionId": connection_id},
            )

        await logging_service.audit(
            db,
            component="connection",
            action="transition",
            organization_id=actor.id,
            resource_type="connection",
            resource_id=connection_id,
            details={"from": current, "to": updated.status},
            ip_address=ip_address,
        )
        return updated


connection_service = ConnectionService()
