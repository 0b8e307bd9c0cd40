from typing import Optional

from campusconnect.core.exceptions import ConflictError, ForbiddenError
from campusconnect.models import Connection, Equipment, Message, Organization, Service


def ensure_owner(actor: Organization, resource, *, entity: str) -> None:
    """Only the owning organization may modify or delete a listing"""
    if resource.organization_id != actor.id:
        raise ForbiddenError(
            f"Only the owning organization can modify this {entity}",
            details={"organizationId": resource.organization_id},
        )


def ensure_acting_as(actor: Organization, claimed_id: Optional[int], *, field: str) -> None:
    """A client-supplied actor id must match the authenticated organization"""
    if claimed_id is not None and claimed_id != actor.id:
        raise ForbiddenError(
            f"{field} must match the authenticated organization",
            details={"field": field},
        )


def ensure_not_self(actor_id: int, target_id: int, *, message: str) -> None:
    if actor_id == target_id:
        raise ConflictError(message, code="SELF_TARGET")


def ensure_not_own_resource(actor: Organization, resource, *, entity: str) -> None:
    if resource.organization_id == actor.id:
        raise ConflictError(f"Cannot request your own {entity}", code="SELF_TARGET")


def ensure_can_view_request(actor: Organization, owner_id: int, requester_id: int) -> None:
    if actor.id not in (owner_id, requester_id):
        raise ForbiddenError("Only the resource owner or the requester can view this request")


def ensure_connection_receiver(actor: Organization, connection: Connection) -> None:
    """Only the party who did not initiate may accept or reject"""
    if connection.receiver_id != actor.id:
        raise ForbiddenError("Only the receiving organization can respond to this connection")


def ensure_message_receiver(actor: Organization, message: Message) -> None:
    if message.receiver_id != actor.id:
        raise ForbiddenError("Only the receiving organization can mark this message as read")


def is_service_owner(actor: Organization, service: Service) -> bool:
    return service.organization_id == actor.id


def is_equipment_owner(actor: Organization, equipment: Equipment) -> bool:
    return equipment.organization_id == actor.id
