"""
Service and equipment requests.

Requests are created pending by an organization that does not own the
resource, and only the resource owner moves them through their state
machine. Equipment approvals and returns change the equipment status in the
same transaction as the request.
"""

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.core.enums import (
    EquipmentRequestStatus,
    EquipmentStatus,
    RequestDirection,
    ServiceRequestStatus,
    ServiceStatus,
)
from campusconnect.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from campusconnect.core.permissions import (
    ensure_acting_as,
    ensure_can_view_request,
    ensure_not_own_resource,
    ensure_owner,
    is_equipment_owner,
    is_service_owner,
)
from campusconnect.core.transitions import (
    EQUIPMENT_REQUEST_TRANSITIONS,
    SERVICE_REQUEST_TRANSITIONS,
    ensure_transition,
)
from campusconnect.crud.equipment import equipment as crud_equipment
from campusconnect.crud.requests import equipment_request as crud_equipment_request
from campusconnect.crud.requests import service_request as crud_service_request
from campusconnect.crud.services import service as crud_service
from campusconnect.models.organizations import Organization
from campusconnect.models.requests import EquipmentRequest, ServiceRequest
from campusconnect.schemas.requests import EquipmentRequestCreate, ServiceRequestCreate
from campusconnect.services.logging import logging_service


class RequestService:
    """
    Service request and equipment borrowing workflows
    """

    # Service requests

    @staticmethod
    async def create_service_request(
        db: AsyncSession,
        actor: Organization,
        service_id: int,
        obj_in: ServiceRequestCreate,
        ip_address: Optional[str] = None,
    ) -> ServiceRequest:
        service = await crud_service.get(db, service_id)
        if service is None:
            raise NotFoundError("Service not found", details={"serviceId": service_id})
        ensure_acting_as(actor, obj_in.requesterId, field="requesterId")
        ensure_not_own_resource(actor, service, entity="service")
        if service.status != ServiceStatus.active.value:
            raise ConflictError(
                "Service is not active",
                code="NOT_AVAILABLE",
                details={"serviceId": service_id, "status": service.status},
            )

        request = await crud_service_request.create_for_service(
            db, obj_in=obj_in, service_id=service_id, requester_id=actor.id
        )
        await logging_service.audit(
            db,
            component="request",
            action="create",
            organization_id=actor.id,
            resource_type="service_request",
            resource_id=request.id,
            details={"serviceId": service_id},
            ip_address=ip_address,
        )
        return request

    @staticmethod
    async def list_requests_for_service(
        db: AsyncSession, actor: Organization, service_id: int
    ) -> List[ServiceRequest]:
        """All requests on one service, visible to its owner only"""
        service = await crud_service.get(db, service_id)
        if service is None:
            raise NotFoundError("Service not found", details={"serviceId": service_id})
        ensure_owner(actor, service, entity="service")
        return await crud_service_request.get_by_service(db, service_id=service_id)

    @staticmethod
    async def list_service_requests(
        db: AsyncSession,
        actor: Organization,
        direction: RequestDirection = RequestDirection.incoming,
        status: Optional[str] = None,
    ) -> List[ServiceRequest]:
        """Requests received on the caller's services (incoming) or sent by the caller (outgoing)"""
        if direction == RequestDirection.outgoing:
            requests = await crud_service_request.get_by_requester(db, requester_id=actor.id)
            if status:
                requests = [r for r in requests if r.status == status]
            return requests
        return await crud_service_request.get_by_owner(db, owner_id=actor.id, status=status)

    @staticmethod
    async def get_service_request(db: AsyncSession, actor: Organization, request_id: int) -> ServiceRequest:
        request = await crud_service_request.get(db, request_id)
        if request is None:
            raise NotFoundError("Request not found", details={"requestId": request_id})
        service = await crud_service.get(db, request.service_id)
        if service is None:
            raise NotFoundError("Service not found", details={"serviceId": request.service_id})
        ensure_can_view_request(actor, service.organization_id, request.requester_id)
        return request

    @staticmethod
    async def update_service_request_status(
        db: AsyncSession,
        actor: Organization,
        request_id: int,
        status: ServiceRequestStatus,
        ip_address: Optional[str] = None,
    ) -> ServiceRequest:
        """Owner-driven transition of a service request"""
        request = await crud_service_request.get(db, request_id)
        if request is None:
            raise NotFoundError("Request not found", details={"requestId": request_id})
        service = await crud_service.get(db, request.service_id)
        if service is None:
            raise NotFoundError("Service not found", details={"serviceId": request.service_id})
        if not is_service_owner(actor, service):
            raise ForbiddenError("Only the service owner can change the status of this request")

        current = request.status
        ensure_transition(SERVICE_REQUEST_TRANSITIONS, current, status.value, entity="Service request")

        updated = await crud_service_request.update_status(
            db, request_id=request_id, expected=current, new_status=status.value
        )
        if updated is None:
            raise ConflictError(
                "Request status changed concurrently",
                code="INVALID_STATE",
                details={"requestId": request_id},
            )

        await logging_service.audit(
            db,
            component="request",
            action="transition",
            organization_id=actor.id,
            resource_type="service_request",
            resource_id=request_id,
            details={"from": current, "to": updated.status},
            ip_address=ip_address,
        )
        return updated

    # Equipment requests

    @staticmethod
    async def create_equipment_request(
        db: AsyncSession,
        actor: Organization,
        equipment_id: int,
        obj_in: EquipmentRequestCreate,
        ip_address: Optional[str] = None,
    ) -> EquipmentRequest:
        equipment = await crud_equipment.get(db, equipment_id)
        if equipment is None:
            raise NotFoundError("Equipment not found", details={"equipmentId": equipment_id})
        ensure_acting_as(actor, obj_in.borrowerId, field="borrowerId")
        ensure_not_own_resource(actor, equipment, entity="equipment")
        if equipment.status != EquipmentStatus.available.value:
            raise ConflictError(
                "Equipment is not available",
                code="NOT_AVAILABLE",
                details={"equipmentId": equipment_id, "status": equipment.status},
            )

        request = await crud_equipment_request.create_for_equipment(
            db, obj_in=obj_in, equipment_id=equipment_id, borrower_id=actor.id
        )
        await logging_service.audit(
            db,
            component="request",
            action="create",
            organization_id=actor.id,
            resource_type="equipment_request",
            resource_id=request.id,
            details={"equipmentId": equipment_id},
            ip_address=ip_address,
        )
        return request

    @staticmethod
    async def list_requests_for_equipment(
        db: AsyncSession, actor: Organization, equipment_id: int
    ) -> List[EquipmentRequest]:
        """All borrowing requests on one piece of equipment, visible to its owner only"""
        equipment = await crud_equipment.get(db, equipment_id)
        if equipment is None:
            raise NotFoundError("Equipment not found", details={"equipmentId": equipment_id})
        ensure_owner(actor, equipment, entity="equipment")
        return await crud_equipment_request.get_by_equipment(db, equipment_id=equipment_id)

    @staticmethod
    async def list_equipment_requests(
        db: AsyncSession,
        actor: Organization,
        direction: RequestDirection = RequestDirection.incoming,
        status: Optional[str] = None,
    ) -> List[EquipmentRequest]:
        if direction == RequestDirection.outgoing:
            requests = await crud_equipment_request.get_by_borrower(db, borrower_id=actor.id)
            if status:
                requests = [r for r in requests if r.status == status]
            return requests
        return await crud_equipment_request.get_by_owner(db, owner_id=actor.id, status=status)

    @staticmethod
    async def get_equipment_request(db: AsyncSession, actor: Organization, request_id: int) -> EquipmentRequest:
        request = await crud_equipment_request.get(db, request_id)
        if request is None:
            raise NotFoundError("Request not found", details={"requestId": request_id})
        equipment = await crud_equipment.get(db, request.equipment_id)
        if equipment is None:
            raise NotFoundError("Equipment not found", details={"equipmentId": request.equipment_id})
        ensure_can_view_request(actor, equipment.organization_id, request.borrower_id)
        return request

    @staticmethod
    async def update_equipment_request_status(
        db: AsyncSession,
        actor: Organization,
        request_id: int,
        status: EquipmentRequestStatus,
        ip_address: Optional[str] = None,
    ) -> EquipmentRequest:
        """Owner-driven transition of a borrowing, with the equipment availability side effect"""
        request = await crud_equipment_request.get(db, request_id)
        if request is None:
            raise NotFoundError("Request not found", details={"requestId": request_id})
        equipment = await crud_equipment.get(db, request.equipment_id)
        if equipment is None:
            raise NotFoundError("Equipment not found", details={"equipmentId": request.equipment_id})
        if not is_equipment_owner(actor, equipment):
            raise ForbiddenError("Only the equipment owner can change the status of this request")

        current = request.status
        ensure_transition(EQUIPMENT_REQUEST_TRANSITIONS, current, status.value, entity="Equipment request")

        updated, conflict = await crud_equipment_request.transition(
            db, request_id=request_id, expected=current, new_status=status.value
        )
        if updated is None:
            if conflict == "equipment":
                raise ConflictError(
                    "Equipment is not available",
                    code="NOT_AVAILABLE",
                    details={"equipmentId": request.equipment_id, "requestId": request_id},
                )
            raise ConflictError(
                "Request status changed concurrently",
                code="INVALID_STATE",
                details={"requestId": request_id},
            )

        await logging_service.audit(
            db,
            component="request",
            action="transition",
            organization_id=actor.id,
            resource_type="equipment_request",
            resource_id=request_id,
            details={"from": current, "to": updated.status, "equipmentId": request.equipment_id},
            ip_address=ip_address,
        )
        return updated


request_service = RequestService()
