from typing import List, Optional, Tuple

from sqlalchemy import and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.crud.base import CRUDBase
from campusconnect.crud.equipment import equipment as crud_equipment
from campusconnect.models.equipment import Equipment
from campusconnect.models.requests import EquipmentRequest, ServiceRequest
from campusconnect.models.services import Service
from campusconnect.schemas.requests import (
    EquipmentRequestCreate,
    EquipmentRequestStatusUpdate,
    ServiceRequestCreate,
    ServiceRequestStatusUpdate,
)


class CRUDServiceRequest(CRUDBase[ServiceRequest, ServiceRequestCreate, ServiceRequestStatusUpdate]):
    """Service request CRUD operations"""

    field_map = {"message": "message", "dateRequested": "date_requested", "status": "status"}

    async def create_for_service(
        self, db: AsyncSession, *, obj_in: ServiceRequestCreate, service_id: int, requester_id: int
    ) -> ServiceRequest:
        """Create a pending request for a service"""
        columns = self.to_columns(obj_in)
        columns.update(service_id=service_id, requester_id=requester_id, status="pending")
        return await self.create(db, obj_in=columns)

    async def get_by_service(self, db: AsyncSession, *, service_id: int) -> List[ServiceRequest]:
        query = select(ServiceRequest).where(ServiceRequest.service_id == service_id).order_by(ServiceRequest.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_requester(self, db: AsyncSession, *, requester_id: int) -> List[ServiceRequest]:
        """Requests sent by an organization"""
        query = select(ServiceRequest).where(ServiceRequest.requester_id == requester_id).order_by(ServiceRequest.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_owner(
        self, db: AsyncSession, *, owner_id: int, status: Optional[str] = None
    ) -> List[ServiceRequest]:
        """Requests received on services owned by an organization"""
        conditions = [Service.organization_id == owner_id]
        if status:
            conditions.append(ServiceRequest.status == status)
        query = (
            select(ServiceRequest)
            .join(Service, ServiceRequest.service_id == Service.id)
            .where(and_(*conditions))
            .order_by(ServiceRequest.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def update_status(
        self, db: AsyncSession, *, request_id: int, expected: str, new_status: str
    ) -> Optional[ServiceRequest]:
        """Conditionally move a request out of ``expected``; None if it was no longer there"""
        stmt = (
            update(ServiceRequest)
            .where(and_(ServiceRequest.id == request_id, ServiceRequest.status == expected))
            .values(status=new_status)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        if result.rowcount != 1:
            return None
        await db.commit()
        db_obj = await self.get(db, request_id)
        await db.refresh(db_obj)
        return db_obj


class CRUDEquipmentRequest(CRUDBase[EquipmentRequest, EquipmentRequestCreate, EquipmentRequestStatusUpdate]):
    """Equipment borrowing request CRUD operations"""

    field_map = {
        "message": "message",
        "borrowFrom": "borrow_from",
        "borrowUntil": "borrow_until",
        "status": "status",
    }

    # Equipment status change that must accompany each request transition: (expected, new)
    EQUIPMENT_SIDE_EFFECTS = {
        "approved": ("available", "borrowed"),
        "returned": ("borrowed", "available"),
    }

    async def create_for_equipment(
        self, db: AsyncSession, *, obj_in: EquipmentRequestCreate, equipment_id: int, borrower_id: int
    ) -> EquipmentRequest:
        """Create a pending borrowing request"""
        columns = self.to_columns(obj_in)
        columns.update(equipment_id=equipment_id, borrower_id=borrower_id, status="pending")
        return await self.create(db, obj_in=columns)

    async def get_by_equipment(self, db: AsyncSession, *, equipment_id: int) -> List[EquipmentRequest]:
        query = (
            select(EquipmentRequest)
            .where(EquipmentRequest.equipment_id == equipment_id)
            .order_by(EquipmentRequest.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_borrower(self, db: AsyncSession, *, borrower_id: int) -> List[EquipmentRequest]:
        """Requests sent by an organization"""
        query = (
            select(EquipmentRequest)
            .where(EquipmentRequest.borrower_id == borrower_id)
            .order_by(EquipmentRequest.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_owner(
        self, db: AsyncSession, *, owner_id: int, status: Optional[str] = None
    ) -> List[EquipmentRequest]:
        """Requests received on equipment owned by an organization"""
        conditions = [Equipment.organization_id == owner_id]
        if status:
            conditions.append(EquipmentRequest.status == status)
        query = (
            select(EquipmentRequest)
            .join(Equipment, EquipmentRequest.equipment_id == Equipment.id)
            .where(and_(*conditions))
            .order_by(EquipmentRequest.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def transition(
        self, db: AsyncSession, *, request_id: int, expected: str, new_status: str
    ) -> Tuple[Optional[EquipmentRequest], Optional[str]]:
        """Change a borrowing's status together with its equipment availability

        Both conditional updates run in one transaction: approving flips the
        equipment from available to borrowed, returning flips it back. If either
        row is not in the expected status nothing is committed and the request
        row is put back inside the same transaction.

        Returns ``(request, None)`` on success, otherwise ``(None, reason)``
        where reason is ``"request"`` (the request had already left
        ``expected``) or ``"equipment"`` (the equipment was not in the status
        the transition needs).
        """
        db_obj = await self.get(db, request_id)
        if db_obj is None:
            return None, "request"
        equipment_id = db_obj.equipment_id

        changed = await self._set_status(db, request_id=request_id, expected=expected, new_status=new_status)
        if not changed:
            return None, "request"

        side_effect = self.EQUIPMENT_SIDE_EFFECTS.get(new_status)
        if side_effect:
            equipment_expected, equipment_new = side_effect
            flipped = await crud_equipment.compare_and_set_status(
                db, equipment_id=equipment_id, expected=equipment_expected, new_status=equipment_new
            )
            if not flipped:
                # Undo the request update before anything is committed
                await self._set_status(db, request_id=request_id, expected=new_status, new_status=expected)
                return None, "equipment"

        await db.commit()
        await db.refresh(db_obj)
        equipment_obj = await crud_equipment.get(db, equipment_id)
        if equipment_obj is not None:
            await db.refresh(equipment_obj)
        return db_obj, None

    async def _set_status(self, db: AsyncSession, *, request_id: int, expected: str, new_status: str) -> bool:
        stmt = (
            update(EquipmentRequest)
            .where(and_(EquipmentRequest.id == request_id, EquipmentRequest.status == expected))
            .values(status=new_status)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        return result.rowcount == 1


service_request = CRUDServiceRequest(ServiceRequest)
equipment_request = CRUDEquipmentRequest(EquipmentRequest)
