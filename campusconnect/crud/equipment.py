from typing import List, Optional

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.crud.base import CRUDBase
from campusconnect.models.equipment import Equipment
from campusconnect.models.requests import EquipmentRequest
from campusconnect.schemas.equipment import EquipmentCreate, EquipmentUpdate


class CRUDEquipment(CRUDBase[Equipment, EquipmentCreate, EquipmentUpdate]):
    """Equipment CRUD operations"""

    field_map = {
        "name": "name",
        "description": "description",
        "imageUrl": "image_url",
        "status": "status",
        "availableUntil": "available_until",
        "deposit": "deposit",
        "conditions": "conditions",
    }

    async def create_for_organization(
        self, db: AsyncSession, *, obj_in: EquipmentCreate, organization_id: int
    ) -> Equipment:
        """Create equipment owned by ``organization_id`` regardless of the payload"""
        columns = self.to_columns(obj_in)
        columns["organization_id"] = organization_id
        return await self.create(db, obj_in=columns)

    async def get_by_organization(self, db: AsyncSession, *, organization_id: int) -> List[Equipment]:
        query = select(Equipment).where(Equipment.organization_id == organization_id).order_by(Equipment.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def search(
        self, db: AsyncSession, *, status: Optional[str] = None, q: Optional[str] = None
    ) -> List[Equipment]:
        """List equipment, optionally filtered by status and free text"""
        conditions = []
        if status:
            conditions.append(Equipment.status == status)
        if q and q.strip():
            pattern = f"%{q.strip().lower()}%"
            conditions.append(
                or_(func.lower(Equipment.name).like(pattern), func.lower(Equipment.description).like(pattern))
            )

        query = select(Equipment).where(*conditions).order_by(Equipment.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def compare_and_set_status(
        self, db: AsyncSession, *, equipment_id: int, expected: str, new_status: str
    ) -> bool:
        """Move ``status`` from ``expected`` to ``new_status`` in one conditional UPDATE

        Does not commit; the caller owns the transaction. Returns False when the
        row was not in the expected status.
        """
        stmt = (
            update(Equipment)
            .where(and_(Equipment.id == equipment_id, Equipment.status == expected))
            .values(status=new_status)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        return result.rowcount == 1

    async def check_can_delete(self, db: AsyncSession, *, equipment_id: int) -> bool:
        """Equipment can be deleted only when no borrowing is outstanding"""
        return not await self.get_related_requests(db, equipment_id=equipment_id)

    async def get_related_requests(self, db: AsyncSession, *, equipment_id: int) -> List[int]:
        """IDs of approved (outstanding) borrowings of this equipment"""
        query = select(EquipmentRequest.id).where(
            and_(EquipmentRequest.equipment_id == equipment_id, EquipmentRequest.status == "approved")
        )
        result = await db.execute(query)
        return list(result.scalars().all())


equipment = CRUDEquipment(Equipment)
