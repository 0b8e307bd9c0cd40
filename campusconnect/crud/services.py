from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.crud.base import CRUDBase
from campusconnect.models.services import Service
from campusconnect.schemas.services import ServiceCreate, ServiceUpdate


class CRUDService(CRUDBase[Service, ServiceCreate, ServiceUpdate]):
    """Service listing CRUD operations"""

    field_map = {
        "title": "title",
        "description": "description",
        "serviceType": "service_type",
        "pricing": "pricing",
        "price": "price",
        "availability": "availability",
        "capacity": "capacity",
        "status": "status",
    }

    async def create_for_organization(
        self, db: AsyncSession, *, obj_in: ServiceCreate, organization_id: int
    ) -> Service:
        """Create a service owned by ``organization_id`` regardless of the payload"""
        columns = self.to_columns(obj_in)
        columns["organization_id"] = organization_id
        return await self.create(db, obj_in=columns)

    async def get_by_organization(self, db: AsyncSession, *, organization_id: int) -> List[Service]:
        query = select(Service).where(Service.organization_id == organization_id).order_by(Service.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def search(
        self,
        db: AsyncSession,
        *,
        service_type: Optional[str] = None,
        pricing: Optional[str] = None,
        status: Optional[str] = None,
        q: Optional[str] = None,
    ) -> List[Service]:
        """List services, optionally filtered by category, pricing, status and free text

        Args:
            service_type: exact category match
            pricing: free or paid
            status: active or inactive
            q: case-insensitive substring of title or description
        """
        conditions = []
        if service_type:
            conditions.append(Service.service_type == service_type)
        if pricing:
            conditions.append(Service.pricing == pricing)
        if status:
            conditions.append(Service.status == status)
        if q and q.strip():
            pattern = f"%{q.strip().lower()}%"
            conditions.append(
                or_(func.lower(Service.title).like(pattern), func.lower(Service.description).like(pattern))
            )

        query = select(Service).where(*conditions).order_by(Service.id)
        result = await db.execute(query)
        return list(result.scalars().all())


service = CRUDService(Service)
