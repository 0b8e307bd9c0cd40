from typing import List, Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.crud.base import CRUDBase
from campusconnect.models.connections import Connection
from campusconnect.models.organizations import Organization
from campusconnect.schemas.auth import RegisterRequest
from campusconnect.schemas.organizations import OrganizationUpdate


class CRUDOrganization(CRUDBase[Organization, RegisterRequest, OrganizationUpdate]):
    """Organization CRUD operations"""

    field_map = {
        "name": "name",
        "username": "username",
        "description": "description",
        "email": "email",
        "avatar": "avatar",
    }

    async def get_by_username(self, db: AsyncSession, *, username: str) -> Optional[Organization]:
        """Fetch an organization by its login name"""
        query = select(Organization).where(Organization.username == username)
        result = await db.execute(query)
        return result.scalars().first()

    async def create_with_password(
        self, db: AsyncSession, *, obj_in: RegisterRequest, hashed_password: str
    ) -> Organization:
        """Create an organization storing only the password hash"""
        columns = self.to_columns(obj_in)
        columns["password"] = hashed_password
        return await self.create(db, obj_in=columns)

    async def get_unconnected(self, db: AsyncSession, *, organization_id: int) -> List[Organization]:
        """Organizations other than ``organization_id`` with no connection record to it in any state"""
        linked = select(Connection.id).where(
            or_(
                and_(Connection.requester_id == organization_id, Connection.receiver_id == Organization.id),
                and_(Connection.receiver_id == organization_id, Connection.requester_id == Organization.id),
            )
        )
        query = (
            select(Organization)
            .where(and_(Organization.id != organization_id, ~linked.exists()))
            .order_by(Organization.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())


organization = CRUDOrganization(Organization)
