from typing import List, Optional

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.crud.base import CRUDBase
from campusconnect.models.connections import Connection
from campusconnect.schemas.connections import ConnectionCreate, ConnectionStatusUpdate


class CRUDConnection(CRUDBase[Connection, ConnectionCreate, ConnectionStatusUpdate]):
    """Connection CRUD operations"""

    field_map = {"status": "status", "message": "message"}

    async def check_connection(self, db: AsyncSession, *, org_a: int, org_b: int) -> Optional[Connection]:
        """Find the connection between two organizations in either direction"""
        low, high = sorted((org_a, org_b))
        query = select(Connection).where(and_(Connection.org_low_id == low, Connection.org_high_id == high))
        result = await db.execute(query)
        return result.scalars().first()

    async def create_pair(
        self, db: AsyncSession, *, requester_id: int, receiver_id: int, message: Optional[str] = None
    ) -> Optional[Connection]:
        """Insert a pending connection

        The unique constraint on the normalized pair decides races; returns None
        when a record for the pair already exists.
        """
        low, high = sorted((requester_id, receiver_id))
        db_obj = Connection(
            requester_id=requester_id,
            receiver_id=receiver_id,
            org_low_id=low,
            org_high_id=high,
            status="pending",
            message=message,
        )
        db.add(db_obj)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            return None
        await db.refresh(db_obj)
        return db_obj

    async def get_by_organization(
        self, db: AsyncSession, *, organization_id: int, status: Optional[str] = None
    ) -> List[Connection]:
        """Connections where the organization is requester or receiver"""
        conditions = [or_(Connection.requester_id == organization_id, Connection.receiver_id == organization_id)]
        if status:
            conditions.append(Connection.status == status)
        query = select(Connection).where(*conditions).order_by(Connection.created_at.desc(), Connection.id.desc())
        result = await db.execute(query)
        return list(result.scalars().all())

    async def count_by_organization(self, db: AsyncSession, *, organization_id: int, status: str) -> int:
        query = (
            select(func.count())
            .select_from(Connection)
            .where(
                and_(
                    or_(Connection.requester_id == organization_id, Connection.receiver_id == organization_id),
                    Connection.status == status,
                )
            )
        )
        result = await db.execute(query)
        return result.scalar()

    async def update_status(
        self, db: AsyncSession, *, connection_id: int, expected: str, new_status: str
    ) -> Optional[Connection]:
        """Conditionally move a connection out of ``expected``; None if it was no longer there"""
        stmt = (
            update(Connection)
            .where(and_(Connection.id == connection_id, Connection.status == expected))
            .values(status=new_status)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        if result.rowcount != 1:
            return None
        await db.commit()
        db_obj = await self.get(db, connection_id)
        await db.refresh(db_obj)
        return db_obj


connection = CRUDConnection(Connection)
