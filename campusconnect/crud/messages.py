from typing import Any, Dict, List

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.crud.base import CRUDBase
from campusconnect.models.messages import Message
from campusconnect.schemas.messages import MessageCreate


class CRUDMessage(CRUDBase[Message, MessageCreate, Any]):
    """Direct message CRUD operations"""

    field_map = {"content": "content"}

    async def create_message(
        self, db: AsyncSession, *, sender_id: int, receiver_id: int, content: str
    ) -> Message:
        """Create an unread message"""
        return await self.create(
            db,
            obj_in={"sender_id": sender_id, "receiver_id": receiver_id, "content": content, "read": False},
        )

    async def get_conversation(self, db: AsyncSession, *, org_a: int, org_b: int) -> List[Message]:
        """All messages between two organizations in either direction, oldest first

        Ties on created_at are broken by insertion order (id).
        """
        query = (
            select(Message)
            .where(
                or_(
                    and_(Message.sender_id == org_a, Message.receiver_id == org_b),
                    and_(Message.sender_id == org_b, Message.receiver_id == org_a),
                )
            )
            .order_by(Message.created_at.asc(), Message.id.asc())
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def mark_conversation_read(self, db: AsyncSession, *, reader_id: int, other_id: int) -> int:
        """Mark every unread message from ``other_id`` to ``reader_id`` as read; returns how many changed"""
        stmt = (
            update(Message)
            .where(
                and_(
                    Message.receiver_id == reader_id,
                    Message.sender_id == other_id,
                    Message.read == False,  # noqa: E712
                )
            )
            .values(read=True)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount

    async def mark_read(self, db: AsyncSession, *, message: Message) -> Message:
        """Mark a single message as read; already-read messages are left as they are"""
        if not message.read:
            message.read = True
            db.add(message)
            await db.commit()
            await db.refresh(message)
        return message

    async def count_unread(self, db: AsyncSession, *, receiver_id: int) -> int:
        query = (
            select(func.count())
            .select_from(Message)
            .where(and_(Message.receiver_id == receiver_id, Message.read == False))  # noqa: E712
        )
        result = await db.execute(query)
        return result.scalar()

    async def get_conversation_summaries(self, db: AsyncSession, *, organization_id: int) -> List[Dict[str, Any]]:
        """One entry per counterpart with the latest message and the unread count, newest first"""
        query = (
            select(Message)
            .where(or_(Message.sender_id == organization_id, Message.receiver_id == organization_id))
            .order_by(Message.created_at.desc(), Message.id.desc())
        )
        result = await db.execute(query)

        summaries: Dict[int, Dict[str, Any]] = {}
        for message in result.scalars().all():
            other_id = message.receiver_id if message.sender_id == organization_id else message.sender_id
            summary = summaries.get(other_id)
            if summary is None:
                summary = {"organization_id": other_id, "last_message": message, "unread_count": 0}
                summaries[other_id] = summary
            if message.receiver_id == organization_id and not message.read:
                summary["unread_count"] += 1
        return list(summaries.values())


message = CRUDMessage(Message)
