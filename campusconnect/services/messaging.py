"""
Direct messaging between organizations.

Every message starts unread. Reading a conversation marks the messages
addressed to the reader as read; messages the reader sent are left alone.
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.core.exceptions import NotFoundError
from campusconnect.core.permissions import ensure_acting_as, ensure_message_receiver, ensure_not_self
from campusconnect.crud.messages import message as crud_message
from campusconnect.crud.organizations import organization as crud_organization
from campusconnect.models.messages import Message
from campusconnect.models.organizations import Organization
from campusconnect.schemas.messages import MessageCreate
from campusconnect.services.logging import logging_service


class MessagingService:
    """
    Messages, conversations and unread tracking
    """

    @staticmethod
    async def _ensure_organization(db: AsyncSession, organization_id: int) -> Organization:
        organization = await crud_organization.get(db, organization_id)
        if organization is None:
            raise NotFoundError("Organization not found", details={"organizationId": organization_id})
        return organization

    @classmethod
    async def send(
        cls, db: AsyncSession, actor: Organization, obj_in: MessageCreate, ip_address: Optional[str] = None
    ) -> Message:
        ensure_acting_as(actor, obj_in.senderId, field="senderId")
        await cls._ensure_organization(db, obj_in.receiverId)
        ensure_not_self(actor.id, obj_in.receiverId, message="Cannot send a message to yourself")

        message = await crud_message.create_message(
            db, sender_id=actor.id, receiver_id=obj_in.receiverId, content=obj_in.content
        )
        await logging_service.audit(
            db,
            component="message",
            action="send",
            organization_id=actor.id,
            resource_type="message",
            resource_id=message.id,
            details={"receiverId": message.receiver_id},
            ip_address=ip_address,
        )
        return message

    @classmethod
    async def get_conversation(
        cls, db: AsyncSession, actor: Organization, organization_id: int, mark_read: bool = True
    ) -> Tuple[List[Message], int]:
        """
        Messages exchanged with another organization, oldest first

        Returns the messages and how many of them were marked read by this call.
        The returned messages already reflect the new read state.
        """
        await cls._ensure_organization(db, organization_id)
        marked = 0
        if mark_read:
            marked = await crud_message.mark_conversation_read(db, reader_id=actor.id, other_id=organization_id)
        messages = await crud_message.get_conversation(db, org_a=actor.id, org_b=organization_id)
        return messages, marked

    @classmethod
    async def mark_conversation_read(cls, db: AsyncSession, actor: Organization, organization_id: int) -> int:
        await cls._ensure_organization(db, organization_id)
        return await crud_message.mark_conversation_read(db, reader_id=actor.id, other_id=organization_id)

    @staticmethod
    async def mark_message_read(db: AsyncSession, actor: Organization, message_id: int) -> Message:
        """Mark one message read; only its receiver may, and repeating it changes nothing"""
        message = await crud_message.get(db, message_id)
        if message is None:
            raise NotFoundError("Message not found", details={"messageId": message_id})
        ensure_message_receiver(actor, message)
        return await crud_message.mark_read(db, message=message)

    @staticmethod
    async def unread_count(db: AsyncSession, actor: Organization) -> int:
        return await crud_message.count_unread(db, receiver_id=actor.id)

    @staticmethod
    async def list_conversations(db: AsyncSession, actor: Organization) -> List[Dict[str, Any]]:
        """Conversation summaries with the counterpart's name, most recent first"""
        summaries = await crud_message.get_conversation_summaries(db, organization_id=actor.id)
        for summary in summaries:
            other = await crud_organization.get(db, summary["organization_id"])
            summary["organization_name"] = other.name if other else None
        return summaries


messaging_service = MessagingService()
