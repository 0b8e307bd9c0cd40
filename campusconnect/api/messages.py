from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.api.deps import get_client_ip, get_current_organization
from campusconnect.api.serializers import message_to_dict
from campusconnect.database import get_db
from campusconnect.models.organizations import Organization
from campusconnect.schemas.messages import (
    ConversationList,
    ConversationResponse,
    MarkReadResponse,
    MessageCreate,
    MessageResponse,
    UnreadCountResponse,
)
from campusconnect.services.messaging import messaging_service

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    message_in: MessageCreate,
    current_organization: Organization = Depends(get_current_organization),
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Any:
    message = await messaging_service.send(db, current_organization, message_in, ip_address=ip_address)
    return {"success": True, "data": message_to_dict(message)}


@router.get("/conversations", response_model=ConversationList)
async def list_conversations(
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    One entry per counterpart with the latest message, most recent first
    """
    summaries = await messaging_service.list_conversations(db, current_organization)
    conversations = []
    for summary in summaries:
        conversations.append({
            "organizationId": summary["organization_id"],
            "organizationName": summary["organization_name"],
            "lastMessage": message_to_dict(summary["last_message"]),
            "unreadCount": summary["unread_count"],
        })
    return {"success": True, "data": {"conversations": conversations}}


@router.get("/unread", response_model=UnreadCountResponse)
async def get_unread_count(
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    count = await messaging_service.unread_count(db, current_organization)
    return {"success": True, "data": {"count": count}}


@router.get("/{organization_id}", response_model=ConversationResponse)
async def get_conversation(
    organization_id: int,
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Conversation with another organization; marks messages addressed to the caller as read
    """
    messages, marked = await messaging_service.get_conversation(db, current_organization, organization_id)
    return {
        "success": True,
        "data": {
            "organizationId": organization_id,
            "messages": [message_to_dict(m) for m in messages],
            "markedRead": marked,
        },
    }


@router.put("/{organization_id}/read", response_model=MarkReadResponse)
async def mark_conversation_read(
    organization_id: int,
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    marked = await messaging_service.mark_conversation_read(db, current_organization, organization_id)
    return {"success": True, "data": {"organizationId": organization_id, "markedRead": marked}}


@router.put("/{message_id}/read-state", response_model=MessageResponse)
async def mark_message_read(
    message_id: int,
    current_organization: Organization = Depends(get_current_organization),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Mark a single message as read; receiver only
    """
    message = await messaging_service.mark_message_read(db, current_organization, message_id)
    return {"success": True, "data": message_to_dict(message)}
