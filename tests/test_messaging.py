from datetime import datetime

import pytest

from campusconnect.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from campusconnect.models import Message
from campusconnect.schemas.messages import MessageCreate
from campusconnect.services.messaging import messaging_service


async def test_reading_a_conversation_marks_only_incoming_messages(db, make_org):
    a = await make_org()
    b = await make_org()

    await messaging_service.send(db, a, MessageCreate(receiverId=b.id, content="Hello"))
    await messaging_service.send(db, a, MessageCreate(receiverId=b.id, content="Are you free on Friday?"))
    await messaging_service.send(db, b, MessageCreate(receiverId=a.id, content="Yes"))

    assert await messaging_service.unread_count(db, b) == 2
    assert await messaging_service.unread_count(db, a) == 1

    messages, marked = await messaging_service.get_conversation(db, b, a.id)
    assert marked == 2
    assert [m.content for m in messages] == ["Hello", "Are you free on Friday?", "Yes"]
    assert [m.read for m in messages] == [True, True, False]

    assert await messaging_service.unread_count(db, b) == 0
    assert await messaging_service.unread_count(db, a) == 1


async def test_conversation_includes_both_directions_only(db, make_org):
    a = await make_org()
    b = await make_org()
    c = await make_org()
    await messaging_service.send(db, a, MessageCreate(receiverId=b.id, content="to b"))
    await messaging_service.send(db, c, MessageCreate(receiverId=a.id, content="from c"))

    messages, _ = await messaging_service.get_conversation(db, a, b.id)
    assert [m.content for m in messages] == ["to b"]


async def test_send_to_self_is_conflict(db, make_org):
    a = await make_org()
    with pytest.raises(ConflictError):
        await messaging_service.send(db, a, MessageCreate(receiverId=a.id, content="me"))


async def test_send_to_unknown_receiver(db, make_org):
    a = await make_org()
    with pytest.raises(NotFoundError):
        await messaging_service.send(db, a, MessageCreate(receiverId=77, content="hello?"))


async def test_sender_id_must_be_caller(db, make_org):
    a = await make_org()
    b = await make_org()
    with pytest.raises(ForbiddenError):
        await messaging_service.send(db, a, MessageCreate(receiverId=b.id, content="hi", senderId=b.id))


async def test_mark_single_message_read_is_receiver_only_and_idempotent(db, make_org):
    a = await make_org()
    b = await make_org()
    message = await messaging_service.send(db, a, MessageCreate(receiverId=b.id, content="ping"))

    with pytest.raises(ForbiddenError):
        await messaging_service.mark_message_read(db, a, message.id)

    first = await messaging_service.mark_message_read(db, b, message.id)
    second = await messaging_service.mark_message_read(db, b, message.id)
    assert first.read is True
    assert second.read is True
    assert await messaging_service.unread_count(db, b) == 0

    with pytest.raises(NotFoundError):
        await messaging_service.mark_message_read(db, b, 999)


async def test_mark_conversation_read_returns_count(db, make_org):
    a = await make_org()
    b = await make_org()
    await messaging_service.send(db, a, MessageCreate(receiverId=b.id, content="one"))
    await messaging_service.send(db, a, MessageCreate(receiverId=b.id, content="two"))

    assert await messaging_service.mark_conversation_read(db, b, a.id) == 2
    assert await messaging_service.mark_conversation_read(db, b, a.id) == 0


async def test_conversation_summaries(db, make_org):
    a = await make_org(name="Alpha")
    b = await make_org(name="Beta")
    c = await make_org(name="Gamma")
    await messaging_service.send(db, b, MessageCreate(receiverId=a.id, content="first from beta"))
    await messaging_service.send(db, c, MessageCreate(receiverId=a.id, content="from gamma"))
    await messaging_service.send(db, b, MessageCreate(receiverId=a.id, content="second from beta"))

    summaries = await messaging_service.list_conversations(db, a)
    assert [s["organization_name"] for s in summaries] == ["Beta", "Gamma"]
    assert summaries[0]["last_message"].content == "second from beta"
    assert summaries[0]["unread_count"] == 2
    assert summaries[1]["unread_count"] == 1


async def test_conversation_orders_by_time_then_id(db, make_org):
    a = await make_org()
    b = await make_org()
    noon = datetime(2026, 5, 1, 12, 0)
    # Inserted out of chronological order, with a tie at noon
    rows = [
        Message(sender_id=a.id, receiver_id=b.id, content="late", created_at=datetime(2026, 5, 1, 18, 0)),
        Message(sender_id=b.id, receiver_id=a.id, content="noon first", created_at=noon),
        Message(sender_id=a.id, receiver_id=b.id, content="early", created_at=datetime(2026, 5, 1, 8, 0)),
        Message(sender_id=a.id, receiver_id=b.id, content="noon second", created_at=noon),
    ]
    for row in rows:
        db.add(row)
        await db.commit()

    messages, _ = await messaging_service.get_conversation(db, a, b.id, mark_read=False)
    assert [m.content for m in messages] == ["early", "noon first", "noon second", "late"]

    from_other_side, _ = await messaging_service.get_conversation(db, b, a.id)
    assert [m.content for m in from_other_side] == ["early", "noon first", "noon second", "late"]
