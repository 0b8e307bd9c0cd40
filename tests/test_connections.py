import pytest

from campusconnect.core.enums import ConnectionStatus
from campusconnect.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from campusconnect.schemas.connections import ConnectionCreate
from campusconnect.services.connections import connection_service
from campusconnect.services.organizations import organization_service


async def test_request_and_accept(db, make_org):
    a = await make_org()
    b = await make_org()

    connection = await connection_service.request_connection(
        db, a, ConnectionCreate(receiverId=b.id, message="Hi!")
    )
    assert connection.status == "pending"
    assert connection.requester_id == a.id
    assert connection.receiver_id == b.id

    accepted = await connection_service.respond(db, b, connection.id, ConnectionStatus.accepted)
    assert accepted.status == "accepted"


async def test_connect_with_self_is_conflict(db, make_org):
    a = await make_org()
    with pytest.raises(ConflictError):
        await connection_service.request_connection(db, a, ConnectionCreate(receiverId=a.id))


async def test_unknown_receiver(db, make_org):
    a = await make_org()
    with pytest.raises(NotFoundError):
        await connection_service.request_connection(db, a, ConnectionCreate(receiverId=999))


async def test_requester_id_must_match_caller(db, make_org):
    a = await make_org()
    b = await make_org()
    c = await make_org()
    with pytest.raises(ForbiddenError):
        await connection_service.request_connection(db, a, ConnectionCreate(receiverId=b.id, requesterId=c.id))


async def test_duplicate_pair_in_either_direction(db, make_org):
    a = await make_org()
    b = await make_org()
    await connection_service.request_connection(db, a, ConnectionCreate(receiverId=b.id))

    with pytest.raises(ConflictError):
        await connection_service.request_connection(db, a, ConnectionCreate(receiverId=b.id))
    with pytest.raises(ConflictError):
        await connection_service.request_connection(db, b, ConnectionCreate(receiverId=a.id))


async def test_rejected_pair_cannot_be_requested_again(db, make_org):
    a = await make_org()
    b = await make_org()
    connection = await connection_service.request_connection(db, a, ConnectionCreate(receiverId=b.id))
    await connection_service.respond(db, b, connection.id, ConnectionStatus.rejected)

    with pytest.raises(ConflictError):
        await connection_service.request_connection(db, b, ConnectionCreate(receiverId=a.id))


async def test_only_receiver_may_respond(db, make_org):
    a = await make_org()
    b = await make_org()
    connection = await connection_service.request_connection(db, a, ConnectionCreate(receiverId=b.id))

    with pytest.raises(ForbiddenError):
        await connection_service.respond(db, a, connection.id, ConnectionStatus.accepted)


async def test_resolved_connection_cannot_change(db, make_org):
    a = await make_org()
    b = await make_org()
    connection = await connection_service.request_connection(db, a, ConnectionCreate(receiverId=b.id))
    await connection_service.respond(db, b, connection.id, ConnectionStatus.accepted)

    with pytest.raises(ConflictError):
        await connection_service.respond(db, b, connection.id, ConnectionStatus.rejected)
    with pytest.raises(ConflictError):
        await connection_service.respond(db, b, connection.id, ConnectionStatus.pending)


async def test_respond_to_missing_connection(db, make_org):
    b = await make_org()
    with pytest.raises(NotFoundError):
        await connection_service.respond(db, b, 42, ConnectionStatus.accepted)


async def test_list_connections_by_participant_and_status(db, make_org):
    a = await make_org()
    b = await make_org()
    c = await make_org()
    ab = await connection_service.request_connection(db, a, ConnectionCreate(receiverId=b.id))
    await connection_service.request_connection(db, c, ConnectionCreate(receiverId=a.id))
    await connection_service.respond(db, b, ab.id, ConnectionStatus.accepted)

    everything = await connection_service.list_connections(db, a)
    assert len(everything) == 2
    accepted = await connection_service.list_connections(db, a, status="accepted")
    assert [c.id for c in accepted] == [ab.id]
    assert await connection_service.list_connections(db, b, status="pending") == []


async def test_recommended_excludes_any_existing_connection(db, make_org):
    a = await make_org()
    b = await make_org()
    c = await make_org()
    d = await make_org()
    connection = await connection_service.request_connection(db, a, ConnectionCreate(receiverId=b.id))
    await connection_service.respond(db, b, connection.id, ConnectionStatus.rejected)

    recommended = await organization_service.recommended(db, a, limit=10)
    assert [o.id for o in recommended] == [c.id, d.id]

    limited = await organization_service.recommended(db, a, limit=1)
    assert [o.id for o in limited] == [c.id]
