import pytest
from sqlalchemy import update

from campusconnect.core.enums import EquipmentRequestStatus, RequestDirection, ServiceRequestStatus
from campusconnect.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from campusconnect.models import EquipmentRequest
from campusconnect.schemas.requests import EquipmentRequestCreate, ServiceRequestCreate
from campusconnect.services.requests import request_service


# Service requests


async def test_service_request_accept_then_pending_is_conflict(db, make_org, make_service):
    owner = await make_org()
    requester = await make_org()
    service = await make_service(owner)

    request = await request_service.create_service_request(
        db, requester, service.id, ServiceRequestCreate(message="Can you cover our gala?")
    )
    assert request.status == "pending"
    assert request.requester_id == requester.id

    accepted = await request_service.update_service_request_status(
        db, owner, request.id, ServiceRequestStatus.accepted
    )
    assert accepted.status == "accepted"

    completed = await request_service.update_service_request_status(
        db, owner, request.id, ServiceRequestStatus.completed
    )
    assert completed.status == "completed"

    with pytest.raises(ConflictError):
        await request_service.update_service_request_status(db, owner, request.id, ServiceRequestStatus.pending)


async def test_cannot_request_own_service(db, make_org, make_service):
    owner = await make_org()
    service = await make_service(owner)
    with pytest.raises(ConflictError):
        await request_service.create_service_request(db, owner, service.id, ServiceRequestCreate())


async def test_cannot_request_inactive_service(db, make_org, make_service):
    owner = await make_org()
    requester = await make_org()
    service = await make_service(owner, status="inactive")
    with pytest.raises(ConflictError):
        await request_service.create_service_request(db, requester, service.id, ServiceRequestCreate())


async def test_service_request_on_missing_service(db, make_org):
    requester = await make_org()
    with pytest.raises(NotFoundError):
        await request_service.create_service_request(db, requester, 404, ServiceRequestCreate())


async def test_requester_id_must_be_caller(db, make_org, make_service):
    owner = await make_org()
    requester = await make_org()
    service = await make_service(owner)
    with pytest.raises(ForbiddenError):
        await request_service.create_service_request(
            db, requester, service.id, ServiceRequestCreate(requesterId=owner.id)
        )


async def test_only_owner_transitions_service_request(db, make_org, make_service):
    owner = await make_org()
    requester = await make_org()
    service = await make_service(owner)
    request = await request_service.create_service_request(db, requester, service.id, ServiceRequestCreate())

    with pytest.raises(ForbiddenError):
        await request_service.update_service_request_status(
            db, requester, request.id, ServiceRequestStatus.accepted
        )


async def test_request_visibility_and_listing(db, make_org, make_service):
    owner = await make_org()
    requester = await make_org()
    stranger = await make_org()
    service = await make_service(owner)
    request = await request_service.create_service_request(db, requester, service.id, ServiceRequestCreate())

    assert (await request_service.get_service_request(db, owner, request.id)).id == request.id
    assert (await request_service.get_service_request(db, requester, request.id)).id == request.id
    with pytest.raises(ForbiddenError):
        await request_service.get_service_request(db, stranger, request.id)

    listed = await request_service.list_requests_for_service(db, owner, service.id)
    assert [r.id for r in listed] == [request.id]
    with pytest.raises(ForbiddenError):
        await request_service.list_requests_for_service(db, requester, service.id)

    incoming = await request_service.list_service_requests(db, owner, direction=RequestDirection.incoming)
    outgoing = await request_service.list_service_requests(db, requester, direction=RequestDirection.outgoing)
    assert [r.id for r in incoming] == [request.id]
    assert [r.id for r in outgoing] == [request.id]
    assert await request_service.list_service_requests(db, requester, direction=RequestDirection.incoming) == []


# Equipment requests


async def test_approve_marks_equipment_borrowed(db, make_org, make_equipment):
    owner = await make_org()
    borrower = await make_org()
    third = await make_org()
    equipment = await make_equipment(owner)

    request = await request_service.create_equipment_request(
        db, borrower, equipment.id, EquipmentRequestCreate(message="For our film night")
    )
    assert request.status == "pending"
    assert request.borrower_id == borrower.id

    approved = await request_service.update_equipment_request_status(
        db, owner, request.id, EquipmentRequestStatus.approved
    )
    assert approved.status == "approved"
    await db.refresh(equipment)
    assert equipment.status == "borrowed"

    with pytest.raises(ConflictError) as exc:
        await request_service.create_equipment_request(db, third, equipment.id, EquipmentRequestCreate())
    assert "not available" in exc.value.message


async def test_return_makes_equipment_available(db, make_org, make_equipment):
    owner = await make_org()
    borrower = await make_org()
    equipment = await make_equipment(owner)
    request = await request_service.create_equipment_request(db, borrower, equipment.id, EquipmentRequestCreate())
    await request_service.update_equipment_request_status(db, owner, request.id, EquipmentRequestStatus.approved)

    returned = await request_service.update_equipment_request_status(
        db, owner, request.id, EquipmentRequestStatus.returned
    )
    assert returned.status == "returned"
    await db.refresh(equipment)
    assert equipment.status == "available"


async def test_second_approval_fails_without_side_effects(db, make_org, make_equipment):
    owner = await make_org()
    first = await make_org()
    second = await make_org()
    equipment = await make_equipment(owner)

    r1 = await request_service.create_equipment_request(db, first, equipment.id, EquipmentRequestCreate())
    r2 = await request_service.create_equipment_request(db, second, equipment.id, EquipmentRequestCreate())

    await request_service.update_equipment_request_status(db, owner, r1.id, EquipmentRequestStatus.approved)
    with pytest.raises(ConflictError) as exc:
        await request_service.update_equipment_request_status(db, owner, r2.id, EquipmentRequestStatus.approved)
    assert exc.value.code == "NOT_AVAILABLE"

    await db.refresh(r2)
    await db.refresh(equipment)
    assert r2.status == "pending"
    assert equipment.status == "borrowed"

    # The losing request can still be rejected
    rejected = await request_service.update_equipment_request_status(
        db, owner, r2.id, EquipmentRequestStatus.rejected
    )
    assert rejected.status == "rejected"


async def test_pending_cannot_jump_to_returned(db, make_org, make_equipment):
    owner = await make_org()
    borrower = await make_org()
    equipment = await make_equipment(owner)
    request = await request_service.create_equipment_request(db, borrower, equipment.id, EquipmentRequestCreate())

    with pytest.raises(ConflictError):
        await request_service.update_equipment_request_status(
            db, owner, request.id, EquipmentRequestStatus.returned
        )
    await db.refresh(equipment)
    assert equipment.status == "available"


async def test_equipment_in_maintenance_is_not_requestable(db, make_org, make_equipment):
    owner = await make_org()
    borrower = await make_org()
    equipment = await make_equipment(owner, status="maintenance")
    with pytest.raises(ConflictError):
        await request_service.create_equipment_request(db, borrower, equipment.id, EquipmentRequestCreate())


async def test_cannot_borrow_own_equipment(db, make_org, make_equipment):
    owner = await make_org()
    equipment = await make_equipment(owner)
    with pytest.raises(ConflictError):
        await request_service.create_equipment_request(db, owner, equipment.id, EquipmentRequestCreate())


async def test_only_owner_approves(db, make_org, make_equipment):
    owner = await make_org()
    borrower = await make_org()
    equipment = await make_equipment(owner)
    request = await request_service.create_equipment_request(db, borrower, equipment.id, EquipmentRequestCreate())

    with pytest.raises(ForbiddenError):
        await request_service.update_equipment_request_status(
            db, borrower, request.id, EquipmentRequestStatus.approved
        )


async def test_equipment_request_listings(db, make_org, make_equipment):
    owner = await make_org()
    borrower = await make_org()
    equipment = await make_equipment(owner)
    request = await request_service.create_equipment_request(db, borrower, equipment.id, EquipmentRequestCreate())

    incoming = await request_service.list_equipment_requests(db, owner, status="pending")
    assert [r.id for r in incoming] == [request.id]
    outgoing = await request_service.list_equipment_requests(db, borrower, direction=RequestDirection.outgoing)
    assert [r.id for r in outgoing] == [request.id]
    assert await request_service.list_equipment_requests(
        db, borrower, direction=RequestDirection.outgoing, status="approved"
    ) == []
    with pytest.raises(ForbiddenError):
        await request_service.list_requests_for_equipment(db, borrower, equipment.id)


async def test_approval_after_concurrent_reject_is_invalid_state(db, make_org, make_equipment):
    owner = await make_org()
    borrower = await make_org()
    equipment = await make_equipment(owner)
    request = await request_service.create_equipment_request(db, borrower, equipment.id, EquipmentRequestCreate())

    # Another session rejects the request; the loaded instance still reads pending
    await db.execute(
        update(EquipmentRequest)
        .where(EquipmentRequest.id == request.id)
        .values(status="rejected")
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    assert request.status == "pending"

    with pytest.raises(ConflictError) as exc:
        await request_service.update_equipment_request_status(
            db, owner, request.id, EquipmentRequestStatus.approved
        )
    assert exc.value.code == "INVALID_STATE"

    await db.refresh(equipment)
    assert equipment.status == "available"
