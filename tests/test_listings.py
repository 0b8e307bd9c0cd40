import pytest

from campusconnect.core.enums import EquipmentRequestStatus
from campusconnect.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from campusconnect.schemas.equipment import EquipmentCreate, EquipmentUpdate
from campusconnect.schemas.requests import EquipmentRequestCreate, ServiceRequestCreate
from campusconnect.schemas.services import ServiceCreate, ServiceUpdate
from campusconnect.services.listings import listing_service
from campusconnect.services.requests import request_service


def service_payload(**kwargs):
    data = {
        "title": "Poster design",
        "description": "Posters for events",
        "serviceType": "Design",
        "availability": "Weekdays",
    }
    data.update(kwargs)
    return ServiceCreate(**data)


async def test_owner_is_forced_to_caller(db, make_org):
    a = await make_org()
    b = await make_org()
    service = await listing_service.create_service(db, a, service_payload(organizationId=b.id))
    assert service.organization_id == a.id
    assert service.status == "active"
    assert service.pricing == "free"

    equipment = await listing_service.create_equipment(
        db, a, EquipmentCreate(name="Tripod", description="Aluminium tripod", organizationId=b.id)
    )
    assert equipment.organization_id == a.id
    assert equipment.status == "available"


async def test_only_owner_updates_and_deletes(db, make_org):
    a = await make_org()
    b = await make_org()
    service = await listing_service.create_service(db, a, service_payload())

    with pytest.raises(ForbiddenError):
        await listing_service.update_service(db, b, service.id, ServiceUpdate(title="Mine now"))
    with pytest.raises(ForbiddenError):
        await listing_service.delete_service(db, b, service.id)

    updated = await listing_service.update_service(db, a, service.id, ServiceUpdate(title="Flyers"))
    assert updated.title == "Flyers"
    assert updated.description == "Posters for events"


async def test_update_merges_pricing(db, make_org):
    a = await make_org()
    service = await listing_service.create_service(db, a, service_payload())

    with pytest.raises(ValidationError):
        await listing_service.update_service(db, a, service.id, ServiceUpdate(pricing="paid"))

    paid = await listing_service.update_service(db, a, service.id, ServiceUpdate(pricing="paid", price=15))
    assert paid.price == 15

    free = await listing_service.update_service(db, a, service.id, ServiceUpdate(pricing="free"))
    assert free.pricing == "free"
    assert free.price is None


async def test_missing_listing(db, make_org):
    a = await make_org()
    with pytest.raises(NotFoundError):
        await listing_service.get_service(db, 123)
    with pytest.raises(NotFoundError):
        await listing_service.update_equipment(db, a, 123, EquipmentUpdate(name="x"))
    with pytest.raises(NotFoundError):
        await listing_service.list_services_by_organization(db, 999)


async def test_delete_service_removes_its_requests(db, make_org, make_service):
    a = await make_org()
    b = await make_org()
    service = await make_service(a)
    request = await request_service.create_service_request(db, b, service.id, ServiceRequestCreate())

    assert await listing_service.delete_service(db, a, service.id) is True
    with pytest.raises(NotFoundError):
        await listing_service.get_service(db, service.id)
    with pytest.raises(NotFoundError):
        await request_service.get_service_request(db, b, request.id)


async def test_borrowed_equipment_is_locked(db, make_org, make_equipment):
    owner = await make_org()
    borrower = await make_org()
    equipment = await make_equipment(owner)
    request = await request_service.create_equipment_request(db, borrower, equipment.id, EquipmentRequestCreate())
    await request_service.update_equipment_request_status(db, owner, request.id, EquipmentRequestStatus.approved)

    with pytest.raises(ConflictError):
        await listing_service.update_equipment(db, owner, equipment.id, EquipmentUpdate(status="maintenance"))
    with pytest.raises(ConflictError) as exc:
        await listing_service.delete_equipment(db, owner, equipment.id)
    assert exc.value.details == {"relatedRequests": [request.id]}

    # Other fields stay editable
    renamed = await listing_service.update_equipment(db, owner, equipment.id, EquipmentUpdate(name="Projector 2"))
    assert renamed.name == "Projector 2"
    assert renamed.status == "borrowed"

    await request_service.update_equipment_request_status(db, owner, request.id, EquipmentRequestStatus.returned)
    assert await listing_service.delete_equipment(db, owner, equipment.id) is True


async def test_discovery_filters(db, make_org, make_service, make_equipment):
    a = await make_org()
    await make_service(a, title="Photo booth", service_type="Media")
    await make_service(a, title="Tutoring", description="Maths help", service_type="Education",
                       pricing="paid", price=5)
    await make_service(a, title="Old service", service_type="Media", status="inactive")
    await make_equipment(a, name="Camera")
    await make_equipment(a, name="Speaker", status="maintenance")

    media = await listing_service.list_services(db, service_type="Media")
    assert {s.title for s in media} == {"Photo booth", "Old service"}
    paid = await listing_service.list_services(db, pricing="paid")
    assert [s.title for s in paid] == ["Tutoring"]
    active_media = await listing_service.list_services(db, service_type="Media", status="active")
    assert [s.title for s in active_media] == ["Photo booth"]
    assert [s.title for s in await listing_service.list_services(db, q="MATHS")] == ["Tutoring"]

    available = await listing_service.list_equipment(db, status="available")
    assert [e.name for e in available] == ["Camera"]
    assert [e.name for e in await listing_service.list_equipment(db, q="speak")] == ["Speaker"]
