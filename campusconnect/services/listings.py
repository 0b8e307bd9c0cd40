"""
Service and equipment listings.

Owners create, update and delete their own listings; the owner of a new
listing is always the authenticated organization. Equipment status is
owned by the borrowing workflow while a borrowing is outstanding.
"""

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.core.enums import EquipmentStatus, Pricing
from campusconnect.core.exceptions import ConflictError, NotFoundError, ValidationError
from campusconnect.core.permissions import ensure_owner
from campusconnect.crud.equipment import equipment as crud_equipment
from campusconnect.crud.organizations import organization as crud_organization
from campusconnect.crud.services import service as crud_service
from campusconnect.models.equipment import Equipment
from campusconnect.models.organizations import Organization
from campusconnect.models.services import Service
from campusconnect.schemas.equipment import EquipmentCreate, EquipmentUpdate
from campusconnect.schemas.services import ServiceCreate, ServiceUpdate
from campusconnect.services.logging import logging_service


class ListingService:
    """
    Services and equipment offered by organizations
    """

    # Services

    @staticmethod
    async def create_service(
        db: AsyncSession, actor: Organization, obj_in: ServiceCreate, ip_address: Optional[str] = None
    ) -> Service:
        service = await crud_service.create_for_organization(db, obj_in=obj_in, organization_id=actor.id)
        await logging_service.audit(
            db,
            component="service",
            action="create",
            organization_id=actor.id,
            resource_type="service",
            resource_id=service.id,
            details={"title": service.title, "serviceType": service.service_type, "pricing": service.pricing},
            ip_address=ip_address,
        )
        return service

    @staticmethod
    async def get_service(db: AsyncSession, service_id: int) -> Service:
        service = await crud_service.get(db, service_id)
        if service is None:
            raise NotFoundError("Service not found", details={"serviceId": service_id})
        return service

    @staticmethod
    async def list_services(
        db: AsyncSession,
        *,
        service_type: Optional[str] = None,
        pricing: Optional[str] = None,
        status: Optional[str] = None,
        q: Optional[str] = None,
    ) -> List[Service]:
        return await crud_service.search(db, service_type=service_type, pricing=pricing, status=status, q=q)

    @staticmethod
    async def list_services_by_organization(db: AsyncSession, organization_id: int) -> List[Service]:
        if await crud_organization.get(db, organization_id) is None:
            raise NotFoundError("Organization not found", details={"organizationId": organization_id})
        return await crud_service.get_by_organization(db, organization_id=organization_id)

    @classmethod
    async def update_service(
        cls,
        db: AsyncSession,
        actor: Organization,
        service_id: int,
        obj_in: ServiceUpdate,
        ip_address: Optional[str] = None,
    ) -> Service:
        service = await cls.get_service(db, service_id)
        ensure_owner(actor, service, entity="service")

        changes = obj_in.model_dump(exclude_unset=True)
        changes.pop("organizationId", None)

        # Pricing and price are validated against the merged record
        pricing = changes.get("pricing", service.pricing)
        pricing = pricing.value if isinstance(pricing, Pricing) else pricing
        price = changes["price"] if "price" in changes else service.price
        if pricing == Pricing.paid.value and price is None:
            raise ValidationError("price is required when pricing is paid", details={"field": "price"})
        if pricing == Pricing.free.value and price is not None:
            changes["price"] = None

        old_values = {"title": service.title, "status": service.status, "pricing": service.pricing}
        updated = await crud_service.update(db, db_obj=service, obj_in=changes)
        await logging_service.audit(
            db,
            component="service",
            action="update",
            organization_id=actor.id,
            resource_type="service",
            resource_id=service_id,
            details={
                "old": old_values,
                "new": {"title": updated.title, "status": updated.status, "pricing": updated.pricing},
            },
            ip_address=ip_address,
        )
        return updated

    @classmethod
    async def delete_service(
        cls, db: AsyncSession, actor: Organization, service_id: int, ip_address: Optional[str] = None
    ) -> bool:
        service = await cls.get_service(db, service_id)
        ensure_owner(actor, service, entity="service")

        title = service.title
        deleted = await crud_service.remove(db, id=service_id)
        await logging_service.audit(
            db,
            component="service",
            action="delete",
            organization_id=actor.id,
            resource_type="service",
            resource_id=service_id,
            details={"title": title},
            ip_address=ip_address,
        )
        return deleted

    # Equipment

    @staticmethod
    async def create_equipment(
        db: AsyncSession, actor: Organization, obj_in: EquipmentCreate, ip_address: Optional[str] = None
    ) -> Equipment:
        equipment = await crud_equipment.create_for_organization(db, obj_in=obj_in, organization_id=actor.id)
        await logging_service.audit(
            db,
            component="equipment",
            action="create",
            organization_id=actor.id,
            resource_type="equipment",
            resource_id=equipment.id,
            details={"name": equipment.name, "status": equipment.status},
            ip_address=ip_address,
        )
        return equipment

    @staticmethod
    async def get_equipment(db: AsyncSession, equipment_id: int) -> Equipment:
        equipment = await crud_equipment.get(db, equipment_id)
        if equipment is None:
            raise NotFoundError("Equipment not found", details={"equipmentId": equipment_id})
        return equipment

    @staticmethod
    async def list_equipment(
        db: AsyncSession, *, status: Optional[str] = None, q: Optional[str] = None
    ) -> List[Equipment]:
        return await crud_equipment.search(db, status=status, q=q)

    @staticmethod
    async def list_equipment_by_organization(db: AsyncSession, organization_id: int) -> List[Equipment]:
        if await crud_organization.get(db, organization_id) is None:
            raise NotFoundError("Organization not found", details={"organizationId": organization_id})
        return await crud_equipment.get_by_organization(db, organization_id=organization_id)

    @classmethod
    async def update_equipment(
        cls,
        db: AsyncSession,
        actor: Organization,
        equipment_id: int,
        obj_in: EquipmentUpdate,
        ip_address: Optional[str] = None,
    ) -> Equipment:
        equipment = await cls.get_equipment(db, equipment_id)
        ensure_owner(actor, equipment, entity="equipment")

        changes = obj_in.model_dump(exclude_unset=True)
        changes.pop("organizationId", None)

        # While borrowed, status only moves through the borrowing workflow
        if "status" in changes and equipment.status == EquipmentStatus.borrowed.value:
            new_status = changes["status"]
            new_status = new_status.value if isinstance(new_status, EquipmentStatus) else new_status
            if new_status != equipment.status:
                raise ConflictError(
                    "Equipment is currently borrowed; its status changes when the borrowing is returned",
                    code="RESOURCE_IN_USE",
                    details={"equipmentId": equipment_id, "currentStatus": equipment.status},
                )

        old_values = {"name": equipment.name, "status": equipment.status}
        updated = await crud_equipment.update(db, db_obj=equipment, obj_in=changes)
        await logging_service.audit(
            db,
            component="equipment",
            action="update",
            organization_id=actor.id,
            resource_type="equipment",
            resource_id=equipment_id,
            details={"old": old_values, "new": {"name": updated.name, "status": updated.status}},
            ip_address=ip_address,
        )
        return updated

    @classmethod
    async def delete_equipment(
        cls, db: AsyncSession, actor: Organization, equipment_id: int, ip_address: Optional[str] = None
    ) -> bool:
        equipment = await cls.get_equipment(db, equipment_id)
        ensure_owner(actor, equipment, entity="equipment")

        # Outstanding borrowings must be returned first
        can_delete = await crud_equipment.check_can_delete(db, equipment_id=equipment_id)
        if not can_delete:
            related_requests = await crud_equipment.get_related_requests(db, equipment_id=equipment_id)
            raise ConflictError(
                "Equipment has an outstanding borrowing and cannot be deleted",
                code="RESOURCE_IN_USE",
                details={"relatedRequests": related_requests},
            )

        name = equipment.name
        deleted = await crud_equipment.remove(db, id=equipment_id)
        await logging_service.audit(
            db,
            component="equipment",
            action="delete",
            organization_id=actor.id,
            resource_type="equipment",
            resource_id=equipment_id,
            details={"name": name},
            ip_address=ip_address,
        )
        return deleted


listing_service = ListingService()
