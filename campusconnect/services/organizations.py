from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.config import settings
from campusconnect.core.exceptions import ConflictError, NotFoundError
from campusconnect.core.security import get_password_hash, verify_password
from campusconnect.crud.organizations import organization as crud_organization
from campusconnect.models.organizations import Organization
from campusconnect.schemas.auth import RegisterRequest
from campusconnect.schemas.organizations import OrganizationUpdate
from campusconnect.services.logging import logging_service


class OrganizationService:
    """
    Organization accounts and directory
    """

    @staticmethod
    async def register(
        db: AsyncSession, obj_in: RegisterRequest, ip_address: Optional[str] = None
    ) -> Organization:
        """Create an organization account; usernames are unique"""
        existing = await crud_organization.get_by_username(db, username=obj_in.username)
        if existing:
            raise ConflictError(
                "Username already taken",
                code="DUPLICATE_RESOURCE",
                details={"username": obj_in.username},
            )

        organization = await crud_organization.create_with_password(
            db, obj_in=obj_in, hashed_password=get_password_hash(obj_in.password)
        )
        await logging_service.audit(
            db,
            component="auth",
            action="register",
            organization_id=organization.id,
            resource_type="organization",
            resource_id=organization.id,
            details={"username": organization.username},
            ip_address=ip_address,
        )
        return organization

    @staticmethod
    async def authenticate(db: AsyncSession, username: str, password: str) -> Optional[Organization]:
        """Return the organization when the credentials match, otherwise None"""
        organization = await crud_organization.get_by_username(db, username=username)
        if organization is None or not verify_password(password, organization.password):
            return None
        return organization

    @staticmethod
    async def get(db: AsyncSession, organization_id: int) -> Organization:
        organization = await crud_organization.get(db, organization_id)
        if organization is None:
            raise NotFoundError("Organization not found", details={"organizationId": organization_id})
        return organization

    @staticmethod
    async def list_all(db: AsyncSession) -> List[Organization]:
        return await crud_organization.get_all(db)

    @staticmethod
    async def update_profile(
        db: AsyncSession, actor: Organization, obj_in: OrganizationUpdate, ip_address: Optional[str] = None
    ) -> Organization:
        """Update the caller's own profile fields"""
        updated = await crud_organization.update(db, db_obj=actor, obj_in=obj_in)
        await logging_service.audit(
            db,
            component="organization",
            action="update",
            organization_id=updated.id,
            resource_type="organization",
            resource_id=updated.id,
            details={"fields": sorted(obj_in.model_dump(exclude_unset=True))},
            ip_address=ip_address,
        )
        return updated

    @staticmethod
    async def recommended(
        db: AsyncSession, actor: Organization, limit: Optional[int] = None
    ) -> List[Organization]:
        """Organizations the caller has no connection record with, in any state"""
        if limit is None:
            limit = settings.RECOMMENDED_CONNECTIONS_LIMIT
        candidates = await crud_organization.get_unconnected(db, organization_id=actor.id)
        return candidates[:limit]


organization_service = OrganizationService()
