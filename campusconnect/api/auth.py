from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.api.deps import get_client_ip, get_current_organization
from campusconnect.api.serializers import organization_to_dict
from campusconnect.core.security import create_access_token
from campusconnect.database import get_db
from campusconnect.models.organizations import Organization
from campusconnect.schemas import SimpleResponse
from campusconnect.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from campusconnect.schemas.organizations import OrganizationResponse
from campusconnect.services.logging import logging_service
from campusconnect.services.organizations import organization_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    register_data: RegisterRequest,
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Register a new organization account
    """
    organization = await organization_service.register(db, register_data, ip_address=ip_address)
    return {"success": True, "data": organization_to_dict(organization)}


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Log in with username and password and receive a bearer token
    """
    organization = await organization_service.authenticate(db, login_data.username, login_data.password)
    if not organization:
        # Never record the password
        await logging_service.warning(
            db,
            component="auth",
            message=f"Login failed for {login_data.username}: invalid credentials",
            details={"username": login_data.username, "reason": "invalid_credentials"},
            ip_address=ip_address,
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "success": False,
                "error": {"code": "INVALID_CREDENTIALS", "message": "Invalid username or password"},
            },
        )

    token = create_access_token(organization.id)

    await logging_service.audit(
        db,
        component="auth",
        action="login",
        organization_id=organization.id,
        resource_type="organization",
        resource_id=organization.id,
        details={"username": organization.username},
        ip_address=ip_address,
    )

    return {
        "success": True,
        "data": {
            "token": token,
            "tokenType": "bearer",
            "organization": organization_to_dict(organization),
        },
    }


@router.post("/logout", response_model=SimpleResponse)
async def logout(
    current_organization: Organization = Depends(get_current_organization),
    ip_address: Optional[str] = Depends(get_client_ip),
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Log out; tokens are stateless, so this only records the event
    """
    await logging_service.audit(
        db,
        component="auth",
        action="logout",
        organization_id=current_organization.id,
        resource_type="organization",
        resource_id=current_organization.id,
        ip_address=ip_address,
    )
    return {"success": True}


@router.get("/me", response_model=OrganizationResponse)
async def get_me(current_organization: Organization = Depends(get_current_organization)) -> Any:
    """
    Profile of the authenticated organization
    """
    return {"success": True, "data": organization_to_dict(current_organization)}
