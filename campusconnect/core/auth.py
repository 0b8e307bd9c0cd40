from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.core.security import decode_access_token
from campusconnect.crud.organizations import organization as crud_organization
from campusconnect.database import get_db
from campusconnect.models.organizations import Organization
from campusconnect.services.logging import logging_service

# HTTP Bearer token authentication
security = HTTPBearer(auto_error=False)


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={
            "success": False,
            "error": {
                "code": "INVALID_TOKEN",
                "message": "Invalid authentication credentials",
            },
        },
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_organization(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> Organization:
    """
    Resolve the authenticated organization from the bearer token
    """
    if credentials is None:
        raise _credentials_exception()

    try:
        payload = decode_access_token(credentials.credentials)
        organization_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError) as e:
        await logging_service.warning(
            db,
            component="auth",
            message="Authentication failed: token could not be verified",
            details={"error": str(e)},
            ip_address=await logging_service.get_request_ip(request),
        )
        raise _credentials_exception()

    organization = await crud_organization.get(db, organization_id)
    if organization is None:
        await logging_service.warning(
            db,
            component="auth",
            message=f"Authentication failed: organization {organization_id} does not exist",
            ip_address=await logging_service.get_request_ip(request),
        )
        raise _credentials_exception()

    return organization
