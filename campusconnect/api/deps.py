from typing import Optional

from fastapi import Request

from campusconnect.core.auth import get_current_organization
from campusconnect.services.logging import logging_service

__all__ = ["get_current_organization", "get_client_ip"]


async def get_client_ip(request: Request) -> Optional[str]:
    """
    Dependency: client address recorded on audit log entries
    """
    return await logging_service.get_request_ip(request)
