import json
import logging
from typing import Any, Dict, Optional, Union

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.models.logs import SystemLog

logger = logging.getLogger("campusconnect.audit")

_LEVELS = {"info": logging.INFO, "warning": logging.WARNING, "error": logging.ERROR}


class LoggingService:
    """
    Unified system log service
    Persists audit and diagnostic events to the system_logs table and mirrors
    them to the standard logger
    """

    @staticmethod
    async def log(
        db: AsyncSession,
        level: str,
        component: str,
        message: str,
        details: Optional[Union[Dict[str, Any], str]] = None,
        organization_id: Optional[int] = None,
        ip_address: Optional[str] = None,
    ) -> SystemLog:
        """
        Record a system log entry

        Args:
            db: database session
            level: info, warning or error
            component: auth, organization, service, equipment, connection, request, message
            message: log message
            details: extra context (optional)
            organization_id: acting organization (optional)
            ip_address: client address (optional)

        Returns:
            SystemLog: the stored entry
        """
        if details and isinstance(details, dict):
            details_json = json.dumps(details, default=str)
        elif details:
            details_json = str(details)
        else:
            details_json = None

        logger.log(_LEVELS.get(level, logging.INFO), "[%s] %s", component, message)

        log = SystemLog(
            level=level,
            component=component,
            message=message,
            details=details_json,
            organization_id=organization_id,
            ip_address=ip_address,
        )

        db.add(log)
        await db.commit()
        return log

    @classmethod
    async def info(
        cls,
        db: AsyncSession,
        component: str,
        message: str,
        details: Optional[Union[Dict[str, Any], str]] = None,
        organization_id: Optional[int] = None,
        ip_address: Optional[str] = None,
    ) -> SystemLog:
        """Record an info entry"""
        return await cls.log(
            db=db,
            level="info",
            component=component,
            message=message,
            details=details,
            organization_id=organization_id,
            ip_address=ip_address,
        )

    @classmethod
    async def warning(
        cls,
        db: AsyncSession,
        component: str,
        message: str,
        details: Optional[Union[Dict[str, Any], str]] = None,
        organization_id: Optional[int] = None,
        ip_address: Optional[str] = None,
    ) -> SystemLog:
        """Record a warning entry"""
        return await cls.log(
            db=db,
            level="warning",
            component=component,
            message=message,
            details=details,
            organization_id=organization_id,
            ip_address=ip_address,
        )

    @classmethod
    async def audit(
        cls,
        db: AsyncSession,
        component: str,
        action: str,
        organization_id: int,
        resource_type: str,
        resource_id: Any,
        details: Optional[Dict[str, Any]] = None,
        ip_address: Optional[str] = None,
    ) -> SystemLog:
        """
        Record an audit entry for a state-changing action

        Args:
            db: database session
            component: system component
            action: create, update, delete, transition, login ...
            organization_id: acting organization
            resource_type: service, equipment, connection ...
            resource_id: resource ID
            details: extra context (optional)
            ip_address: client address (optional)
        """
        message = f"{action.upper()} {resource_type} {resource_id}"

        audit_details = {
            "action": action,
            "resourceType": resource_type,
            "resourceId": resource_id,
        }

        if details:
            audit_details.update(details)

        return await cls.info(
            db=db,
            component=component,
            message=message,
            details=audit_details,
            organization_id=organization_id,
            ip_address=ip_address,
        )

    @classmethod
    async def get_request_ip(cls, request: Optional[Request]) -> Optional[str]:
        """Client address of a request, honouring X-Forwarded-For"""
        if request is None:
            return None
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.client.host if request.client else None


# Service instance
logging_service = LoggingService()
