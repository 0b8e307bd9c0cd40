from campusconnect.services.logging import logging_service
from campusconnect.services.organizations import organization_service
from campusconnect.services.listings import listing_service
from campusconnect.services.connections import connection_service
from campusconnect.services.requests import request_service
from campusconnect.services.messaging import messaging_service
from campusconnect.services.dashboard import dashboard_service

# For convenience, export all services
__all__ = [
    "logging_service",
    "organization_service",
    "listing_service",
    "connection_service",
    "request_service",
    "messaging_service",
    "dashboard_service",
]
