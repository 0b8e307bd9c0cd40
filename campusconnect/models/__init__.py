from campusconnect.models.organizations import Organization
from campusconnect.models.services import Service
from campusconnect.models.equipment import Equipment
from campusconnect.models.connections import Connection
from campusconnect.models.requests import ServiceRequest, EquipmentRequest
from campusconnect.models.messages import Message
from campusconnect.models.logs import SystemLog

# Re-export every model for convenient imports
__all__ = [
    "Organization",
    "Service",
    "Equipment",
    "Connection",
    "ServiceRequest",
    "EquipmentRequest",
    "Message",
    "SystemLog",
]
