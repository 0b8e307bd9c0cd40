from enum import Enum


class Pricing(str, Enum):
    free = "free"
    paid = "paid"


class ServiceStatus(str, Enum):
    active = "active"
    inactive = "inactive"


class EquipmentStatus(str, Enum):
    available = "available"
    borrowed = "borrowed"
    maintenance = "maintenance"


class ConnectionStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class ServiceRequestStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"
    completed = "completed"


class EquipmentRequestStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    returned = "returned"


class RequestDirection(str, Enum):
    incoming = "incoming"
    outgoing = "outgoing"
