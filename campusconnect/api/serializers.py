from typing import Any, Dict

from campusconnect.models import (
    Connection,
    Equipment,
    EquipmentRequest,
    Message,
    Organization,
    Service,
    ServiceRequest,
)


# ORM record -> camelCase response dict


def organization_to_dict(o: Organization) -> Dict[str, Any]:
    return {
        "id": o.id,
        "name": o.name,
        "username": o.username,
        "description": o.description,
        "email": o.email,
        "avatar": o.avatar,
        "createdAt": o.created_at,
    }


def service_to_dict(s: Service) -> Dict[str, Any]:
    return {
        "id": s.id,
        "organizationId": s.organization_id,
        "title": s.title,
        "description": s.description,
        "serviceType": s.service_type,
        "pricing": s.pricing,
        "price": s.price,
        "availability": s.availability,
        "capacity": s.capacity,
        "status": s.status,
        "createdAt": s.created_at,
    }


def equipment_to_dict(e: Equipment) -> Dict[str, Any]:
    return {
        "id": e.id,
        "organizationId": e.organization_id,
        "name": e.name,
        "description": e.description,
        "imageUrl": e.image_url,
        "status": e.status,
        "availableUntil": e.available_until,
        "deposit": e.deposit,
        "conditions": e.conditions,
        "createdAt": e.created_at,
    }


def connection_to_dict(c: Connection) -> Dict[str, Any]:
    return {
        "id": c.id,
        "requesterId": c.requester_id,
        "receiverId": c.receiver_id,
        "status": c.status,
        "message": c.message,
        "createdAt": c.created_at,
    }


def service_request_to_dict(r: ServiceRequest) -> Dict[str, Any]:
    return {
        "id": r.id,
        "serviceId": r.service_id,
        "requesterId": r.requester_id,
        "status": r.status,
        "message": r.message,
        "dateRequested": r.date_requested,
        "createdAt": r.created_at,
    }


def equipment_request_to_dict(r: EquipmentRequest) -> Dict[str, Any]:
    return {
        "id": r.id,
        "equipmentId": r.equipment_id,
        "borrowerId": r.borrower_id,
        "status": r.status,
        "message": r.message,
        "borrowFrom": r.borrow_from,
        "borrowUntil": r.borrow_until,
        "createdAt": r.created_at,
    }


def message_to_dict(m: Message) -> Dict[str, Any]:
    return {
        "id": m.id,
        "senderId": m.sender_id,
        "receiverId": m.receiver_id,
        "content": m.content,
        "read": m.read,
        "createdAt": m.created_at,
    }
