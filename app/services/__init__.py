from app.services.auth import auth_service
from app.services.entitlement import entitlement_service
from .note import note_service

__all__ = ["auth_service", "entitlement_service", "note_service"]
