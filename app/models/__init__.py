from .note import Note
from .tenant import Tenant, PlanType, UNLIMITED_NOTES
from .user import User, UserRole
