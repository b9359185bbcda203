from enum import Enum


class UserRole(str, Enum):
    """Roles handed out by the identity layer"""

    USER = "user"
    FACILITY_OWNER = "facility_owner"
    ADMIN = "admin"


class Language(str, Enum):
    EN = "en"
    AR = "ar"
