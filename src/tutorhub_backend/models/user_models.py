import enum


class UserRole(str, enum.Enum):
    STUDENT = "student"
    PARENT = "parent"
    TUTOR = "tutor"
    MANAGER = "manager"
    ADMIN = "admin"
