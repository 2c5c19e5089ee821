"""User schemas."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator

from projektmester.schemas.common import none_to_empty


class UserRole(str, Enum):
    """Application roles."""
    ADMIN = "admin"
    USER = "user"


class UserBase(BaseModel):
    """Base user schema."""

    email: str = Field(..., min_length=3, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    role: UserRole = UserRole.USER

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v


class UserCreate(UserBase):
    """User creation schema."""

    password: str = Field(..., min_length=1, max_length=255)


class UserUpdate(UserCreate):
    """User update schema (full replace)."""

    pass


class User(BaseModel):
    """User response schema. Never carries the credential."""

    id: str
    email: str
    name: str
    role: str


class UserRecord(User):
    """User as persisted in the record store."""

    model_config = ConfigDict(extra="ignore")

    email: str = ""
    name: str = ""
    role: str = UserRole.USER.value
    password: str = ""

    @field_validator("email", "name", "role", "password", mode="before")
    @classmethod
    def text_none_to_empty(cls, v):
        return none_to_empty(v)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def public(self) -> User:
        return User(id=self.id, email=self.email, name=self.name, role=self.role)
