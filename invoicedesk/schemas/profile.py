from pydantic import BaseModel, field_validator

from ..roles import Role, normalize_role
from .common import strip_required


class ProfileCreate(BaseModel):
    email: str
    role: Role = Role.USER

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        value = strip_required(value).lower()
        if "@" not in value:
            raise ValueError("must be an email address")
        return value

    @field_validator("role", mode="before")
    @classmethod
    def _role(cls, value) -> Role:
        return normalize_role(value)


class RoleUpdate(BaseModel):
    role: Role

    @field_validator("role", mode="before")
    @classmethod
    def _role(cls, value) -> Role:
        return normalize_role(value)


class ProfileRead(BaseModel):
    id: int
    email: str
    role: Role
    is_admin: bool

    model_config = {"from_attributes": True}

    @field_validator("role", mode="before")
    @classmethod
    def _role(cls, value) -> Role:
        return normalize_role(value)
