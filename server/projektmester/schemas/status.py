"""Custom project status schemas."""

from pydantic import BaseModel, Field, field_validator


class StatusCreate(BaseModel):
    """New status value for the registry."""

    value: str = Field(..., min_length=1, max_length=100)

    @field_validator("value")
    @classmethod
    def strip_value(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Status must not be blank")
        return v


class StatusOption(BaseModel):
    """A registered status with its display label."""

    value: str
    label: str
