"""Material and cost schemas."""

import math
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator

from projektmester.schemas.common import none_to_empty


class MaterialUnit(str, Enum):
    """Units a material quantity can be given in."""
    PIECE = "db"
    METER = "m"
    SQUARE_METER = "m2"
    CUBIC_METER = "m3"
    KILOGRAM = "kg"
    TONNE = "t"
    RUNNING_METER = "fm"
    PACKAGE = "csomag"


class CostType(str, Enum):
    """Cost categories."""
    MATERIAL = "anyag"
    LABOR = "munkadij"
    OTHER = "egyeb"


class MaterialBase(BaseModel):
    """Base material schema."""

    name: str = Field(..., min_length=1, max_length=255)
    quantity: int | float = 1
    unit: MaterialUnit = MaterialUnit.PIECE
    unit_price: int = Field(0, ge=0)
    supplier: str = ""
    note: str = ""

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name must not be blank")
        return v

    @field_validator("quantity")
    @classmethod
    def check_quantity(cls, v):
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError("Quantity must be a finite number")
        if v < 0:
            raise ValueError("Quantity must not be negative")
        return v


class MaterialCreate(MaterialBase):
    """Material creation schema."""

    pass


class MaterialUpdate(MaterialBase):
    """Material update schema."""

    pass


class Material(BaseModel):
    """Material as persisted and returned. The line total is never stored."""

    model_config = ConfigDict(extra="ignore")

    id: str
    project_id: str = ""
    name: str = ""
    quantity: int | float = 0
    unit: str = MaterialUnit.PIECE.value
    unit_price: int | float = 0
    supplier: str = ""
    note: str = ""

    @field_validator("project_id", "name", "supplier", "note", "unit", mode="before")
    @classmethod
    def text_none_to_empty(cls, v):
        return none_to_empty(v)

    @field_validator("quantity", "unit_price", mode="before")
    @classmethod
    def missing_number(cls, v):
        return 0 if v is None else v


class CostBase(BaseModel):
    """Base cost schema."""

    type: CostType = CostType.LABOR
    description: str = Field(..., min_length=1, max_length=255)
    amount: int = Field(..., gt=0)

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Description must not be blank")
        return v


class CostCreate(CostBase):
    """Cost creation schema."""

    pass


class CostUpdate(CostBase):
    """Cost update schema."""

    pass


class Cost(BaseModel):
    """Cost as persisted and returned."""

    model_config = ConfigDict(extra="ignore")

    id: str
    project_id: str = ""
    type: str = CostType.OTHER.value
    description: str = ""
    amount: int | float = 0

    @field_validator("project_id", "type", "description", mode="before")
    @classmethod
    def text_none_to_empty(cls, v):
        return none_to_empty(v)

    @field_validator("amount", mode="before")
    @classmethod
    def missing_amount(cls, v):
        return 0 if v is None else v
