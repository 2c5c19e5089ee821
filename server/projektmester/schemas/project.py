"""Project schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from projektmester.schemas.common import validate_iso_date, none_to_empty

_TEXT_FIELDS = (
    "description",
    "customer_name",
    "customer_email",
    "customer_phone",
    "location",
    "start_date",
    "end_date",
)


class ProjectBase(BaseModel):
    """Base project schema."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    status: str = Field("felmeres", min_length=1, max_length=100)
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    assigned_users: list[str] = Field(default_factory=list)


class ProjectCreate(ProjectBase):
    """Project creation schema."""

    @field_validator("start_date", "end_date")
    @classmethod
    def check_dates(cls, v: str) -> str:
        return validate_iso_date(v)

    @field_validator("name", "status")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field must not be blank")
        return v


class ProjectUpdate(ProjectCreate):
    """Project update schema.

    The edit form always sends the whole project. Ownership fields
    (created_by, created_by_id, created_at) are not part of it.
    """

    pass


class Project(BaseModel):
    """Project as persisted and returned.

    Reads are lenient: legacy records may lack assigned_users or
    created_by_id, or carry nulls or blanks in any text field, status
    included. A missing status stays empty and renders as a placeholder.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str = ""
    description: str = ""
    status: str = ""
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    assigned_users: list[str] = Field(default_factory=list)
    created_at: str = ""
    created_by: str = ""
    # None is the "no owner" sentinel; it never equals a real user id
    created_by_id: str | None = None

    @field_validator("name", "status", *_TEXT_FIELDS, "created_at", "created_by", mode="before")
    @classmethod
    def text_none_to_empty(cls, v):
        return none_to_empty(v)

    @field_validator("assigned_users", mode="before")
    @classmethod
    def normalize_assigned_users(cls, v):
        if v is None:
            return []
        return [str(u) for u in v]

    @field_validator("created_by_id", mode="before")
    @classmethod
    def normalize_owner(cls, v):
        return v or None
