"""Pydantic schemas for setting validation."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from settingstore.models import DEFAULT_GROUP, DEFAULT_SORT_ORDER

NAME_MAX_LENGTH = 255
GROUP_MAX_LENGTH = 64


def _strip_name(value: str) -> str:
    if not value or value.strip() == "":
        raise ValueError("Name cannot be empty")
    return value.strip()


class SettingRecord(BaseModel):
    """Schema checked by the repository before a setting is persisted."""

    name: str = Field(..., max_length=NAME_MAX_LENGTH)
    group: str = Field(default=DEFAULT_GROUP, max_length=GROUP_MAX_LENGTH)
    value: Any = None
    default_value: Any = None
    definition: Any = None
    sort_order: int = Field(default=DEFAULT_SORT_ORDER, strict=True)
    autoload: bool = Field(default=False, strict=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or v.strip() == "":
            raise ValueError("Name cannot be empty")
        if v != v.strip():
            raise ValueError("Name cannot start or end with whitespace")
        return v

    @field_validator("group", mode="before")
    @classmethod
    def validate_group(cls, v):
        if v is None:
            raise ValueError("Group cannot be null, use an empty string instead")
        return v


def errors_by_field(exc: ValidationError) -> Dict[str, List[str]]:
    """Flatten a pydantic error into a field -> messages mapping."""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error.get("loc") else "__all__"
        errors.setdefault(field, []).append(error["msg"])
    return errors


class SettingCreate(BaseModel):
    """Schema for registering a setting through the API."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    value: Any = None
    group: str = Field(default=DEFAULT_GROUP, max_length=GROUP_MAX_LENGTH)
    default_value: Any = ""
    definition: Optional[Any] = None
    sort_order: int = DEFAULT_SORT_ORDER
    autoload: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _strip_name(v)


class SettingUpdate(BaseModel):
    """Schema for changing a setting value."""

    value: Any
    group: str = Field(default=DEFAULT_GROUP, max_length=GROUP_MAX_LENGTH)


class SettingRename(BaseModel):
    """Schema for moving a setting to a new name and optionally a new group."""

    group: str = Field(default=DEFAULT_GROUP, max_length=GROUP_MAX_LENGTH)
    new_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    new_group: Optional[str] = Field(default=None, max_length=GROUP_MAX_LENGTH)

    @field_validator("new_name")
    @classmethod
    def validate_new_name(cls, v):
        return _strip_name(v)


class SettingReset(BaseModel):
    """Schema for replacing the baseline fields of a setting."""

    group: str = Field(default=DEFAULT_GROUP, max_length=GROUP_MAX_LENGTH)
    default_value: Any
    definition: Optional[Any] = None
    sort_order: Optional[int] = None
    autoload: Optional[bool] = None
