from datetime import date
from typing import ClassVar
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Schema base: camelCase on the wire, snake_case accepted on input
class CamelModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def clean_required_text(v: object, field: str) -> object:
    if v is None:
        raise ValueError(f"{field} cannot be null")
    if isinstance(v, str):
        v = v.strip()
        if not v:
            raise ValueError(f"{field} cannot be empty")
    return v


def clean_optional_text(v: object) -> object:
    """Blank strings are stored as NULL."""
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


def check_year_range(v: int | None, field: str, earliest: int) -> int | None:
    if v is None:
        return v
    latest = date.today().year
    if not earliest <= v <= latest:
        raise ValueError(f"{field} must be between {earliest} and {latest}")
    return v


class MessageResponse(BaseModel):
    message: str
