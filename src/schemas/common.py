"""Shared schema building blocks."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON keys with the frontend."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class Level(str, Enum):
    """Academic level shared by students and courses."""

    L100 = "100"
    L200 = "200"
    L300 = "300"
    L400 = "400"
    L500 = "500"


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class ErrorResponse(CamelModel):
    success: bool = False
    message: str


# Documented error bodies shared by every router
ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in (400, 401, 404, 500)
}
