# (c) Nelen & Schuurmans

from collections.abc import Mapping
from collections.abc import Sequence
from enum import Enum
from typing import Any
from typing import Generic
from typing import TypeVar

from pydantic import BaseModel
from pydantic import Field
from pydantic import model_validator

from .types import Json
from .value_object import ValueObject

__all__ = ["Page", "PageOptions", "SortDirection", "SortOptions"]

T = TypeVar("T")


class PageOptions(ValueObject):
    """Selects one page of a listing.

    Either page_number / page_size or offset / limit is used, never both. A zero
    page_size, offset or limit means 'not set': the option is omitted from the
    request and the server applies its own default.
    """

    page_number: int = Field(1, ge=1)
    page_size: int = Field(0, ge=0)
    offset: int = Field(0, ge=0)
    limit: int = Field(0, ge=0)

    @model_validator(mode="after")
    def verify_single_paging_mode(self):
        if (self.offset or self.limit) and (self.page_number != 1 or self.page_size):
            raise ValueError(
                "PageOptions cannot combine offset/limit with page_number/page_size"
            )
        return self

    def next_page(self) -> "PageOptions":
        return self.update(page_number=self.page_number + 1)

    def as_query_params(self) -> Json:
        result: Json = {}
        if self.page_size:
            result["pageNumber"] = self.page_number
            result["pageSize"] = self.page_size
        elif self.page_number != 1:
            result["pageNumber"] = self.page_number
        if self.offset:
            result["offset"] = self.offset
        if self.limit:
            result["limit"] = self.limit
        return result

    @classmethod
    def from_query_params(cls, params: Mapping[str, Any]) -> "PageOptions":
        return cls.create(
            page_number=params.get("pageNumber", 1),
            page_size=params.get("pageSize", 0),
            offset=params.get("offset", 0),
            limit=params.get("limit", 0),
        )


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortOptions(ValueObject):
    """Ordering of a listing. Without a sort_field the server default applies."""

    sort_field: str | None = None
    direction: SortDirection | None = None

    @model_validator(mode="after")
    def verify_direction_has_field(self):
        if self.direction is not None and not self.sort_field:
            raise ValueError("SortOptions needs a sort_field when a direction is given")
        return self

    def as_query_params(self) -> Json:
        result: Json = {}
        if self.sort_field:
            result["sortName"] = self.sort_field
        if self.direction is not None:
            result["sortOrder"] = self.direction.value
        return result

    @classmethod
    def from_query_params(cls, params: Mapping[str, Any]) -> "SortOptions":
        return cls.create(
            sort_field=params.get("sortName"),
            direction=params.get("sortOrder"),
        )


class Page(BaseModel, Generic[T]):
    """One page of a listing.

    total_count is the size of the complete result set on the server, not the
    number of items on this page.
    """

    total_count: int = Field(ge=0)
    items: Sequence[T]
    page_number: int | None = None
    page_size: int | None = None
