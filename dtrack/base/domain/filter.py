# (c) Nelen & Schuurmans

from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from .exceptions import BadRequest
from .pagination import PageOptions
from .pagination import SortOptions
from .types import Json
from .value_object import ValueObject

__all__ = ["FilterOptions", "build_query"]


def _to_query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    return value


class FilterOptions(ValueObject):
    """Base class for the optional criteria of a list endpoint.

    Subclasses declare their criteria as optional fields; the query parameter
    name is the camelCase version of the field name. Fields left at None are
    not sent at all, an empty string is sent as-is. The server combines all
    criteria that are sent with AND.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    def as_query_params(self) -> Json:
        result: Json = {}
        for name, field in self.__class__.model_fields.items():
            value = getattr(self, name)
            if value is None:
                continue
            result[field.alias or name] = _to_query_value(value)
        return result


def build_query(
    page_options: PageOptions | None = None,
    sort_options: SortOptions | None = None,
    filter_options: FilterOptions | None = None,
    **extra: Any,
) -> Json:
    """Merge listing options into one mapping of query parameters."""
    result: Json = {}
    parts = [
        x.as_query_params()
        for x in (page_options, sort_options, filter_options)
        if x is not None
    ]
    parts.append({k: _to_query_value(v) for (k, v) in extra.items() if v is not None})
    for part in parts:
        duplicate = result.keys() & part.keys()
        if duplicate:
            raise BadRequest(f"query parameter(s) given twice: {sorted(duplicate)}")
        result.update(part)
    return result
