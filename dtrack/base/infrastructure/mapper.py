from typing import Any
from typing import Generic
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ValidationError

from ..domain import BadRequest
from ..domain import Json

__all__ = ["Mapper"]

M = TypeVar("M", bound=BaseModel)


class Mapper(Generic[M]):
    """Converts between server JSON (camelCase) and a pydantic model."""

    def __init__(self, model: type[M]):
        self.model = model

    def to_internal(self, external: Any) -> M:
        return self.model.model_validate(external)

    def to_external(self, internal: M | Json) -> Json:
        if isinstance(internal, dict):
            try:
                internal = self.model.model_validate(internal)
            except ValidationError as e:
                raise BadRequest(e)
        return internal.model_dump(mode="json", by_alias=True, exclude_none=True)
