# (c) Nelen & Schuurmans

from uuid import UUID

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from dtrack import ValueObject

__all__ = ["Entity"]


class Entity(ValueObject):
    """A server-side object, serialized with camelCase keys.

    Fields that the server returns but the model does not declare are ignored.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    uuid: UUID | None = None

    def __hash__(self):
        if self.uuid is None:
            return hash(self.__class__) + hash(self.model_dump_json())
        return hash(self.__class__) + hash(self.uuid)
