from pydantic import Field

from .entity import Entity

__all__ = ["Project", "ProjectProperty", "Tag"]


class Tag(Entity):
    name: str

    def __hash__(self):
        return hash(self.__class__) + hash(self.name)


class ProjectProperty(Entity):
    group: str = Field(alias="groupName")
    name: str = Field(alias="propertyName")
    value: str | None = Field(None, alias="propertyValue")
    type: str = Field("STRING", alias="propertyType")
    description: str | None = None

    def __hash__(self):
        return hash(self.__class__) + hash((self.group, self.name))


class Project(Entity):
    name: str
    version: str | None = None
    description: str | None = None
    author: str | None = None
    publisher: str | None = None
    group: str | None = None
    classifier: str | None = None
    cpe: str | None = None
    purl: str | None = None
    swid_tag_id: str | None = None
    active: bool | None = None
    tags: list[Tag] | None = None
    properties: list[ProjectProperty] | None = None
    last_bom_import: int | None = None
