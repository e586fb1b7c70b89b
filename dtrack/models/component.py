from pydantic import Field

from .entity import Entity
from .project import Project

__all__ = ["Component", "ComponentProperty"]


class ComponentProperty(Entity):
    group: str = Field(alias="groupName")
    name: str = Field(alias="propertyName")
    value: str | None = Field(None, alias="propertyValue")
    type: str = Field("STRING", alias="propertyType")
    description: str | None = None


class Component(Entity):
    name: str
    version: str | None = None
    group: str | None = None
    author: str | None = None
    publisher: str | None = None
    description: str | None = None
    classifier: str | None = None
    filename: str | None = None
    extension: str | None = None
    md5: str | None = None
    sha1: str | None = None
    sha256: str | None = None
    sha384: str | None = None
    sha512: str | None = None
    cpe: str | None = None
    purl: str | None = None
    swid_tag_id: str | None = None
    is_internal: bool | None = Field(None, alias="isInternal")
    copyright: str | None = None
    license: str | None = None
    notes: str | None = None
    project: Project | None = None
