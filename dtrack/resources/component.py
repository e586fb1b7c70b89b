from uuid import UUID

from dtrack import build_query
from dtrack import CancelToken
from dtrack import FilterOptions
from dtrack import Json
from dtrack import Mapper
from dtrack import Page
from dtrack import PageOptions
from dtrack import SortOptions
from dtrack.api_client import ApiResource
from dtrack.models import Component
from dtrack.models import ComponentProperty

__all__ = [
    "ComponentFilterOptions",
    "ComponentIdentityQueryOptions",
    "ComponentResource",
]


class ComponentFilterOptions(FilterOptions):
    only_outdated: bool | None = None
    only_direct: bool | None = None
    search_text: str | None = None


class ComponentIdentityQueryOptions(FilterOptions):
    group: str | None = None
    name: str | None = None
    version: str | None = None
    purl: str | None = None
    cpe: str | None = None
    swid_tag_id: str | None = None
    project: UUID | None = None


class ComponentResource(ApiResource, path="v1/component"):
    mapper = Mapper(Component)
    property_mapper = Mapper(ComponentProperty)

    def get_all(
        self,
        project_uuid: UUID,
        page_options: PageOptions | None = None,
        filter_options: ComponentFilterOptions | None = None,
        cancel: CancelToken | None = None,
    ) -> Page[Component]:
        """List the components of a project."""
        params = build_query(page_options, None, filter_options)
        return self.get_page(
            self.url("project", project_uuid), self.mapper, params, cancel
        )

    def get(self, uuid: UUID, cancel: CancelToken | None = None) -> Component | None:
        return self.get_one(self.url(uuid), self.mapper, cancel=cancel)

    def get_by_hash(
        self,
        hash: str,
        page_options: PageOptions | None = None,
        sort_options: SortOptions | None = None,
        cancel: CancelToken | None = None,
    ) -> Page[Component]:
        """List components (across projects) by MD5, SHA or BLAKE hash."""
        params = build_query(page_options, sort_options)
        return self.get_page(self.url("hash", hash), self.mapper, params, cancel)

    def get_by_identity(
        self,
        page_options: PageOptions | None = None,
        sort_options: SortOptions | None = None,
        identity_options: ComponentIdentityQueryOptions | None = None,
        cancel: CancelToken | None = None,
    ) -> Page[Component]:
        """List components (across projects) matching all given identity fields."""
        params = build_query(page_options, sort_options, identity_options)
        return self.get_page(self.url("identity"), self.mapper, params, cancel)

    def create(
        self,
        project_uuid: UUID,
        component: Component | Json,
        cancel: CancelToken | None = None,
    ) -> Component:
        return self.write(
            "PUT",
            self.url("project", project_uuid),
            component,
            self.mapper,
            name="project",
            id=project_uuid,
            cancel=cancel,
        )

    def update(
        self, component: Component, cancel: CancelToken | None = None
    ) -> Component:
        return self.write(
            "POST",
            self.url(),
            component,
            self.mapper,
            name="component",
            id=component.uuid,
            cancel=cancel,
        )

    def delete(self, uuid: UUID, cancel: CancelToken | None = None) -> bool:
        return self.remove(self.url(uuid), cancel=cancel)

    def identify_internal(self, cancel: CancelToken | None = None) -> None:
        """Ask the server to (re)flag internal components in the whole portfolio."""
        self.request("GET", self.url("internal", "identify"), cancel=cancel)

    def get_properties(
        self, uuid: UUID, cancel: CancelToken | None = None
    ) -> list[ComponentProperty]:
        return self.get_list(self.url(uuid, "property"), self.property_mapper, cancel)

    def create_property(
        self,
        uuid: UUID,
        property: ComponentProperty | Json,
        cancel: CancelToken | None = None,
    ) -> ComponentProperty:
        return self.write(
            "PUT",
            self.url(uuid, "property"),
            property,
            self.property_mapper,
            name="component",
            id=uuid,
            cancel=cancel,
        )

    def delete_property(
        self, uuid: UUID, property_uuid: UUID, cancel: CancelToken | None = None
    ) -> bool:
        return self.remove(self.url(uuid, "property", property_uuid), cancel=cancel)
