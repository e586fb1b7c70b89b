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
from dtrack.models import Project
from dtrack.models import ProjectProperty

__all__ = ["ProjectResource", "ProjectFilterOptions"]


class ProjectFilterOptions(FilterOptions):
    name: str | None = None
    search_text: str | None = None
    exclude_inactive: bool | None = None
    only_root: bool | None = None


class ProjectResource(ApiResource, path="v1/project"):
    mapper = Mapper(Project)
    property_mapper = Mapper(ProjectProperty)

    def get_all(
        self,
        page_options: PageOptions | None = None,
        sort_options: SortOptions | None = None,
        filter_options: ProjectFilterOptions | None = None,
        cancel: CancelToken | None = None,
    ) -> Page[Project]:
        params = build_query(page_options, sort_options, filter_options)
        return self.get_page(self.url(), self.mapper, params=params, cancel=cancel)

    def get(self, uuid: UUID, cancel: CancelToken | None = None) -> Project | None:
        return self.get_one(self.url(uuid), self.mapper, cancel=cancel)

    def lookup(
        self, name: str, version: str, cancel: CancelToken | None = None
    ) -> Project | None:
        return self.get_one(
            self.url("lookup"),
            self.mapper,
            params={"name": name, "version": version},
            cancel=cancel,
        )

    def create(
        self, project: Project | Json, cancel: CancelToken | None = None
    ) -> Project:
        return self.write(
            "PUT", self.url(), project, self.mapper, name="project", cancel=cancel
        )

    def update(self, project: Project, cancel: CancelToken | None = None) -> Project:
        return self.write(
            "POST",
            self.url(),
            project,
            self.mapper,
            name="project",
            id=project.uuid,
            cancel=cancel,
        )

    def delete(self, uuid: UUID, cancel: CancelToken | None = None) -> bool:
        return self.remove(self.url(uuid), cancel=cancel)

    def get_properties(
        self, uuid: UUID, cancel: CancelToken | None = None
    ) -> list[ProjectProperty]:
        return self.get_list(self.url(uuid, "property"), self.property_mapper, cancel)

    def create_property(
        self,
        uuid: UUID,
        property: ProjectProperty | Json,
        cancel: CancelToken | None = None,
    ) -> ProjectProperty:
        return self.write(
            "PUT",
            self.url(uuid, "property"),
            property,
            self.property_mapper,
            name="project",
            id=uuid,
            cancel=cancel,
        )

    def update_property(
        self,
        uuid: UUID,
        property: ProjectProperty | Json,
        cancel: CancelToken | None = None,
    ) -> ProjectProperty:
        return self.write(
            "POST",
            self.url(uuid, "property"),
            property,
            self.property_mapper,
            name="project property",
            id=uuid,
            cancel=cancel,
        )

    def delete_property(
        self, uuid: UUID, group: str, name: str, cancel: CancelToken | None = None
    ) -> bool:
        # the server identifies the property by group and name in the body
        return self.remove(
            self.url(uuid, "property"),
            json={"groupName": group, "propertyName": name},
            cancel=cancel,
        )
