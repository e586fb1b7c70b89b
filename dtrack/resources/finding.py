from uuid import UUID

from dtrack import build_query
from dtrack import CancelToken
from dtrack import FilterOptions
from dtrack import Mapper
from dtrack import Page
from dtrack import PageOptions
from dtrack.api_client import ApiResource
from dtrack.models import Finding

__all__ = ["FindingFilterOptions", "FindingResource"]


class FindingFilterOptions(FilterOptions):
    # vulnerability source, e.g. NVD or GITHUB
    source: str | None = None


class FindingResource(ApiResource, path="v1/finding"):
    mapper = Mapper(Finding)

    def get_all_for_project(
        self,
        project_uuid: UUID,
        suppressed: bool = False,
        page_options: PageOptions | None = None,
        filter_options: FindingFilterOptions | None = None,
        cancel: CancelToken | None = None,
    ) -> Page[Finding]:
        """List the findings of a project, optionally including suppressed ones."""
        params = build_query(
            page_options, None, filter_options, suppressed=suppressed
        )
        return self.get_page(
            self.url("project", project_uuid), self.mapper, params, cancel
        )
