from uuid import UUID

from pydantic import Field

from .entity import Entity

__all__ = [
    "Finding",
    "FindingAnalysis",
    "FindingAttribution",
    "FindingComponent",
    "FindingVulnerability",
]


class FindingComponent(Entity):
    name: str
    group: str | None = None
    version: str | None = None
    purl: str | None = None
    cpe: str | None = None
    project: UUID | None = None
    latest_version: str | None = None


class FindingVulnerability(Entity):
    vuln_id: str
    source: str
    title: str | None = None
    subtitle: str | None = None
    description: str | None = None
    recommendation: str | None = None
    severity: str | None = None
    severity_rank: int | None = None
    cvss_v2_base_score: float | None = Field(None, alias="cvssV2BaseScore")
    cvss_v3_base_score: float | None = Field(None, alias="cvssV3BaseScore")
    epss_score: float | None = None
    cwes: list[dict] | None = None


class FindingAnalysis(Entity):
    state: str | None = None
    is_suppressed: bool = False


class FindingAttribution(Entity):
    analyzer_identity: str | None = None
    attributed_on: int | None = None
    alternate_identifier: str | None = None
    reference_url: str | None = None


class Finding(Entity):
    """A vulnerability affecting a component of a project.

    Findings have no uuid of their own; the matrix string (project, component
    and vulnerability uuids) identifies them.
    """

    component: FindingComponent
    vulnerability: FindingVulnerability
    analysis: FindingAnalysis = FindingAnalysis()
    attribution: FindingAttribution = FindingAttribution()
    matrix: str

    def __hash__(self):
        return hash(self.__class__) + hash(self.matrix)
