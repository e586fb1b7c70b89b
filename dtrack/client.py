import logging
from typing import Optional

import inject

from .api_client import ApiProvider
from .base import CancelToken
from .base import Json
from .resources import ComponentResource
from .resources import FindingResource
from .resources import ProjectResource
from .settings import DtrackSettings
from .settings import provider_from_settings

__all__ = ["DtrackClient"]

logger = logging.getLogger(__name__)


class DtrackClient:
    """Entry point that groups the resource accessors.

    Without a provider, the ApiProvider bound through `inject` is used.

    Example:

        client = DtrackClient.from_settings(
            DtrackSettings(url="https://dtrack.example.com", api_key="...")
        )
        findings = fetch_all(
            lambda po: client.finding.get_all_for_project(uuid, page_options=po)
        )
    """

    def __init__(self, provider: Optional[ApiProvider] = None, timeout: float = 5.0):
        self.provider_override = provider
        self.timeout = timeout
        self.project = ProjectResource(provider, timeout=timeout)
        self.component = ComponentResource(provider, timeout=timeout)
        self.finding = FindingResource(provider, timeout=timeout)

    @classmethod
    def from_settings(cls, settings: DtrackSettings) -> "DtrackClient":
        logger.info("Using Dependency-Track server at %s", settings.url)
        return cls(provider_from_settings(settings), timeout=settings.timeout)

    @property
    def provider(self) -> ApiProvider:
        return self.provider_override or inject.instance(ApiProvider)

    def about(self, cancel: CancelToken | None = None) -> Json:
        """Version information of the server"""
        timeout = self.timeout
        if cancel is not None:
            cancel.check()
            timeout = cancel.timeout_for(self.timeout)
        return self.provider.request("GET", "version", timeout=timeout)
