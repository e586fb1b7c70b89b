from pydantic import AnyHttpUrl
from pydantic import BaseModel
from pydantic import Field

from .api_client import ApiProvider
from .api_client import api_key_headers

__all__ = ["DtrackSettings", "provider_from_settings"]


class DtrackSettings(BaseModel):
    url: AnyHttpUrl  # server root, e.g. https://dtrack.example.com
    api_key: str
    timeout: float = 5.0  # in seconds, per request
    retries: int = Field(3, ge=0)
    backoff_factor: float = 1.0


def provider_from_settings(settings: DtrackSettings) -> ApiProvider:
    url = str(settings.url)
    if not url.endswith("/"):
        url += "/"
    return ApiProvider(
        url=url + "api/",
        headers_factory=api_key_headers(settings.api_key),
        retries=settings.retries,
        backoff_factor=settings.backoff_factor,
    )
