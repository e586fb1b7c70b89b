from collections.abc import Callable
from http import HTTPStatus
from typing import Any
from typing import Optional
from typing import TypeVar

import inject
from pydantic import BaseModel
from pydantic import ValidationError

from dtrack import CancelToken
from dtrack import DoesNotExist
from dtrack import Json
from dtrack import Mapper
from dtrack import Page
from dtrack import PermissionDenied
from dtrack import Unauthorized

from .api_provider import ApiProvider
from .exceptions import ApiException

__all__ = ["ApiResource"]

M = TypeVar("M", bound=BaseModel)
R = TypeVar("R")


class ApiResource:
    """Base class for the accessors of one kind of server resource.

    Subclasses pass their path (relative to the API root, without leading
    slash) as class keyword, e.g. ``class ProjectResource(ApiResource,
    path="v1/project")``.
    """

    path: str
    timeout: float = 5.0

    def __init__(
        self, provider_override: Optional[ApiProvider] = None, timeout: float = 5.0
    ):
        self.provider_override = provider_override
        self.timeout = timeout

    def __init_subclass__(cls, path: str) -> None:
        assert not path.startswith("/")
        cls.path = path
        super().__init_subclass__()

    @property
    def provider(self) -> ApiProvider:
        return self.provider_override or inject.instance(ApiProvider)

    def url(self, *parts: Any) -> str:
        return "/".join([self.path, *(str(x) for x in parts)])

    def _call(self, func: Callable[..., R], cancel: CancelToken | None, **kwargs) -> R:
        if cancel is not None:
            cancel.check()
            kwargs["timeout"] = cancel.timeout_for(self.timeout)
        else:
            kwargs["timeout"] = self.timeout
        try:
            return func(**kwargs)
        except ApiException as e:
            if e.status is HTTPStatus.UNAUTHORIZED:
                raise Unauthorized(str(e))
            if e.status is HTTPStatus.FORBIDDEN:
                raise PermissionDenied(str(e))
            raise e

    def request(
        self,
        method: str,
        path: str,
        params: Json | None = None,
        json: Any = None,
        cancel: CancelToken | None = None,
    ) -> Any:
        kwargs: Json = {"method": method, "path": path}
        if params is not None:
            kwargs["params"] = params
        if json is not None:
            kwargs["json"] = json
        return self._call(self.provider.request, cancel, **kwargs)

    def get_page(
        self,
        path: str,
        mapper: Mapper[M],
        params: Json | None = None,
        cancel: CancelToken | None = None,
    ) -> Page[M]:
        page = self._call(self.provider.request_page, cancel, path=path, params=params)
        try:
            items = [mapper.to_internal(x) for x in page.items]
        except ValidationError as e:
            raise ApiException(e, status=HTTPStatus.OK)
        return Page[mapper.model](  # type: ignore
            total_count=page.total_count,
            items=items,
            page_number=page.page_number,
            page_size=page.page_size,
        )

    def get_one(
        self,
        path: str,
        mapper: Mapper[M],
        params: Json | None = None,
        cancel: CancelToken | None = None,
    ) -> Optional[M]:
        try:
            result = self.request("GET", path, params=params, cancel=cancel)
        except ApiException as e:
            if e.status is HTTPStatus.NOT_FOUND:
                return None
            raise e
        assert result is not None
        return mapper.to_internal(result)

    def get_list(
        self, path: str, mapper: Mapper[M], cancel: CancelToken | None = None
    ) -> list[M]:
        """GET an unpaginated JSON array"""
        result = self.request("GET", path, cancel=cancel)
        return [mapper.to_internal(x) for x in result or []]

    def write(
        self,
        method: str,
        path: str,
        item: M | Json,
        mapper: Mapper[M],
        name: str,
        id: Any = None,
        cancel: CancelToken | None = None,
    ) -> M:
        body = mapper.to_external(item)
        try:
            result = self.request(method, path, json=body, cancel=cancel)
        except ApiException as e:
            if e.status is HTTPStatus.NOT_FOUND:
                raise DoesNotExist(name, id)
            raise e
        assert result is not None
        return mapper.to_internal(result)

    def remove(
        self,
        path: str,
        params: Json | None = None,
        json: Any = None,
        cancel: CancelToken | None = None,
    ) -> bool:
        try:
            self.request("DELETE", path, params=params, json=json, cancel=cancel)
        except ApiException as e:
            if e.status is HTTPStatus.NOT_FOUND:
                return False
            raise e
        else:
            return True
