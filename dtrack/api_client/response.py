from http import HTTPStatus

from dtrack import ValueObject

__all__ = ["Response"]


class Response(ValueObject):
    status: HTTPStatus
    data: bytes
    content_type: str | None
    headers: dict[str, str] = {}

    def __hash__(self):
        return hash((self.__class__, self.status, self.data, self.content_type))
