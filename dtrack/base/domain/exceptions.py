# (c) Nelen & Schuurmans

from typing import Any

from pydantic import ValidationError
from pydantic_core import ErrorDetails

from .types import Id

__all__ = [
    "BadRequest",
    "Cancelled",
    "Conflict",
    "DeadlineExceeded",
    "DoesNotExist",
    "PermissionDenied",
    "Unauthorized",
]


class DoesNotExist(Exception):
    def __init__(self, name: str, id: Id | None = None):
        super().__init__()
        self.name = name
        self.id = id

    def __str__(self):
        if self.id:
            return f"does not exist: {self.name} with id={self.id}"
        else:
            return f"does not exist: {self.name}"


class Conflict(Exception):
    def __init__(self, msg: str | None = None):
        super().__init__(msg)


class BadRequest(Exception):
    """Raised for malformed request options, before anything is sent."""

    def __init__(self, err_or_msg: ValidationError | str):
        self._internal_error = err_or_msg
        super().__init__(err_or_msg)

    def errors(self) -> list[ErrorDetails]:
        if isinstance(self._internal_error, ValidationError):
            return self._internal_error.errors()
        return [
            ErrorDetails(
                type="value_error",
                msg=self._internal_error,
                loc=[],  # type: ignore
                input=None,
            )
        ]

    def __str__(self) -> str:
        error = self._internal_error
        if isinstance(error, ValidationError):
            details = error.errors()[0]
            loc = "'" + ",".join([str(x) for x in details["loc"]]) + "' "
            if loc == "'' ":
                loc = ""
            return f"validation error: {loc}{details['msg']}"
        return f"validation error: {super().__str__()}"


class Unauthorized(Exception):
    pass


class PermissionDenied(Exception):
    pass


class Cancelled(Exception):
    def __init__(self, msg: str = "operation was cancelled", obj: Any = None):
        super().__init__(msg)
        self.obj = obj


class DeadlineExceeded(Cancelled):
    def __init__(self, msg: str = "deadline exceeded", obj: Any = None):
        super().__init__(msg, obj)
