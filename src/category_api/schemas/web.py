from http import HTTPStatus
from typing import Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


def status_text(code: int) -> str:
    """Upper-cased reason phrase for an HTTP status code, e.g. 404 -> 'NOT FOUND'."""
    return HTTPStatus(code).phrase.upper()


class WebResponse(BaseModel, Generic[DataT]):
    """
    Envelope wrapped around every response body, errors included:

        {"code": 200, "status": "OK", "data": {...}}

    `code` always equals the HTTP status of the response.
    """

    code: int
    status: str
    data: DataT | None = None

    @classmethod
    def of(cls, code: int, data: DataT | None = None) -> "WebResponse[DataT]":
        return cls(code=code, status=status_text(code), data=data)
