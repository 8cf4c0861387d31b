"""Uniform outcome envelope returned by every verb"""

from dataclasses import dataclass
from http import HTTPStatus
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")

StatusCode = Union[HTTPStatus, int]


def to_status(code: int) -> StatusCode:
    """Use HTTPStatus for known codes, keep unknown codes as plain ints"""
    try:
        return HTTPStatus(code)
    except ValueError:
        return code


@dataclass
class RequestResult(Generic[T]):
    """
    Outcome of a single request

    ``has_result`` tells an absent payload apart from a present falsy one
    (an empty string, an empty mapping). ``exception_detail`` is empty only
    for an OK response; for other responses it carries the raw body text.
    """
    status_code: StatusCode
    result: Optional[T] = None
    has_result: bool = False
    exception_detail: str = ""
    exception: Optional[BaseException] = None

    @classmethod
    def success(
        cls,
        status_code: StatusCode,
        result: Optional[T],
        has_result: bool,
        exception_detail: str = "",
    ) -> "RequestResult[T]":
        """Result built from a received HTTP response"""
        return cls(
            status_code=status_code,
            result=result,
            has_result=has_result,
            exception_detail=exception_detail,
        )

    @classmethod
    def failure(
        cls,
        status_code: StatusCode,
        exception_detail: str,
        exception: Optional[BaseException] = None,
    ) -> "RequestResult[T]":
        """Result built when no usable response was received"""
        return cls(
            status_code=status_code,
            exception_detail=exception_detail,
            exception=exception,
        )

    @property
    def is_success(self) -> bool:
        """True for an OK response"""
        return self.status_code == HTTPStatus.OK and not self.exception_detail
