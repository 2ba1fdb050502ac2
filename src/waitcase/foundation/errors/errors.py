"""Standardized argument errors for backoff strategies.

Provides an error code and a structured error payload so callers can tell
which parameter was rejected and why. Uses Pydantic for the payload.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class ErrorCode(StrEnum):
    """Standard error codes for backoff failures."""
    INVALID_ARGUMENT = "INVALID_ARGUMENT"


class ArgumentError(BaseModel):
    """Structured description of a rejected strategy parameter.

    Attributes:
        param_name: Name of the offending parameter (e.g. "retry_count")
        value: repr of the value that was supplied
        constraint: The violated constraint, phrased as "should be ..." tail
        code: Machine-readable error code
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        json_schema_extra={
            "title": "Argument Error",
            "description": "Invalid parameter passed to a backoff strategy",
            "examples": [{
                "param_name": "factor",
                "value": "0.5",
                "constraint": ">= 1.0",
                "code": "INVALID_ARGUMENT",
            }],
        },
    )

    param_name: Annotated[str, Field(min_length=1, description="Offending parameter")]
    value: str = Field(description="repr of the rejected value")
    constraint: Annotated[str, Field(min_length=1, description="Violated constraint")]
    code: ErrorCode = ErrorCode.INVALID_ARGUMENT

    @field_validator("value", mode="before")
    @classmethod
    def _repr_value(cls, v: object) -> str:
        """Accept any object and keep its repr."""
        return v if isinstance(v, str) else repr(v)

    @computed_field
    @property
    def message(self) -> str:
        return self.render()

    def render(self) -> str:
        return f"{self.param_name} should be {self.constraint} (got {self.value})"

    __str__ = render


class BackoffArgumentError(ValueError):
    """Raised synchronously when a strategy is built with an invalid parameter.

    Subclasses ValueError so generic callers can catch it without importing
    waitcase. The structured payload is available as ``error``.

    Example:
        >>> try:
        ...     ExponentialBackoff(timedelta(milliseconds=10), 3, factor=0.5)
        ... except BackoffArgumentError as e:
        ...     e.param_name
        'factor'
    """

    __slots__ = ("error",)

    def __init__(self, error: ArgumentError) -> None:
        self.error = error
        super().__init__(error.render())

    @classmethod
    def create(cls, param_name: str, value: object, constraint: str) -> Self:
        return cls(ArgumentError(param_name=param_name, value=value, constraint=constraint))

    @property
    def param_name(self) -> str:
        return self.error.param_name

    @property
    def value(self) -> str:
        return self.error.value

    @property
    def constraint(self) -> str:
        return self.error.constraint

    @property
    def code(self) -> ErrorCode:
        return self.error.code
