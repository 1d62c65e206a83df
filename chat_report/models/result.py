"""Models for the test run result tree consumed by the notifier."""

import math
from collections.abc import Sequence
from typing import Literal, Self

from pydantic import Field, field_validator, model_validator

from chat_report.models.base import Model

type Status = Literal["PASS", "FAIL"]


class CaseResult(Model):
    """Outcome of an individual test case."""

    name: str = Field(..., description="Test case name")
    status: Status = Field(..., description="Case outcome")
    failure: str | None = Field(
        default=None, description="Failure message, present when status is FAIL"
    )


class _Counts(Model):
    """Shared pass/total counters with their consistency check."""

    passed: int = Field(..., ge=0, description="Number of passed cases")
    total: int = Field(..., ge=0, description="Number of executed cases")

    @model_validator(mode="after")
    def check_counts(self) -> Self:
        if self.passed > self.total:
            raise ValueError(
                f"passed ({self.passed}) cannot exceed total ({self.total})"
            )
        return self


class SuiteResult(_Counts):
    """Named group of cases within a run."""

    name: str = Field(..., description="Suite name")
    status: Status = Field(..., description="Suite outcome")
    duration: int = Field(default=0, ge=0, description="Duration in whole seconds")
    cases: Sequence[CaseResult] = Field(
        default_factory=list, description="Cases in execution order"
    )

    @field_validator("duration", mode="before")
    @classmethod
    def coerce_duration(cls, value: object) -> object:
        """Accept numbers and numeric strings, dropping any fraction."""
        if isinstance(value, str):
            value = value.strip()
            try:
                return int(value)
            except ValueError:
                value = float(value)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError(f"duration must be a finite number, got {value}")
            return math.trunc(value)
        return value


class RunResult(_Counts):
    """A complete test execution, the root of the result tree."""

    name: str = Field(..., description="Run name")
    status: Status = Field(..., description="Run outcome")
    duration: float = Field(
        default=0, ge=0, allow_inf_nan=False, description="Duration in seconds"
    )
    suites: Sequence[SuiteResult] = Field(
        default_factory=list, description="Suites in execution order"
    )
