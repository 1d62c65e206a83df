"""Test factories for generating run result trees."""

from polyfactory import Use
from polyfactory.factories.pydantic_factory import ModelFactory

from chat_report.models.result import CaseResult, RunResult, SuiteResult


class CaseResultFactory(ModelFactory[CaseResult]):
    """Factory for CaseResult."""

    status = "PASS"
    failure = None


class SuiteResultFactory(ModelFactory[SuiteResult]):
    """Factory for SuiteResult."""

    status = "PASS"
    passed = 1
    total = 1
    duration = 10
    cases = Use(list[CaseResult])


class RunResultFactory(ModelFactory[RunResult]):
    """Factory for RunResult."""

    status = "PASS"
    passed = 1
    total = 1
    duration = 10.0
    suites = Use(list[SuiteResult])
