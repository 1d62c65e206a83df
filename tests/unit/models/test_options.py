"""Tests for report option models."""

import pytest
from pydantic import ValidationError

from chat_report.models.options import ReportOptions, ReportPortalAnalysisConfig


def test_options_defaults() -> None:
    """Options default to a plain test summary."""
    options = ReportOptions()

    assert options.publish == "test-summary"
    assert options.title is None
    assert options.links is None
    assert options.report_portal_analysis is None


def test_parses_nested_options() -> None:
    """Parses links and analysis settings from plain data."""
    options = ReportOptions.model_validate(
        {
            "title": "Nightly",
            "links": [{"url": "https://ci.test", "text": "CI"}],
            "report_portal_analysis": {
                "url": "https://rp.test",
                "api_key": "token",
                "project": "proj",
                "launch_name": "nightly",
            },
        }
    )

    assert options.links is not None
    assert options.links[0].text == "CI"
    assert options.report_portal_analysis is not None
    assert options.report_portal_analysis.launch_name == "nightly"
    assert "token" not in repr(options)


def test_analysis_requires_launch() -> None:
    """Raises when neither launch id nor name is given."""
    with pytest.raises(ValidationError, match="launch_id or launch_name"):
        ReportPortalAnalysisConfig(url="https://rp.test", api_key="k", project="p")
