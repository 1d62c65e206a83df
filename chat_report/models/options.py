"""Models for report options supplied alongside the results."""

from collections.abc import Sequence
from typing import Self

from pydantic import Field, SecretStr, model_validator

from chat_report.models.base import Model


class Link(Model):
    """A footer link rendered as ``<url|text>``."""

    url: str = Field(..., description="Link target")
    text: str = Field(..., description="Link label")


class ReportPortalAnalysisConfig(Model):
    """Where to fetch the defect analysis of a failed run."""

    url: str = Field(..., description="Report Portal base URL")
    api_key: SecretStr = Field(..., description="Report Portal API token")
    project: str = Field(..., description="Report Portal project name")
    launch_id: str | None = Field(default=None, description="Launch identifier")
    launch_name: str | None = Field(
        default=None, description="Launch name; the latest launch is used"
    )

    @model_validator(mode="after")
    def require_launch(self) -> Self:
        if self.launch_id is None and self.launch_name is None:
            raise ValueError("either launch_id or launch_name is required")
        return self


class ReportOptions(Model):
    """Presentation options for a notification."""

    title: str | None = Field(default=None, description="Defaults to the run name")
    title_suffix: str | None = Field(default=None, description="Appended to title")
    links: Sequence[Link] | None = Field(default=None, description="Footer links")
    report_portal_analysis: ReportPortalAnalysisConfig | None = Field(
        default=None, description="Defect analysis enrichment"
    )
    publish: str = Field(default="test-summary", description="Report mode name")
