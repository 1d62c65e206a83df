"""Configuration for the Slack incoming webhook target."""

from pydantic import Field, SecretStr

from chat_report.models.options import ReportOptions


class SlackConfig(ReportOptions):
    """Report options plus the webhook the report is posted to."""

    url: SecretStr = Field(..., description="Slack incoming webhook URL")


def resolve_endpoint(config: SlackConfig) -> str:
    """Return the webhook URL to post to."""
    return config.url.get_secret_value()
