"""Slack incoming webhook target module."""

from chat_report.targets.slack.config import SlackConfig, resolve_endpoint
from chat_report.targets.slack.manifest import slack_manifest
from chat_report.targets.slack.target import SlackTarget

__all__ = ["SlackConfig", "SlackTarget", "resolve_endpoint", "slack_manifest"]
