"""Slack target manifest."""

from chat_report.targets.manifest import TargetManifest
from chat_report.targets.slack.config import SlackConfig
from chat_report.targets.slack.target import SlackTarget

slack_manifest = TargetManifest(
    config_cls=SlackConfig,
    target_factory=SlackTarget.from_config,
)
