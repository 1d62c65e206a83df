"""Slack incoming webhook target implementation."""

import logging
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp

from chat_report.composer import MessageComposer
from chat_report.errors import DeliveryError
from chat_report.models.result import RunResult
from chat_report.report_portal import fetch_defect_summary
from chat_report.targets.base import NotificationTarget
from chat_report.targets.slack.config import SlackConfig, resolve_endpoint

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class SlackTarget(NotificationTarget):
    """Posts attachment-style messages to a Slack incoming webhook."""

    config: SlackConfig
    session: aiohttp.ClientSession = field(repr=False)
    composer: MessageComposer = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: SlackConfig
    ) -> AsyncGenerator["SlackTarget", None]:
        """Create target with managed session lifecycle."""
        composer = MessageComposer(
            defect_summary_fetcher=fetch_defect_summary,
            log=logging.getLogger("chat_report.composer"),
        )
        async with aiohttp.ClientSession(
            headers={"Content-Type": "application/json"},
        ) as session:
            yield cls(config=config, session=session, composer=composer)

    async def send(self, results: Sequence[RunResult]) -> bool:
        """Compose the report and post it when there is something to say."""
        payload = await self.composer.compose_for(self.config, results)
        if payload is None:
            log.info("No Slack message to send for report type %s", self.config.publish)
            return False

        log.info(
            "Posting Slack message with %d attachment(s)", len(payload.attachments)
        )
        async with self.session.post(
            resolve_endpoint(self.config), json=payload.to_body()
        ) as response:
            if response.status >= 300:
                text = await response.text()
                raise DeliveryError(
                    f"Failed to post Slack message: {response.status} {text}"
                )

        return True
