"""Report Portal client used to enrich failed runs with defect analysis."""

import logging
from collections.abc import AsyncGenerator, Mapping, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp
from pydantic import BaseModel

from chat_report.errors import EnrichmentError
from chat_report.formatting import format_defects_summary
from chat_report.models.options import ReportPortalAnalysisConfig

log = logging.getLogger(__name__)


class DefectGroup(BaseModel):
    """Defect counters of one category; only the total is read."""

    total: int = 0


class LaunchStatistics(BaseModel):
    """Statistics block of a launch."""

    defects: Mapping[str, DefectGroup] | None = None


class Launch(BaseModel):
    """A launch from the Report Portal API."""

    id: int
    name: str
    number: int | None = None
    statistics: LaunchStatistics | None = None


class LaunchPage(BaseModel):
    """Paged response from the launch search API."""

    content: Sequence[Launch]


@dataclass(frozen=True, kw_only=True)
class ReportPortalClient:
    """Thin read-only client for the Report Portal launch API."""

    config: ReportPortalAnalysisConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: ReportPortalAnalysisConfig
    ) -> AsyncGenerator["ReportPortalClient", None]:
        """Create client with managed session lifecycle."""
        headers = {
            "Authorization": f"Bearer {config.api_key.get_secret_value()}",
            "Accept": "application/json",
        }
        async with aiohttp.ClientSession(
            base_url=config.url.rstrip("/") + "/",
            headers=headers,
        ) as session:
            yield cls(config=config, session=session)

    async def get_launch(self, launch_id: str) -> Launch:
        """Get launch by identifier."""
        url = f"api/v1/{self.config.project}/launch/{launch_id}"

        async with self.session.get(url) as response:
            if response.status != 200:
                text = await response.text()
                raise EnrichmentError(
                    f"Failed to get launch: {response.status} {text}"
                )
            data = await response.json()

        return Launch.model_validate(data)

    async def find_last_launch(self, launch_name: str) -> Launch:
        """Find the most recently started launch with the given name."""
        url = f"api/v1/{self.config.project}/launch"
        params = {
            "filter.eq.name": launch_name,
            "page.size": "1",
            "page.sort": "startTime,desc",
        }

        async with self.session.get(url, params=params) as response:
            if response.status != 200:
                text = await response.text()
                raise EnrichmentError(
                    f"Failed to search launches: {response.status} {text}"
                )
            data = await response.json()

        page = LaunchPage.model_validate(data)
        if not page.content:
            raise EnrichmentError(f"No launch found with name '{launch_name}'")
        return page.content[0]

    async def get_launch_details(self) -> Launch:
        """Load the configured launch, by id when given, else by name."""
        if self.config.launch_id is not None:
            return await self.get_launch(self.config.launch_id)
        if self.config.launch_name is not None:
            return await self.find_last_launch(self.config.launch_name)
        raise EnrichmentError("Neither launch_id nor launch_name is configured")


async def fetch_defect_summary(config: ReportPortalAnalysisConfig) -> Sequence[str]:
    """Return formatted defect tokens for the configured launch.

    An empty sequence means the launch carries no defects breakdown. Bodies
    that are not JSON and schema mismatches both surface as ValueError.

    Raises:
        EnrichmentError: If the launch cannot be fetched or parsed.

    """
    try:
        async with ReportPortalClient.from_config(config) as client:
            launch = await client.get_launch_details()
    except (aiohttp.ClientError, TimeoutError, ValueError) as e:
        raise EnrichmentError(f"Failed to query Report Portal: {e}") from e

    log.info("Loaded Report Portal launch %s (%s)", launch.id, launch.name)
    if launch.statistics is None or launch.statistics.defects is None:
        return []
    return format_defects_summary(launch.statistics.defects)
