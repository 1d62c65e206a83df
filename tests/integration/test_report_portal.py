"""Integration tests for the Report Portal client."""

import re
from collections.abc import AsyncGenerator

import aiohttp
import pytest
from aioresponses import aioresponses as aioresponses_cls
from pydantic import SecretStr

from chat_report.errors import EnrichmentError
from chat_report.models.options import ReportPortalAnalysisConfig
from chat_report.report_portal import ReportPortalClient, fetch_defect_summary
from chat_report.testing.report_portal.payloads import launch, launch_page

API_BASE_URL = "http://rp.test"
LAUNCH_URL = f"{API_BASE_URL}/api/v1/proj/launch/101"
SEARCH_URL = re.compile(r"^http://rp\.test/api/v1/proj/launch\?.*$")


@pytest.fixture
def config() -> ReportPortalAnalysisConfig:
    """Create configuration selecting a launch by id."""
    return ReportPortalAnalysisConfig(
        url=API_BASE_URL,
        api_key=SecretStr("rp-token"),
        project="proj",
        launch_id="101",
    )


@pytest.fixture
def config_by_name() -> ReportPortalAnalysisConfig:
    """Create configuration selecting the latest launch by name."""
    return ReportPortalAnalysisConfig(
        url=API_BASE_URL,
        api_key=SecretStr("rp-token"),
        project="proj",
        launch_name="regression",
    )


@pytest.fixture
async def client(
    config: ReportPortalAnalysisConfig, aioresponses: aioresponses_cls
) -> AsyncGenerator[ReportPortalClient, None]:
    """Create client with managed session."""
    async with ReportPortalClient.from_config(config) as impl:
        yield impl


class TestGetLaunch:
    """Tests for get_launch."""

    async def test_parses_launch(
        self, client: ReportPortalClient, aioresponses: aioresponses_cls
    ) -> None:
        """Parses launch statistics from the API response."""
        aioresponses.get(
            LAUNCH_URL, status=200, payload=launch(defects={"product_bug": 2})
        )

        result = await client.get_launch("101")

        assert result.id == 101
        assert result.statistics is not None
        assert result.statistics.defects is not None
        assert result.statistics.defects["product_bug"].total == 2

    async def test_raises_on_error_status(
        self, client: ReportPortalClient, aioresponses: aioresponses_cls
    ) -> None:
        """Raises EnrichmentError for non-200 responses."""
        aioresponses.get(LAUNCH_URL, status=404, body="not found")

        with pytest.raises(EnrichmentError, match="Failed to get launch: 404"):
            await client.get_launch("101")


class TestFindLastLaunch:
    """Tests for find_last_launch."""

    async def test_returns_first_launch(
        self, client: ReportPortalClient, aioresponses: aioresponses_cls
    ) -> None:
        """Returns the most recent launch from the search page."""
        aioresponses.get(
            SEARCH_URL,
            status=200,
            payload=launch_page(launch(launch_id=9, name="regression")),
        )

        result = await client.find_last_launch("regression")

        assert result.id == 9

    async def test_raises_when_no_launch(
        self, client: ReportPortalClient, aioresponses: aioresponses_cls
    ) -> None:
        """Raises EnrichmentError when the search finds nothing."""
        aioresponses.get(SEARCH_URL, status=200, payload=launch_page())

        with pytest.raises(EnrichmentError, match="No launch found"):
            await client.find_last_launch("regression")

    async def test_raises_on_error_status(
        self, client: ReportPortalClient, aioresponses: aioresponses_cls
    ) -> None:
        """Raises EnrichmentError for non-200 responses."""
        aioresponses.get(SEARCH_URL, status=500, body="boom")

        with pytest.raises(EnrichmentError, match="Failed to search launches: 500"):
            await client.find_last_launch("regression")


class TestFetchDefectSummary:
    """Tests for fetch_defect_summary."""

    async def test_formats_defects_by_launch_id(
        self, config: ReportPortalAnalysisConfig, aioresponses: aioresponses_cls
    ) -> None:
        """Formats every defect category of the launch."""
        aioresponses.get(
            LAUNCH_URL,
            status=200,
            payload=launch(defects={"product_bug": 2, "to_investigate": 1}),
        )

        summary = await fetch_defect_summary(config)

        assert summary == [
            "*🔴 PB - 2*",
            "🟡 AB - 0",
            "🔵 SI - 0",
            "◯ ND - 0",
            "*🟠 TI - 1*",
        ]

    async def test_formats_defects_by_launch_name(
        self,
        config_by_name: ReportPortalAnalysisConfig,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Looks up the latest launch when only a name is configured."""
        aioresponses.get(
            SEARCH_URL,
            status=200,
            payload=launch_page(launch(defects={"automation_bug": 5})),
        )

        summary = await fetch_defect_summary(config_by_name)

        assert summary[1] == "*🟡 AB - 5*"

    async def test_no_defects_breakdown(
        self, config: ReportPortalAnalysisConfig, aioresponses: aioresponses_cls
    ) -> None:
        """Returns nothing when the launch has no defects block."""
        aioresponses.get(LAUNCH_URL, status=200, payload=launch(defects=None))

        assert await fetch_defect_summary(config) == []

    async def test_wraps_connection_errors(
        self, config: ReportPortalAnalysisConfig, aioresponses: aioresponses_cls
    ) -> None:
        """Raises EnrichmentError when the service is unreachable."""
        aioresponses.get(LAUNCH_URL, exception=aiohttp.ClientConnectionError("down"))

        with pytest.raises(EnrichmentError, match="Failed to query Report Portal"):
            await fetch_defect_summary(config)

    async def test_wraps_malformed_responses(
        self, config: ReportPortalAnalysisConfig, aioresponses: aioresponses_cls
    ) -> None:
        """Raises EnrichmentError when the response does not parse."""
        aioresponses.get(LAUNCH_URL, status=200, payload={"unexpected": True})

        with pytest.raises(EnrichmentError, match="Failed to query Report Portal"):
            await fetch_defect_summary(config)

    async def test_wraps_non_json_bodies(
        self, config: ReportPortalAnalysisConfig, aioresponses: aioresponses_cls
    ) -> None:
        """Raises EnrichmentError when a JSON response carries an HTML page."""
        aioresponses.get(
            LAUNCH_URL,
            status=200,
            body="<html>gateway error</html>",
            content_type="application/json",
        )

        with pytest.raises(EnrichmentError, match="Failed to query Report Portal"):
            await fetch_defect_summary(config)


class TestGetLaunchDetails:
    """Tests for get_launch_details."""

    async def test_raises_without_launch_selector(
        self, aioresponses: aioresponses_cls
    ) -> None:
        """Raises EnrichmentError when neither launch id nor name is set."""
        config = ReportPortalAnalysisConfig.model_construct(
            url=API_BASE_URL,
            api_key=SecretStr("rp-token"),
            project="proj",
            launch_id=None,
            launch_name=None,
        )

        async with ReportPortalClient.from_config(config) as client:
            with pytest.raises(EnrichmentError, match="Neither launch_id"):
                await client.get_launch_details()

        assert not aioresponses.requests
