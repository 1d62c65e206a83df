"""Report modes selecting which blocks a notification carries."""

import logging
from enum import StrEnum

from chat_report.models.options import ReportOptions

log = logging.getLogger(__name__)


class ReportMode(StrEnum):
    """Verbosity and filter policy of a notification."""

    TEST_SUMMARY = "test-summary"
    FAILURE_SUMMARY = "failure-summary"
    TEST_SUMMARY_SLIM = "test-summary-slim"
    FAILURE_SUMMARY_SLIM = "failure-summary-slim"
    FAILURE_DETAILS = "failure-details"
    FAILURE_DETAILS_SLIM = "failure-details-slim"

    @property
    def failures_only(self) -> bool:
        """Whether a passing run is reported at all."""
        return self not in {ReportMode.TEST_SUMMARY, ReportMode.TEST_SUMMARY_SLIM}


def resolve_mode(options: ReportOptions) -> ReportMode | None:
    """Map the ``publish`` option to a report mode.

    Returns None for names that are not a known mode.
    """
    try:
        return ReportMode(options.publish)
    except ValueError:
        log.debug("Unknown report mode name: %s", options.publish)
        return None
