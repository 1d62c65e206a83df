"""Composition of chat notifications from a test run result tree."""

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import assert_never

from chat_report.errors import EnrichmentError, MalformedResultError
from chat_report.formatting import format_duration, percentage, truncate
from chat_report.models.options import ReportOptions, ReportPortalAnalysisConfig
from chat_report.models.payload import Attachment, AttachmentField, NotificationPayload
from chat_report.models.result import RunResult, SuiteResult
from chat_report.report_mode import ReportMode, resolve_mode

FAILURE_TEXT_LIMIT = 150
SEPARATOR = " ｜ "

type DefectSummaryFetcher = Callable[
    [ReportPortalAnalysisConfig], Awaitable[Sequence[str]]
]


def build_title(result: RunResult, options: ReportOptions) -> str:
    """Bold title line, falling back to the run name."""
    title = options.title or result.name
    if options.title_suffix:
        return f"*{title} {options.title_suffix}*"
    return f"*{title}*"


def _summary_fields(passed: int, total: int, duration: str) -> list[AttachmentField]:
    return [
        AttachmentField(
            title="Results",
            value=f"{passed} / {total} Passed ({percentage(passed, total)}%)",
            short=True,
        ),
        AttachmentField(title="Duration", value=duration, short=True),
    ]


def build_main_summary(result: RunResult) -> Attachment:
    """Summary block of the whole run."""
    return Attachment(
        mrkdwn_in=["text", "fields"],
        color="good" if result.status == "PASS" else "danger",
        fields=_summary_fields(
            result.passed, result.total, format_duration(result.duration)
        ),
    )


def build_suite_summary(suite: SuiteResult) -> Attachment:
    """Summary block of one suite, headed by the suite name."""
    return Attachment(
        text=f"*{suite.name}*",
        mrkdwn_in=["text", "fields"],
        color="good" if suite.status == "PASS" else "danger",
        fields=_summary_fields(
            suite.passed, suite.total, format_duration(suite.duration)
        ),
    )


def extract_failure_fields(suite: SuiteResult) -> list[AttachmentField]:
    """One field per failing case, in case order."""
    return [
        AttachmentField(
            value=(
                f"*Test*: {case.name}\n"
                f"*Error*: {truncate(case.failure, FAILURE_TEXT_LIMIT)}"
            )
        )
        for case in suite.cases
        if case.status == "FAIL"
    ]


def build_links(options: ReportOptions) -> Attachment | None:
    """Footer block listing the configured links."""
    if not options.links:
        return None
    return Attachment(
        fallback="links",
        footer=SEPARATOR.join(f"<{link.url}|{link.text}>" for link in options.links),
    )


def _only_suite(result: RunResult) -> SuiteResult:
    if not result.suites:
        raise MalformedResultError(
            f"Run '{result.name}' has no suites to report failure details for"
        )
    return result.suites[0]


@dataclass(frozen=True, kw_only=True)
class MessageComposer:
    """Builds a notification payload for a run under a report mode.

    Holds no state between calls; every call returns a new payload.
    """

    defect_summary_fetcher: DefectSummaryFetcher
    log: logging.Logger = field(
        default_factory=lambda: logging.getLogger(__name__), repr=False
    )

    async def compose_for(
        self, options: ReportOptions, results: Sequence[RunResult]
    ) -> NotificationPayload | None:
        """Resolve the report mode from options and compose."""
        return await self.compose(resolve_mode(options), results, options)

    async def compose(
        self,
        mode: ReportMode | None,
        results: Sequence[RunResult],
        options: ReportOptions,
    ) -> NotificationPayload | None:
        """Compose the payload, or return None when nothing should be sent.

        Args:
            mode: Report mode; None stands for an unsupported mode name
            results: Run results; only the first run is reported
            options: Presentation options

        Returns:
            The payload, or None for an unsupported mode or for a passing
            run under a failure-only mode

        Raises:
            MalformedResultError: If no run is given, or a failure details
                mode needs a suite the run does not have

        """
        if mode is None:
            self.log.warning("Unsupported report type: %s", options.publish)
            return None
        if not results:
            raise MalformedResultError("No run results to report")

        result = results[0]
        if mode.failures_only and result.status == "PASS":
            self.log.info("Run '%s' passed, skipping %s report", result.name, mode)
            return None

        main = build_main_summary(result)
        suites: list[Attachment] = []
        multi_suite = len(result.suites) > 1

        match mode:
            case ReportMode.TEST_SUMMARY:
                if multi_suite:
                    suites = [build_suite_summary(s) for s in result.suites]
            case ReportMode.FAILURE_SUMMARY:
                if multi_suite:
                    suites = [
                        build_suite_summary(s)
                        for s in result.suites
                        if s.status == "FAIL"
                    ]
            case ReportMode.TEST_SUMMARY_SLIM | ReportMode.FAILURE_SUMMARY_SLIM:
                pass
            case ReportMode.FAILURE_DETAILS:
                if multi_suite:
                    suites = [
                        build_suite_summary(s).with_fields(extract_failure_fields(s))
                        if s.status == "FAIL"
                        else build_suite_summary(s)
                        for s in result.suites
                    ]
                else:
                    main = main.with_fields(extract_failure_fields(_only_suite(result)))
            case ReportMode.FAILURE_DETAILS_SLIM:
                if multi_suite:
                    suites = [
                        build_suite_summary(s).with_fields(extract_failure_fields(s))
                        for s in result.suites
                        if s.status == "FAIL"
                    ]
                else:
                    main = main.with_fields(extract_failure_fields(_only_suite(result)))
            case _:
                assert_never(mode)

        attachments = [main, *suites]
        analysis = await self.attach_report_portal_analysis(result, options)
        if analysis is not None:
            attachments.append(analysis)
        if (links := build_links(options)) is not None:
            attachments.append(links)

        return NotificationPayload(
            text=build_title(result, options), attachments=attachments
        )

    async def attach_report_portal_analysis(
        self, result: RunResult, options: ReportOptions
    ) -> Attachment | None:
        """Defect analysis block for a failed run, if it can be fetched.

        Enrichment failures are logged and never abort composition.
        """
        if result.status == "PASS" or options.report_portal_analysis is None:
            return None

        try:
            summary = await self.defect_summary_fetcher(options.report_portal_analysis)
        except EnrichmentError as e:
            self.log.warning("Failed to get report portal analysis: %s", e, exc_info=e)
            return None

        if not summary:
            return None
        return Attachment(
            mrkdwn_in=["fields"],
            fields=[
                AttachmentField(
                    title="Report Portal Analysis",
                    value=SEPARATOR.join(summary),
                    short=False,
                )
            ],
        )
