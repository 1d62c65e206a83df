"""Pure formatting helpers used when rendering notification fields."""

import math
from collections.abc import Mapping, Sequence
from typing import Protocol

TRUNCATION_MARKER = "..."


class DefectGroupLike(Protocol):
    """Anything carrying a defect total."""

    total: int


DEFECT_CATEGORIES: Sequence[tuple[str, str]] = (
    ("product_bug", "🔴 PB"),
    ("automation_bug", "🟡 AB"),
    ("system_issue", "🔵 SI"),
    ("no_defect", "◯ ND"),
    ("to_investigate", "🟠 TI"),
)


def percentage(passed: int, total: int) -> int:
    """Return ``passed`` as a whole percentage of ``total``.

    Halves round up, and an empty total counts as 0%.
    """
    if total == 0:
        return 0
    return math.floor(passed / total * 100 + 0.5)


def format_duration(seconds: float) -> str:
    """Format a duration as ``HH:MM:SS``; hours do not wrap at 24."""
    whole = int(seconds)
    hours, remainder = divmod(whole, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def truncate(text: str | None, max_length: int) -> str:
    """Cut ``text`` to ``max_length`` characters and mark the cut."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length] + TRUNCATION_MARKER


def format_defects_summary(
    defects: Mapping[str, DefectGroupLike], bold: str = "*"
) -> list[str]:
    """Render one token per defect category in a fixed order.

    Categories present in ``defects`` are emphasised with their total,
    missing ones are shown as zero.
    """
    results: list[str] = []
    for key, label in DEFECT_CATEGORIES:
        group = defects.get(key)
        if group is not None:
            results.append(f"{bold}{label} - {group.total}{bold}")
        else:
            results.append(f"{label} - 0")
    return results
