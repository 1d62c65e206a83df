"""Loading of delivery targets from entry points."""

from importlib.metadata import entry_points
from typing import Any

from chat_report.targets.manifest import TargetManifest

ENTRY_POINT_GROUP = "chat_report.targets"


class TargetNotFoundError(Exception):
    """Raised when no usable target is registered under a key."""


def available_targets() -> list[str]:
    """Keys of every registered target, sorted."""
    return sorted(e.name for e in entry_points(group=ENTRY_POINT_GROUP))


def load_target_manifest(key: str) -> TargetManifest[Any]:
    """Load a target manifest by key.

    Args:
        key: The target key as registered in pyproject.toml (e.g., "slack")

    Returns:
        The target manifest instance

    Raises:
        TargetNotFoundError: If no target is registered under the key, or
            the registered object is not a TargetManifest

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=key)
    if not matches:
        raise TargetNotFoundError(
            f"Target '{key}' not found. Available targets: {available_targets()}"
        )

    entry = next(iter(matches))
    manifest = entry.load()
    if not isinstance(manifest, TargetManifest):
        raise TargetNotFoundError(
            f"Target '{key}' points at {entry.value}, which is not a TargetManifest"
        )
    return manifest
