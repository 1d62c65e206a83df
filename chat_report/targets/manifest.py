"""Target manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from chat_report.models.options import ReportOptions
from chat_report.targets.base import NotificationTarget

type TargetFactory[ConfigT] = Callable[
    [ConfigT], AbstractAsyncContextManager[NotificationTarget]
]


@dataclass(frozen=True, kw_only=True)
class TargetManifest[ConfigT: ReportOptions]:
    """A delivery target registered under the ``chat_report.targets`` group.

    Target configs extend ``ReportOptions``, so a parsed config always carries
    the report mode alongside the endpoint settings.
    """

    config_cls: type[ConfigT]
    target_factory: TargetFactory[ConfigT]

    def parse_config(self, raw: str) -> ConfigT:
        """Validate a JSON config string against the target's config model."""
        return self.config_cls.model_validate_json(raw)
