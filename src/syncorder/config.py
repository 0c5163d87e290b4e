"""Syncorder configuration.

HarnessConfig is the central configuration object, frozen after creation.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from syncorder._errors import ConfigError


@dataclass(frozen=True, slots=True)
class HarnessConfig:
    """Configuration for an event test helper.

    Attributes:
        root_url: Connection-root prefix stripped from reference strings to
              form raw paths.  A trailing ``/`` is removed on construction so
              raw paths keep their leading slash.
        label: Default prefix for failure messages.
        eager_check: Run the waiter synchronously on every live event so
            ordering violations raise where the offending event is delivered.
        max_log_events: Size of the observability ring buffer.

    """

    root_url: str = ""
    label: str | None = None
    eager_check: bool = True
    max_log_events: int = 10_000

    def __post_init__(self) -> None:
        if not isinstance(self.root_url, str):
            msg = f"root_url must be a string, got {type(self.root_url).__name__}"
            raise ConfigError(msg)
        if self.root_url.endswith("/"):
            object.__setattr__(self, "root_url", self.root_url.rstrip("/"))
        if self.max_log_events <= 0:
            msg = f"max_log_events must be positive, got {self.max_log_events}"
            raise ConfigError(msg)

    def with_label(self, label: str | None) -> HarnessConfig:
        """Return a copy using ``label`` when one is given."""
        if label is None or label == self.label:
            return self
        return replace(self, label=label)
