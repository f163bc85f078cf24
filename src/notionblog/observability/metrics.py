"""Metrics hook protocol and no-op default implementation.

notionblog emits counters and timings around API requests and block-tree
fetches.  By default a :class:`NoopMetricsHook` discards them; pass any
object satisfying :class:`MetricsHook` as ``BlogConfig(metrics=...)`` to
route them to StatsD, Prometheus, Datadog and the like.

Emitted metric names:

* ``notionblog.requests_total``          -- counter
* ``notionblog.retries_total``           -- counter
* ``notionblog.rate_limited_total``      -- counter
* ``notionblog.request_duration_ms``     -- timing
* ``notionblog.rate_limit_wait_ms``      -- timing
* ``notionblog.blocks_fetched_total``    -- counter
* ``notionblog.blocks_dropped_total``    -- counter
* ``notionblog.tree_fetch_duration_ms``  -- timing
* ``notionblog.fetch_failures_total``    -- counter
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    *tags* are string key/value pairs; backends translate them into
    whatever labelling scheme they support.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...


class NoopMetricsHook:
    """Default backend that silently discards every data point."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
