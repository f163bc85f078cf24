"""notionblog.notion_api -- Notion API transport and endpoint wrappers.

* :mod:`.rate_limit` -- Async token bucket.
* :mod:`.retries` -- Retry decision logic and exponential backoff.
* :mod:`.transport` -- HTTP transport with auth, retries, and rate limiting.
* :mod:`.pages` -- Page retrieval.
* :mod:`.blocks` -- Block children listing.
* :mod:`.data_sources` -- Data source queries.
"""

from __future__ import annotations

from .blocks import AsyncBlockAPI
from .data_sources import AsyncDataSourceAPI
from .pages import AsyncPageAPI
from .rate_limit import AsyncTokenBucket
from .retries import compute_backoff, should_retry
from .transport import AsyncNotionTransport

__all__ = [
    "AsyncBlockAPI",
    "AsyncDataSourceAPI",
    "AsyncNotionTransport",
    "AsyncPageAPI",
    "AsyncTokenBucket",
    "compute_backoff",
    "should_retry",
]
