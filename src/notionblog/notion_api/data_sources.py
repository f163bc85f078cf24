"""Data source API wrapper for the Notion API.

Posts are pages of one Notion data source (a database, in API versions
before ``2025-09-03``).
"""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport


class AsyncDataSourceAPI:
    """Asynchronous wrapper for ``POST /data_sources/{id}/query``.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def query(
        self,
        data_source_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
        page_size: int = 100,
    ) -> list[dict[str, Any]]:
        """Return the first *page_size* pages matching *filter*, ordered by *sorts*."""
        body: dict[str, Any] = {}
        if filter is not None:
            body["filter"] = filter
        if sorts is not None:
            body["sorts"] = sorts
        return [
            item
            async for item in self._transport.paginate(
                f"/data_sources/{data_source_id}/query",
                method="POST",
                page_size=page_size,
                max_pages=1,
                body=body,
            )
        ]
