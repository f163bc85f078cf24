"""Block API wrapper for the Notion API."""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport


class AsyncBlockAPI:
    """Asynchronous wrapper for the Notion Blocks API.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def list_children(
        self,
        block_id: str,
        page_size: int = 100,
        max_pages: int | None = 1,
    ) -> list[dict[str, Any]]:
        """List the direct children of a block or page.

        Parameters
        ----------
        block_id:
            The UUID of the parent block (or page).
        page_size:
            Children requested per call (Notion caps this at 100).
        max_pages:
            Result pages to follow.  The default of ``1`` issues a single
            request; ``None`` follows ``next_cursor`` to the end.

        Returns
        -------
        list[dict]
            Raw child block objects in document order.
        """
        return [
            item
            async for item in self._transport.paginate(
                f"/blocks/{block_id}/children",
                page_size=page_size,
                max_pages=max_pages,
            )
        ]
