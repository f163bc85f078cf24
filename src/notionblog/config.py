"""Configuration for notionblog.

:class:`BlogConfig` captures every tuneable knob of the blog client: the
Notion credentials, the data source holding the posts, block-tree fetch
limits, and the transport's retry / rate-limit behaviour.

Missing credentials are *not* a configuration error.  A config without a
token or data source is valid; :attr:`BlogConfig.is_configured` reports
it and the client degrades to empty results instead of calling the API.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

ENV_TOKEN = "NOTION_API_KEY"
ENV_DATA_SOURCE = "DATABASE_ID"
ENV_PUBLISHED_STATUS = "NOTION_PUBLISHED_STATUS"
ENV_BASE_URL = "NOTION_BASE_URL"

DEFAULT_PUBLISHED_STATUS = "완료"

# Notion caps ``page_size`` for list endpoints at 100.
MAX_PAGE_SIZE = 100


@dataclass
class BlogConfig:
    """Complete configuration for a notionblog client.

    Parameters
    ----------
    token:
        Notion integration token.  Never logged.
    data_source_id:
        ID of the Notion data source (database) holding the posts.
    notion_version:
        Value of the ``Notion-Version`` header sent with every request.
    base_url:
        API root URL.  Override for proxy or testing environments.
    published_status:
        Status name a post must carry to be listed by
        :meth:`AsyncBlogClient.get_latest_posts`.
    page_size:
        Children requested per ``GET /blocks/{id}/children`` call (1-100).
    max_child_pages:
        Number of result pages followed per children listing.  The default
        of ``1`` fetches only the first ``page_size`` children of a block.
    fetch_concurrency:
        Maximum sibling subtrees fetched at once.  ``1`` walks the tree
        depth-first, one request at a time.
    max_depth:
        Maximum nesting depth to fetch below the page.  ``None`` means
        unlimited.
    retry_max_attempts:
        Maximum attempts per request for retryable HTTP errors.
    retry_base_delay:
        Base delay (seconds) for exponential backoff.
    retry_max_delay:
        Upper cap (seconds) on computed backoff delay.
    retry_jitter:
        Scale backoff intervals randomly to 50-100 %.
    rate_limit_rps:
        Target requests per second for client-side pacing.
    timeout_seconds:
        HTTP request timeout in seconds.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    metrics:
        Optional :class:`~notionblog.observability.MetricsHook` backend.
    """

    # ── Credentials ─────────────────────────────────────────────────────
    token: str = ""

    data_source_id: str = ""

    notion_version: str = "2025-09-03"

    base_url: str = "https://api.notion.com/v1"

    # ── Posts ───────────────────────────────────────────────────────────
    published_status: str = DEFAULT_PUBLISHED_STATUS

    # ── Block tree ──────────────────────────────────────────────────────
    page_size: int = MAX_PAGE_SIZE

    max_child_pages: int = 1

    fetch_concurrency: int = 1

    max_depth: int | None = None

    # ── Retry & rate ────────────────────────────────────────────────────
    retry_max_attempts: int = 5

    retry_base_delay: float = 1.0

    retry_max_delay: float = 60.0

    retry_jitter: bool = True

    rate_limit_rps: float = 3.0

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        parsed = urlparse(self.base_url)
        if parsed.scheme == "http" and parsed.hostname not in (
            "localhost",
            "127.0.0.1",
            "::1",
        ):
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your API token, or target localhost for testing."
            )

        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}, got {self.page_size}")
        if self.max_child_pages < 1:
            raise ValueError(f"max_child_pages must be >= 1, got {self.max_child_pages}")
        if self.fetch_concurrency < 1:
            raise ValueError(f"fetch_concurrency must be >= 1, got {self.fetch_concurrency}")
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0 or None, got {self.max_depth}")
        if self.retry_max_attempts < 1:
            raise ValueError(f"retry_max_attempts must be >= 1, got {self.retry_max_attempts}")
        if self.retry_base_delay < 0:
            raise ValueError(f"retry_base_delay must be >= 0, got {self.retry_base_delay}")
        if self.retry_max_delay < 0:
            raise ValueError(f"retry_max_delay must be >= 0, got {self.retry_max_delay}")
        if self.rate_limit_rps <= 0:
            raise ValueError(f"rate_limit_rps must be > 0, got {self.rate_limit_rps}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")

    @property
    def is_configured(self) -> bool:
        """``True`` when both the token and the data source ID are set."""
        return bool(self.token) and bool(self.data_source_id)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> BlogConfig:
        """Build a config from environment variables.

        Reads ``NOTION_API_KEY``, ``DATABASE_ID`` and the optional
        ``NOTION_PUBLISHED_STATUS`` / ``NOTION_BASE_URL``.  Unset
        variables fall back to the dataclass defaults; explicit keyword
        *overrides* win over the environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {
            "token": env.get(ENV_TOKEN, ""),
            "data_source_id": env.get(ENV_DATA_SOURCE, ""),
        }
        if env.get(ENV_PUBLISHED_STATUS):
            values["published_status"] = env[ENV_PUBLISHED_STATUS]
        if env.get(ENV_BASE_URL):
            values["base_url"] = env[ENV_BASE_URL]
        values.update(overrides)
        return cls(**values)

    def __repr__(self) -> str:
        """Mask the token to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "token":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"token='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"BlogConfig({', '.join(parts)})"
