"""Shared test fixtures for the notionblog test suite."""

from __future__ import annotations

import pytest

from notionblog.config import BlogConfig
from notionblog.converter.block_renderer import BlockRenderer


@pytest.fixture
def config() -> BlogConfig:
    """Configured client settings tuned for fast, deterministic tests."""
    return BlogConfig(
        token="test_token_1234",
        data_source_id="ds-1",
        retry_max_attempts=3,
        retry_base_delay=0.0,
        retry_max_delay=0.0,
        retry_jitter=False,
        rate_limit_rps=10_000.0,
    )


@pytest.fixture
def renderer() -> BlockRenderer:
    return BlockRenderer()
