"""Shared pytest fixtures for the Sheet Ledger test-suite."""

from __future__ import annotations

import pytest


@pytest.fixture
def anyio_backend() -> str:
    """Run async tests on asyncio only."""

    return "asyncio"
