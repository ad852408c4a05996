"""Shared test fixtures for the figmamcp test suite."""

from __future__ import annotations

from typing import Any

import pytest

from tests.helpers import sample_document


@pytest.fixture
def document() -> dict[str, Any]:
    """A fresh sample Figma document tree."""
    return sample_document()
