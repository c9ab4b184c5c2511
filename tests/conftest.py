from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from blnkclient.config import ClientConfig
from tests.helpers import TEST_BASE_URL

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_logger() -> Mock:
    """Create a mock logger capability with ``info`` and ``error``."""
    return Mock(spec=["info", "error"])


@pytest.fixture
def config(mock_logger: Mock) -> ClientConfig:
    """Create a client configuration pointing at the test base URL."""
    return ClientConfig(base_url=TEST_BASE_URL, api_key="test-key", logger=mock_logger)
