# Test configuration and utilities
import os
from collections.abc import Generator
from pathlib import Path

import pytest

from chclient.providers import GrpcClient, HttpClient
from chclient.registry import OptionRegistry, reset_registry


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Remove CHC_* variables so defaults are not overridden by the host."""
    for name in list(os.environ):
        if name.upper().startswith("CHC_"):
            monkeypatch.delenv(name, raising=False)
    reset_registry()
    yield
    reset_registry()


@pytest.fixture
def registry() -> OptionRegistry:
    """Option registry with the bundled HTTP and gRPC clients."""
    return OptionRegistry(discover=lambda: [HttpClient(), GrpcClient()]).build()


# Test utilities
def create_test_file(directory: Path, filename: str, content: str) -> Path:
    """Create a test file with given content."""
    file_path = directory / filename
    file_path.write_text(content)
    return file_path
