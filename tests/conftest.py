"""Shared test fixtures for the puidv7 test suite."""

import pytest

from puidv7.core.prefix_registry import PrefixRegistry

STATIC_UUID = "01960ec0-c6cf-74d3-ae14-50c20e035fe6"  # 36 chars
STATIC_BODY = "06b0xg66sxtd7bgma310w0tzwr"  # 26 chars
STATIC_ID = "tst" + STATIC_BODY


@pytest.fixture
def registry_path(tmp_path):
    return tmp_path / "prefixes.yaml"


@pytest.fixture
def registry(registry_path):
    return PrefixRegistry(str(registry_path))


def write_registry(path, prefixes: dict[str, str], version: str = "1") -> None:
    """Helper to write a registry file for testing."""
    lines = [f'version: "{version}"', "prefixes:"]
    # Quoted so prefixes such as 'off' or 'yes' stay strings
    lines += [f"  '{prefix}': {model}" for prefix, model in prefixes.items()]
    path.write_text("\n".join(lines) + "\n")
