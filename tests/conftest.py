"""Shared test fixtures for Stride Analyzer tests."""

from pathlib import Path

import pytest

from stride_analyzer.config import ScanConfig
from stride_analyzer.temporal import EmptyChurnSource


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def make_repo(tmp_path):
    """Build a repository tree from a {relative path: text or bytes} mapping."""

    def _make(files: dict) -> Path:
        root = tmp_path / "repo"
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def config():
    """Default configuration with a small worker pool."""
    return ScanConfig(workers=2)


@pytest.fixture
def no_churn():
    return EmptyChurnSource()


@pytest.fixture
def java_source():
    """A small Java class exercising most line signals."""
    return "\n".join(
        [
            "import java.util.List;",
            "// Service entry point",
            "public class Service {",
            "    public int run(int a, int b) {",
            "        if (a > b && b > 0) {",
            "            return a;",
            "        }",
            "        // TODO: handle negatives",
            "        return b;",
            "    }",
            "}",
        ]
    )


@pytest.fixture(autouse=True)
def _clean_stride_env(monkeypatch):
    """Keep STRIDE_* variables from the host out of config resolution."""
    import os

    for key in list(os.environ):
        if key.startswith("STRIDE_"):
            monkeypatch.delenv(key)
