"""Tests for the formatters package."""

import io
import json

import pytest
from rich.console import Console

from stride_analyzer.formatters import JsonFormatter, RichFormatter
from stride_analyzer.insights import Category, Suggestion
from stride_analyzer.metrics import LargeFile, RepoMetrics
from stride_analyzer.scanning import DuplicateBlock, SecretMatch


@pytest.fixture
def metrics():
    return RepoMetrics(
        total_files=2,
        total_lines=40,
        file_types={"java": 2},
        lines_per_type={"java": 40},
        comment_lines_per_type={"java": 4},
        avg_lines_per_type={"java": 20.0},
        largest_files=(LargeFile("/r/A.java", 30), LargeFile("/r/B.java", 10)),
        duplicate_blocks=(DuplicateBlock("abc", ("/r/A.java", "/r/B.java")),),
        secrets=(SecretMatch("/r/A.java", 3, "secret=abc"),),
        churn={"A.java": 4},
    )


@pytest.fixture
def suggestions():
    return [
        Suggestion(Category.LARGE_FILE, "Review: /r/A.java (30 lines)"),
        Suggestion(Category.TECH_DEBT, "File /r/A.java exceeds 20 lines"),
        Suggestion(Category.INFO, "Dominant file type: java"),
    ]


def _console():
    return Console(file=io.StringIO(), width=120)


class TestJsonFormatter:
    def test_metrics_with_suggestions(self, metrics, suggestions):
        data = json.loads(JsonFormatter().format(metrics, suggestions))
        assert data["totalFiles"] == 2
        assert data["duplicateBlocks"] == [{"hash": "abc", "files": ["/r/A.java", "/r/B.java"]}]
        assert data["optimizerSuggestions"] == [
            "[LARGE FILE] Review: /r/A.java (30 lines)",
            "File /r/A.java exceeds 20 lines",
            "[INFO] Dominant file type: java",
        ]

    def test_no_suggestions_key_when_empty(self, metrics):
        data = json.loads(JsonFormatter().format(metrics, []))
        assert "optimizerSuggestions" not in data

    def test_suggestions_only(self, metrics, suggestions):
        data = json.loads(JsonFormatter(include_metrics=False).format(metrics, suggestions))
        assert data[-1] == "[INFO] Dominant file type: java"

    def test_error(self):
        data = json.loads(JsonFormatter().format(RepoMetrics.failed("boom"), []))
        assert data == {"error": "boom"}

    def test_render_prints(self, metrics, capsys):
        JsonFormatter().render(metrics, [])
        assert json.loads(capsys.readouterr().out)["totalLines"] == 40


class TestRichFormatter:
    def test_full_report(self, metrics, suggestions):
        output = RichFormatter(console=_console()).format(metrics, suggestions)
        assert "Summary" in output
        assert "By Extension" in output
        assert "Duplicate block across: /r/A.java, /r/B.java" in output
        assert "/r/A.java:3" in output
        assert "A.java (4)" in output
        assert "Review: /r/A.java (30 lines)" in output
        assert "DEBT" in output

    def test_suggestions_only(self, metrics, suggestions):
        output = RichFormatter(console=_console(), show_metrics=False).format(metrics, suggestions)
        assert "Summary" not in output
        assert "Dominant file type: java" in output

    def test_error(self):
        output = RichFormatter(console=_console()).format(RepoMetrics.failed("boom"), [])
        assert "Error: boom" in output
