"""Tests for churn counting and history sources."""

import subprocess

from stride_analyzer.temporal import (
    ChurnSource,
    EmptyChurnSource,
    GitLogChurnSource,
    StaticChurnSource,
    compute_churn,
)


class _BrokenSource:
    def changed_paths(self):
        raise RuntimeError("history backend down")


class TestComputeChurn:
    def test_counts_per_path(self):
        source = StaticChurnSource(["b.py", "a.py", "", "  ", "a.py"])
        assert compute_churn(source) == {"a.py": 2, "b.py": 1}

    def test_from_log_output(self):
        raw = "src/a.py\nsrc/b.py\n\nsrc/a.py\n"
        source = StaticChurnSource.from_log_output(raw)
        assert compute_churn(source) == {"src/a.py": 2, "src/b.py": 1}

    def test_empty_source(self):
        assert compute_churn(EmptyChurnSource()) == {}

    def test_failing_source_yields_empty_map(self):
        assert compute_churn(_BrokenSource()) == {}

    def test_sources_satisfy_protocol(self):
        assert isinstance(StaticChurnSource([]), ChurnSource)
        assert isinstance(EmptyChurnSource(), ChurnSource)
        assert isinstance(GitLogChurnSource("."), ChurnSource)


class TestGitLogChurnSource:
    def test_non_repository_has_no_history(self, tmp_path):
        assert GitLogChurnSource(str(tmp_path)).changed_paths() == []

    def test_configured_timeout_applies_to_every_git_call(self, tmp_path, monkeypatch):
        from stride_analyzer.temporal import git_extractor

        timeouts = []

        def fake_run(cmd, **kwargs):
            timeouts.append(kwargs["timeout"])
            return subprocess.CompletedProcess(cmd, 0, stdout="a.py\nb.py\n", stderr="")

        monkeypatch.setattr(git_extractor.subprocess, "run", fake_run)
        source = GitLogChurnSource(str(tmp_path), timeout_seconds=7)
        assert source.changed_paths() == ["a.py", "b.py"]
        assert timeouts == [7, 7]
