"""Tests for configuration loading."""

import pytest

from stride_analyzer.config import (
    PROPERTIES_FILENAME,
    ScanConfig,
    load_config,
    load_repo_properties,
    parse_properties,
)
from stride_analyzer.exceptions import InvalidConfigError


class TestScanConfig:
    def test_defaults(self):
        config = ScanConfig()
        assert config.dup_window_tokens == 50
        assert config.large_file_threshold == 500
        assert config.complexity_method_threshold == 10
        assert config.redact_secrets is False
        assert config.exclude_dirs == (".git", ".hg", ".svn")
        assert config.workers is None

    def test_thresholds_use_property_keys(self):
        assert ScanConfig(large_file_threshold=800).thresholds() == {
            "dup.window.tokens": 50,
            "large.file.threshold": 800,
            "complexity.method.threshold": 10,
        }

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"dup_window_tokens": 0},
            {"large_file_threshold": -1},
            {"workers": 0},
            {"scan_timeout_seconds": 0},
            {"max_file_size_mb": -2},
            {"secret_allowlist": ("([",)},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            ScanConfig(**kwargs)

    def test_max_file_size_bytes(self):
        assert ScanConfig(max_file_size_mb=1).max_file_size_bytes == 1024 * 1024


class TestParseProperties:
    def test_separators_and_comments(self):
        text = "\n".join(
            [
                "# comment",
                "! also a comment",
                "a=1",
                "b : 2",
                "c 3",
                "url=http://host:8080/x",
                "bare",
            ]
        )
        assert parse_properties(text) == {
            "a": "1",
            "b": "2",
            "c": "3",
            "url": "http://host:8080/x",
            "bare": "",
        }


class TestRepoProperties:
    def _write(self, tmp_path, text):
        (tmp_path / PROPERTIES_FILENAME).write_text(text, encoding="utf-8")

    def test_missing_file(self, tmp_path):
        assert load_repo_properties(tmp_path) == {}

    def test_thresholds(self, tmp_path):
        self._write(tmp_path, "dup.window.tokens=20\nlarge.file.threshold: 800\n")
        config = load_config(tmp_path)
        assert config.dup_window_tokens == 20
        assert config.large_file_threshold == 800

    def test_malformed_values_fall_back(self, tmp_path):
        self._write(tmp_path, "dup.window.tokens=abc\nlarge.file.threshold=-5\n")
        config = load_config(tmp_path)
        assert config.dup_window_tokens == 50
        assert config.large_file_threshold == 500

    def test_secret_settings(self, tmp_path):
        self._write(
            tmp_path,
            "secrets.redact=true\n"
            "secrets.allowlist.b=EXAMPLE\n"
            "secrets.allowlist.a=^#\n"
            "secrets.allowlist.bad=([\n",
        )
        config = load_config(tmp_path)
        assert config.redact_secrets is True
        assert config.secret_allowlist == ("^#", "EXAMPLE")

    def test_exclude_dirs(self, tmp_path):
        self._write(tmp_path, "exclude.dirs = node_modules, build ,\n")
        assert load_config(tmp_path).exclude_dirs == ("node_modules", "build")

    def test_unknown_keys_ignored(self, tmp_path):
        self._write(tmp_path, "something.else=1\n")
        assert load_config(tmp_path) == ScanConfig()


class TestPrecedence:
    def test_env_overrides_properties(self, tmp_path, monkeypatch):
        (tmp_path / PROPERTIES_FILENAME).write_text("dup.window.tokens=20\n")
        monkeypatch.setenv("STRIDE_DUP_WINDOW_TOKENS", "25")
        assert load_config(tmp_path).dup_window_tokens == 25

    def test_explicit_overrides_win(self, tmp_path, monkeypatch):
        (tmp_path / PROPERTIES_FILENAME).write_text("dup.window.tokens=20\n")
        monkeypatch.setenv("STRIDE_DUP_WINDOW_TOKENS", "25")
        assert load_config(tmp_path, dup_window_tokens=30).dup_window_tokens == 30

    def test_none_override_is_ignored(self):
        assert load_config(workers=None).workers is None

    def test_list_override_becomes_tuple(self):
        assert load_config(exclude_dirs=["out"]).exclude_dirs == ("out",)


class TestEnvVars:
    def test_typed_values(self, monkeypatch):
        monkeypatch.setenv("STRIDE_WORKERS", "3")
        monkeypatch.setenv("STRIDE_SCAN_TIMEOUT_SECONDS", "12.5")
        monkeypatch.setenv("STRIDE_REDACT_SECRETS", "yes")
        config = load_config()
        assert config.workers == 3
        assert config.scan_timeout_seconds == 12.5
        assert config.redact_secrets is True

    @pytest.mark.parametrize("value", ["abc", "0"])
    def test_invalid_values_skipped(self, monkeypatch, value):
        monkeypatch.setenv("STRIDE_WORKERS", value)
        assert load_config().workers is None

    def test_tuple_fields_not_read(self, monkeypatch):
        monkeypatch.setenv("STRIDE_EXCLUDE_DIRS", "build")
        assert load_config().exclude_dirs == (".git", ".hg", ".svn")


class TestExplicitOverrideErrors:
    def test_unknown_key(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            load_config(window=5)
        assert exc_info.value.key == "window"

    def test_invalid_value(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            load_config(workers=0)
        assert exc_info.value.key == "workers"
