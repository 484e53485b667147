"""Tests for folding FileRecords into RepoMetrics."""

import pytest

from stride_analyzer.config import ScanConfig
from stride_analyzer.metrics import AggregateBuilder, CoupledFile, LargeFile, RepoMetrics
from stride_analyzer.scanning import DuplicateBlock, FileRecord, SecretMatch, WalkResult


def _record(path, ext="java", lines=10, **kwargs):
    defaults = dict(
        comment_lines=0,
        todo_count=0,
        functions=0,
        classes=0,
        max_nesting=0,
        cognitive_complexity=0,
        cyclomatic_complexity=1,
        imports=0,
        halstead_volume=0.0,
    )
    defaults.update(kwargs)
    return FileRecord(path=path, extension=ext, lines=lines, **defaults)


def _walk(*records, max_depth=1):
    result = WalkResult(max_depth=max_depth)
    for record in records:
        result = result.merge(WalkResult.of_file(record, 1))
    return result


@pytest.fixture
def builder():
    return AggregateBuilder(ScanConfig())


class TestTotals:
    def test_invariants(self, builder):
        walk = _walk(
            _record("/r/A.java", lines=30, comment_lines=3, functions=4, classes=1),
            _record("/r/B.java", lines=10, comment_lines=5, functions=2, classes=1),
            _record("/r/c.py", ext="py", lines=7, comment_lines=7),
        )
        metrics = builder.build(walk)

        assert metrics.total_files == sum(metrics.file_types.values()) == 3
        assert metrics.total_lines == sum(metrics.lines_per_type.values()) == 47
        assert metrics.file_types == {"java": 2, "py": 1}
        assert metrics.comment_lines_per_type == {"java": 8, "py": 7}
        assert metrics.avg_lines_per_type == {"java": 20.0, "py": 7.0}
        assert metrics.functions_per_type == {"java": 6, "py": 0}
        assert metrics.classes_per_type == {"java": 2, "py": 0}
        assert metrics.cyclomatic_complexity == 3
        assert metrics.overall_comment_density == pytest.approx(15 / 47)

    def test_per_file_maps(self, builder):
        walk = _walk(
            _record(
                "/r/A.java",
                lines=4,
                comment_lines=1,
                todo_count=2,
                max_nesting=3,
                cognitive_complexity=5,
                imports=6,
                halstead_volume=12.5,
            )
        )
        metrics = builder.build(walk)
        assert metrics.nesting_depth_per_file == {"/r/A.java": 3}
        assert metrics.halstead_volume_per_file == {"/r/A.java": 12.5}
        assert metrics.comment_density_per_file == {"/r/A.java": 0.25}
        assert metrics.todo_count_per_file == {"/r/A.java": 2}
        assert metrics.cognitive_complexity_per_file == {"/r/A.java": 5}
        assert metrics.import_count_per_file == {"/r/A.java": 6}
        assert metrics.avg_halstead_volume == 12.5

    def test_empty_walk(self, builder):
        metrics = builder.build(WalkResult())
        assert metrics.ok
        assert metrics.total_files == 0
        assert metrics.file_types == {}
        assert metrics.largest_files == ()
        assert metrics.maintainability_index == 100.0
        assert metrics.overall_comment_density == 0.0


class TestLargestFiles:
    def test_top_five_descending(self, builder):
        records = [_record(f"/r/{i}.java", lines=i * 10) for i in range(1, 8)]
        metrics = builder.build(_walk(*records))
        assert [f.lines for f in metrics.largest_files] == [70, 60, 50, 40, 30]

    def test_ties_keep_traversal_order(self, builder):
        metrics = builder.build(_walk(_record("/r/b", lines=5), _record("/r/a", lines=5)))
        assert [f.path for f in metrics.largest_files] == ["/r/b", "/r/a"]

    def test_threshold_flag(self, builder):
        metrics = builder.build(
            _walk(_record("/r/Big.java", lines=501), _record("/r/Edge.java", lines=500))
        )
        assert metrics.optimization_flags == ("File /r/Big.java exceeds 500 lines",)

    def test_custom_threshold(self):
        builder = AggregateBuilder(ScanConfig(large_file_threshold=50))
        metrics = builder.build(_walk(_record("/r/A.java", lines=51)))
        assert metrics.optimization_flags == ("File /r/A.java exceeds 50 lines",)

    def test_str(self):
        assert str(LargeFile("/r/A.java", 812)) == "/r/A.java (812 lines)"


class TestHotspots:
    def test_coupling_limited_to_ten(self, builder):
        records = [_record(f"/r/{i:02d}.py", ext="py", imports=i) for i in range(12)]
        metrics = builder.build(_walk(*records))
        assert len(metrics.top_coupled_files) == 10
        assert metrics.top_coupled_files[0] == CoupledFile("/r/11.py", 11)

    def test_duplicates_across_records(self, builder):
        walk = _walk(
            _record("/r/a", window_hashes=("h1", "h2")),
            _record("/r/b", window_hashes=("h2",)),
        )
        metrics = builder.build(walk)
        assert metrics.duplicate_blocks == (DuplicateBlock("h2", ("/r/a", "/r/b")),)

    def test_secrets_collected(self, builder):
        match = SecretMatch("/r/a", 3, "secret=abc")
        metrics = builder.build(_walk(_record("/r/a", secrets=(match,))))
        assert metrics.secrets == (match,)


class TestReportFields:
    def test_churn_and_thresholds(self, builder):
        metrics = builder.build(_walk(_record("/r/a")), churn={"a": 3})
        assert metrics.churn == {"a": 3}
        assert metrics.thresholds["large.file.threshold"] == 500

    def test_to_dict_keys(self, builder):
        data = builder.build(_walk(_record("/r/a", lines=3))).to_dict()
        assert data["totalFiles"] == 1
        assert data["top5LargestFiles"] == [{"path": "/r/a", "lines": 3}]
        assert data["gitChurnPerFile"] == {}
        assert "error" not in data

    def test_error_result_carries_nothing_else(self):
        assert RepoMetrics.failed("boom").to_dict() == {"error": "boom"}
        assert not RepoMetrics.failed("boom").ok
