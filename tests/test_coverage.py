"""Tests for attribute read coverage and definition-site tracking."""

import threading

import pytest

from reservoir import Model, attribute, identity
from reservoir.core.attributes import CoverageTracker
from reservoir.core.registries import RegistryManager

COVERAGE = RegistryManager()


class CoverageSpec(Model, registry=COVERAGE):
    id = identity()

    used = attribute(type="string")
    unused = attribute(type="string")


@pytest.fixture
def obj():
    instance = CoverageSpec(used="foo", unused="bar")
    COVERAGE.coverage.reset(CoverageSpec.coverage_key)
    assert instance.used == "foo"  # once
    assert instance.used == "foo"  # twice
    return instance


def _source_line(line: int) -> str:
    with open(__file__, "r", encoding="utf-8") as f:
        return f.read().splitlines()[line - 1]


class TestDefinitionSite:
    def test_stores_file_path(self, obj):
        described = CoverageSpec.describe()
        assert described["used"].coverage_file == __file__
        assert described["unused"].coverage_file == __file__

    def test_stores_line_number(self, obj):
        described = CoverageSpec.describe()
        assert "used = attribute(" in _source_line(described["used"].coverage_line)
        assert "unused = attribute(" in _source_line(described["unused"].coverage_line)

    def test_explicit_registration_records_caller_line(self, registry):
        class Widget(Model, registry=registry):
            pass

        Widget.define_attribute("label")  # registration line
        line = Widget.describe()["label"].coverage_line
        assert "# registration line" in _source_line(line)


class TestHits:
    def test_counts_reader_calls(self, obj):
        assert COVERAGE.coverage.hits(CoverageSpec.coverage_key, "used") == 2
        assert COVERAGE.coverage.hits(CoverageSpec.coverage_key, "unused") == 0
        assert CoverageSpec.describe()["used"].coverage_hits == 2

    def test_hits_are_shared_across_instances(self, obj):
        other = CoverageSpec(used="baz")
        assert other.used == "baz"
        assert COVERAGE.coverage.hits(CoverageSpec.coverage_key, "used") == 3

    def test_name_based_reads_count(self, obj):
        obj.read_attribute("unused")
        assert COVERAGE.coverage.hits(CoverageSpec.coverage_key, "unused") == 1

    def test_internal_access_does_not_count(self, obj):
        obj.requires("used", "unused")
        obj.attributes
        obj.dump()
        repr(obj)
        assert obj == obj.duplicate()
        assert COVERAGE.coverage.hits(CoverageSpec.coverage_key, "used") == 2
        assert COVERAGE.coverage.hits(CoverageSpec.coverage_key, "unused") == 0

    def test_unused_lists_unread_attributes(self, obj):
        assert COVERAGE.coverage.unused(CoverageSpec.coverage_key) == ["id", "unused"]

    def test_reset_single_attribute(self, obj):
        obj.read_attribute("unused")
        COVERAGE.coverage.reset(CoverageSpec.coverage_key, "used")
        assert COVERAGE.coverage.hits(CoverageSpec.coverage_key, "used") == 0
        assert COVERAGE.coverage.hits(CoverageSpec.coverage_key, "unused") == 1

    def test_concurrent_reads_are_all_counted(self, obj):
        COVERAGE.coverage.reset(CoverageSpec.coverage_key)
        instances = [CoverageSpec(used=str(i)) for i in range(8)]

        def _read(instance):
            for _ in range(500):
                instance.used

        threads = [threading.Thread(target=_read, args=(inst,)) for inst in instances]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert COVERAGE.coverage.hits(CoverageSpec.coverage_key, "used") == 8 * 500


class TestTracker:
    def test_unknown_record_raises(self):
        tracker = CoverageTracker()
        tracker.register("Model", "known", "file.py", 3)
        with pytest.raises(KeyError) as exc_info:
            tracker.hits("Model", "unknown")
        assert "known" in str(exc_info.value)

    def test_hit_on_unregistered_attribute_is_ignored(self):
        tracker = CoverageTracker()
        tracker.hit("Model", "nothing")
        assert tracker.records == {}

    def test_report_returns_snapshots(self):
        tracker = CoverageTracker()
        tracker.register("Model", "a", None, None)
        tracker.hit("Model", "a")
        report = tracker.report("Model")
        tracker.hit("Model", "a")
        assert [r.to_dict() for r in report] == [
            {"model": "Model", "attribute": "a", "file": None, "line": None, "hits": 1}
        ]

    def test_forget_drops_model_records(self):
        tracker = CoverageTracker()
        tracker.register("A", "x", None, None)
        tracker.register("B", "x", None, None)
        tracker.forget("A")
        assert list(tracker.records) == [("B", "x")]
