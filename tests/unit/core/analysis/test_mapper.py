from __future__ import annotations

"""
Unit tests for the Proportional Mapper.

Verifies coverage of the forward mapping, the forward/inverse round trip,
the right-edge policy and every degenerate input (empty sequence, zero
total, zero extent, out-of-range positions).
"""

import random

import pytest

from dirstat.core.analysis.mapper import ProportionalMap, paint_segments, resolve
from dirstat.core.analysis.sequencer import measure
from dirstat.domain.tree_models import FileNode


@pytest.fixture
def scenario(sample_tree):
    m = measure(sample_tree)
    return m.files, m.total


# -----------------------------------------------------------------------------
# Reference scenario
# -----------------------------------------------------------------------------

def test_scenario_segments(scenario):
    files, total = scenario
    segs = paint_segments(files, total, 100)
    assert [(s.file.path, s.start, s.end) for s in segs] == [
        ("/a", 0.0, 25.0),
        ("/b/c", 25.0, 100.0),
    ]
    assert segs[1].fraction == 0.25
    assert segs[1].width == 75.0


def test_scenario_resolve(scenario):
    files, total = scenario
    assert resolve(files, total, 100, 10) == FileNode("/a", 1)
    assert resolve(files, total, 100, 50) == FileNode("/b/c", 3)


def test_right_edge_resolves_to_last_segment(scenario):
    files, total = scenario
    assert resolve(files, total, 100, 100) == FileNode("/b/c", 3)


def test_interior_boundary_belongs_to_next_segment(scenario):
    files, total = scenario
    assert resolve(files, total, 100, 0) == FileNode("/a", 1)
    assert resolve(files, total, 100, 25) == FileNode("/b/c", 3)


def test_leading_empty_file_yields_origin_to_next_file():
    files = [FileNode("/z", 0), FileNode("/a", 1), FileNode("/b", 3)]
    assert resolve(files, 4, 100, 0) == FileNode("/a", 1)
    assert ProportionalMap(files).resolve(100, 0) == FileNode("/a", 1)


def test_positions_outside_extent_resolve_to_nothing(scenario):
    files, total = scenario
    assert resolve(files, total, 100, -0.5) is None
    assert resolve(files, total, 100, 100.5) is None

# -----------------------------------------------------------------------------
# Degenerate inputs
# -----------------------------------------------------------------------------

def test_empty_sequence():
    assert paint_segments([], 0, 100) == []
    for x in (0, 50, 100):
        assert resolve([], 0, 100, x) is None


def test_zero_total():
    files = [FileNode("/a", 0), FileNode("/b", 0)]
    assert paint_segments(files, 0, 100) == []
    assert resolve(files, 0, 100, 50) is None


def test_zero_extent(scenario):
    files, total = scenario
    assert paint_segments(files, total, 0) == []
    assert resolve(files, total, 0, 0) is None


def test_total_larger_than_content_leaves_tail_unresolved():
    files = [FileNode("/a", 1)]
    assert resolve(files, 4, 100, 80) is None


def test_zero_size_files_never_resolve(nested_tree):
    m = measure(nested_tree)
    for x in range(0, 101):
        hit = resolve(m.files, m.total, 100, x)
        assert hit is not None and hit.size > 0

# -----------------------------------------------------------------------------
# Properties
# -----------------------------------------------------------------------------

def _random_files(seed: int, n: int):
    rng = random.Random(seed)
    return [FileNode(f"/f{i}", rng.choice([0, 1, 7, 512, 4096, 10 ** 6])) for i in range(n)]


@pytest.mark.parametrize("seed", [1, 2, 3])
@pytest.mark.parametrize("extent", [1.0, 100.0, 1337.5])
def test_coverage_is_contiguous_and_complete(seed, extent):
    files = _random_files(seed, 200)
    total = sum(f.size for f in files)
    segs = paint_segments(files, total, extent)

    assert len(segs) == len(files)
    assert segs[0].start == 0.0
    assert segs[-1].end == extent
    for prev, cur in zip(segs, segs[1:]):
        assert cur.start == prev.end
    assert sum(s.width for s in segs) == pytest.approx(extent)


@pytest.mark.parametrize("seed", [4, 5, 6])
@pytest.mark.parametrize("extent", [640.0, 1920.0])
def test_midpoint_round_trip(seed, extent):
    files = _random_files(seed, 300)
    total = sum(f.size for f in files)
    for seg in paint_segments(files, total, extent):
        if seg.file.size == 0:
            continue
        assert resolve(files, total, extent, seg.midpoint) is seg.file


def test_map_matches_linear_resolve(nested_tree):
    m = measure(nested_tree)
    pmap = ProportionalMap(m.files)
    assert pmap.total == m.total
    for i in range(0, 401):
        x = i / 4
        assert pmap.resolve(100, x) == resolve(m.files, m.total, 100, x)
    assert pmap.resolve(100, 101) is None


def test_map_right_edge_skips_trailing_zero_files():
    files = [FileNode("/a", 1), FileNode("/b", 3), FileNode("/z", 0)]
    pmap = ProportionalMap(files)
    assert pmap.resolve(100, 100) == FileNode("/b", 3)
    assert resolve(files, 4, 100, 100) == FileNode("/b", 3)


def test_map_on_empty_sequence():
    pmap = ProportionalMap([])
    assert pmap.segments(100) == []
    assert pmap.resolve(100, 0) is None
