"""Tests for BoundedMemory and the memory ceiling."""

from __future__ import annotations

import pytest

from robo.config.settings import PredictorSettings
from robo.engine.memory import (
    MEMORY_CEILING_BYTES,
    PAIR_ENTRY_BYTES,
    SINGLE_ENTRY_BYTES,
    STATE_HEADER_BYTES,
    TRIPLE_ENTRY_BYTES,
    BoundedMemory,
    MemoryCeilingError,
    MemoryFootprint,
    check_ceiling,
)
from robo.engine.predictor import RoboPredictor
from robo.models.planet import PairKey, SingleStats


class TestLayoutSizes:
    def test_packed_entry_sizes(self) -> None:
        assert SINGLE_ENTRY_BYTES == 16
        assert PAIR_ENTRY_BYTES == 17
        assert TRIPLE_ENTRY_BYTES == 25
        assert STATE_HEADER_BYTES == 22

    def test_empty_predictor_within_ceiling(self) -> None:
        footprint = RoboPredictor().footprint()
        assert footprint.static_bytes == STATE_HEADER_BYTES
        assert footprint.static_bytes <= MEMORY_CEILING_BYTES
        assert footprint.within_ceiling

    def test_declared_capacities_count_toward_static_bytes(self) -> None:
        settings = PredictorSettings(single_capacity=100, pair_capacity=200, triple_capacity=300)
        footprint = RoboPredictor(settings).footprint()
        expected = STATE_HEADER_BYTES + 100 * 16 + 200 * 17 + 300 * 25
        assert footprint.static_bytes == expected


class TestCeiling:
    def test_check_ceiling_at_limit(self) -> None:
        check_ceiling(MEMORY_CEILING_BYTES)

    def test_check_ceiling_over_limit(self) -> None:
        with pytest.raises(MemoryCeilingError, match="65536-byte ceiling"):
            check_ceiling(MEMORY_CEILING_BYTES + 1)

    def test_oversized_layout_cannot_be_constructed(self) -> None:
        with pytest.raises(MemoryCeilingError):
            RoboPredictor(PredictorSettings(triple_capacity=3000))

    def test_combined_capacities_over_ceiling(self) -> None:
        with pytest.raises(MemoryCeilingError):
            RoboPredictor(
                PredictorSettings(single_capacity=1500, pair_capacity=1500, triple_capacity=1000)
            )

    def test_largest_fitting_triple_capacity(self) -> None:
        capacity = (MEMORY_CEILING_BYTES - STATE_HEADER_BYTES) // TRIPLE_ENTRY_BYTES
        predictor = RoboPredictor(PredictorSettings(triple_capacity=capacity))
        assert predictor.footprint().static_bytes <= MEMORY_CEILING_BYTES
        with pytest.raises(MemoryCeilingError):
            RoboPredictor(PredictorSettings(triple_capacity=capacity + 1))

    def test_footprint_headroom(self) -> None:
        footprint = MemoryFootprint(static_bytes=1000, used_bytes=4000)
        assert footprint.headroom_bytes == MEMORY_CEILING_BYTES - 4000


class TestBoundedMemory:
    def test_unbounded_never_evicts(self) -> None:
        memory: BoundedMemory[int, bool] = BoundedMemory("test", entry_bytes=9)
        for i in range(1000):
            memory.upsert(i, True)
        assert len(memory) == 1000
        assert memory.evictions == 0
        assert memory.declared_bytes == 0
        assert memory.used_bytes == 9000

    def test_evicts_least_recently_written(self) -> None:
        memory: BoundedMemory[int, bool] = BoundedMemory("test", entry_bytes=9, capacity=2)
        memory.upsert(1, True)
        memory.upsert(2, False)
        memory.upsert(1, False)  # refreshes key 1
        memory.upsert(3, True)
        assert 2 not in memory
        assert memory.get(1) is False
        assert memory.get(3) is True
        assert memory.evictions == 1

    def test_get_does_not_refresh(self) -> None:
        memory: BoundedMemory[int, bool] = BoundedMemory("test", entry_bytes=9, capacity=2)
        memory.upsert(1, True)
        memory.upsert(2, True)
        assert memory.get(1) is True
        memory.upsert(3, True)
        assert 1 not in memory
        assert list(memory) == [2, 3]

    def test_upsert_with_creates_once(self) -> None:
        memory: BoundedMemory[int, SingleStats] = BoundedMemory("singles", entry_bytes=16)
        memory.upsert_with(7, SingleStats).record(True)
        memory.upsert_with(7, SingleStats).record(False)
        stats = memory.get(7)
        assert stats is not None
        assert (stats.day_count, stats.night_count) == (1, 1)
        assert len(memory) == 1

    def test_overwrite_at_capacity_does_not_evict(self) -> None:
        memory: BoundedMemory[PairKey, bool] = BoundedMemory("pairs", entry_bytes=17, capacity=1)
        memory.upsert(PairKey(1, 2), True)
        memory.upsert(PairKey(1, 2), False)
        assert memory.evictions == 0
        assert memory.get(PairKey(1, 2)) is False

    def test_negative_capacity_rejected(self) -> None:
        with pytest.raises(ValueError, match="capacity must be >= 0"):
            BoundedMemory("bad", entry_bytes=1, capacity=-1)


class TestPredictorCapacity:
    def test_pair_memory_stays_bounded(self) -> None:
        predictor = RoboPredictor(PredictorSettings(pair_capacity=4))
        for planet in range(20):
            predictor.observe(planet, planet % 2 == 0)
        assert predictor.sizes()["pairs"] == 4
        assert predictor.pair_outcome(0, 1) is None
        assert predictor.pair_outcome(18, 19) is False
        assert predictor.evictions == 15

    def test_evicted_single_restarts_from_zero(self) -> None:
        predictor = RoboPredictor(PredictorSettings(single_capacity=2))
        predictor.observe(1, True)
        predictor.observe(2, False)
        predictor.observe(3, False)
        assert predictor.single_stats(1) is None
        predictor.observe(1, False)
        stats = predictor.single_stats(1)
        assert (stats.day_count, stats.night_count) == (0, 1)

    def test_used_bytes_tracks_entries(self) -> None:
        predictor = RoboPredictor()
        for planet in (1, 2, 3):
            predictor.observe(planet, False)
        footprint = predictor.footprint()
        assert footprint.used_bytes == STATE_HEADER_BYTES + 3 * 16 + 2 * 17 + 1 * 25
