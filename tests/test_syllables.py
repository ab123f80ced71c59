"""
Tests for Syllable Composers
============================
Tests for positional syllable generation in namekit/generators/syllables.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namekit.errors import EmptySyllableError, SyllableSetError
from namekit.generators.entropy import RandomSource
from namekit.generators.symbols import SymbolPool
from namekit.generators.syllables import SymbolPosition, SyllableComposer, SyllableSet

LEAD = SymbolPosition.LEAD
MIDDLE = SymbolPosition.MIDDLE
TRAIL = SymbolPosition.TRAIL


class TestComposerConfiguration:
    """Tests for adding pools and chances."""

    def test_first_pool_sets_full_chance(self):
        composer = SyllableComposer().add(LEAD, "st")
        assert composer.effective_chance(LEAD) == 1.0

    def test_explicit_chance_survives_add(self):
        composer = SyllableComposer().set_chance(TRAIL, 0.3).add(TRAIL, "n")
        assert composer.effective_chance(TRAIL) == 0.3

    def test_position_without_pools_has_zero_chance(self):
        composer = SyllableComposer().set_chance(TRAIL, 0.9)
        assert composer.effective_chance(TRAIL) == 0.0

    @pytest.mark.parametrize("chance", [-0.1, 1.5])
    def test_chance_out_of_range(self, chance):
        with pytest.raises(ValueError):
            SyllableComposer().set_chance(LEAD, chance)

    def test_add_rejects_other_types(self):
        with pytest.raises(TypeError):
            SyllableComposer().add(LEAD, 42)

    def test_add_accepts_pool(self):
        pool = SymbolPool()
        pool.cluster("th")
        composer = SyllableComposer().add(LEAD, pool)
        assert composer.pools[LEAD] == [pool]


class TestComposerGeneration:
    """Tests for SyllableComposer.next()."""

    def test_positions_in_order(self):
        composer = SyllableComposer().add(LEAD, "s").add(MIDDLE, "a").add(TRAIL, "n")
        assert composer.next() == "san"

    def test_zero_chance_position_never_used(self):
        composer = (SyllableComposer(rng=RandomSource(5))
            .add(LEAD, "k")
            .add(MIDDLE, "o")
            .add(TRAIL, "x")
            .set_chance(TRAIL, 0.0))
        assert all(composer.next() == "ko" for _ in range(200))

    def test_partial_chance_sometimes_used(self):
        composer = (SyllableComposer(rng=RandomSource(9))
            .add(MIDDLE, "a")
            .add(TRAIL, "n")
            .set_chance(TRAIL, 0.5))
        results = {composer.next() for _ in range(200)}
        assert results == {"a", "an"}

    def test_pools_chosen_uniformly(self):
        """With two pools on one position, each pool is used."""
        composer = (SyllableComposer(rng=RandomSource(2))
            .add(MIDDLE, "a")
            .add(MIDDLE, "o"))
        assert {composer.next() for _ in range(200)} == {"a", "o"}

    def test_empty_composer_raises(self):
        with pytest.raises(EmptySyllableError, match="No symbols available"):
            SyllableComposer().next()

    def test_all_chances_zero_raises(self):
        composer = SyllableComposer().add(LEAD, "a").set_chance(LEAD, 0.0)
        with pytest.raises(EmptySyllableError):
            composer.next()

    def test_allow_empty(self):
        composer = SyllableComposer().allow_empty()
        assert composer.next() == ""

    def test_seeded_composers_match(self):
        def build(seed):
            composer = SyllableComposer(rng=RandomSource(seed))
            composer.add(LEAD, SymbolPool("bcdfg", rng=RandomSource(seed + 1)))
            composer.add(MIDDLE, SymbolPool("aeiou", rng=RandomSource(seed + 2)))
            composer.set_chance(LEAD, 0.6)
            return composer

        a, b = build(10), build(10)
        assert [a.next() for _ in range(50)] == [b.next() for _ in range(50)]


class TestComposerCopy:
    """Tests for SyllableComposer.copy()."""

    def test_copy_preserves_configuration(self):
        composer = (SyllableComposer()
            .add(LEAD, "st")
            .add(MIDDLE, "ae")
            .set_chance(LEAD, 0.4)
            .allow_empty())
        clone = composer.copy()
        assert clone.effective_chance(LEAD) == 0.4
        assert clone.allows_empty
        assert [p.values for p in clone.iter_pools()] == [["s", "t"], ["a", "e"]]

    def test_copy_is_independent(self):
        composer = SyllableComposer().add(MIDDLE, "a")
        clone = composer.copy()
        clone.add(MIDDLE, "o")
        clone.pools[MIDDLE][0].add("e")
        assert len(composer.pools[MIDDLE]) == 1
        assert composer.pools[MIDDLE][0].values == ["a"]


def wide_composer(seed=4):
    """Composer with 605 possible syllables."""
    return (SyllableComposer(rng=RandomSource(seed))
        .add(LEAD, SymbolPool("bcdfghjklmn", rng=RandomSource(seed + 1)))
        .add(MIDDLE, SymbolPool("aeiou", rng=RandomSource(seed + 2)))
        .add(TRAIL, SymbolPool("bcdfghjklmn", rng=RandomSource(seed + 3))))


class TestSyllableSet:
    """Tests for SyllableSet."""

    def test_empty_set_raises(self):
        with pytest.raises(EmptySyllableError):
            SyllableSet().next()

    def test_add_then_generate(self):
        syllables = SyllableSet().add("a", "b", "c")
        assert syllables.next() in {"a", "b", "c"}

    @pytest.mark.parametrize("listed", [
        ("a",),
        ("a", "b", "\u00e7"),
        ("\U0001f0c5", "\U0001f642", "\u30c5"),
    ])
    def test_generates_every_listed_syllable(self, listed):
        syllables = SyllableSet(*listed, rng=RandomSource(6))
        assert {syllables.next() for _ in range(100)} == set(listed)

    @pytest.mark.parametrize("limit", [1, 8, 32])
    def test_unique_fill_from_composer(self, limit):
        syllables = SyllableSet.from_composer(wide_composer(), limit, force_unique=True)
        seen = {syllables.next() for _ in range(1000)}
        assert len(seen) == limit
        assert len(syllables) == limit

    @pytest.mark.parametrize("limit", [1, 8, 32])
    def test_duplicates_kept_without_force_unique(self, limit):
        composer = SyllableComposer().add(LEAD, "a").add(MIDDLE, "b").add(TRAIL, "c")
        syllables = SyllableSet.from_composer(composer, limit)
        assert {syllables.next() for _ in range(1000)} == {"abc"}
        assert len(syllables) == limit

    @pytest.mark.parametrize("limit", [8, 32])
    def test_not_enough_unique_syllables(self, limit):
        """A single possible syllable cannot fill a unique set larger than one."""
        composer = SyllableComposer().add(LEAD, "a").add(MIDDLE, "b").add(TRAIL, "c")
        syllables = SyllableSet.from_composer(composer, limit, force_unique=True)
        with pytest.raises(SyllableSetError):
            syllables.next()

    def test_fill_is_lazy(self):
        syllables = SyllableSet.from_composer(wide_composer(), 5)
        assert len(syllables) == 0
        syllables.next()
        assert len(syllables) == 5

    def test_invalid_max_count(self):
        with pytest.raises(ValueError):
            SyllableSet.from_composer(SyllableComposer().add(MIDDLE, "a"), 0)

    def test_from_composer_rejects_other_types(self):
        with pytest.raises(TypeError):
            SyllableSet.from_composer(SyllableSet("a"), 3)

    def test_seeded_sets_match(self):
        a = SyllableSet.from_composer(wide_composer(1), 6, rng=RandomSource(2))
        b = SyllableSet.from_composer(wide_composer(1), 6, rng=RandomSource(2))
        assert [a.next() for _ in range(50)] == [b.next() for _ in range(50)]

    def test_copy_is_independent(self):
        syllables = SyllableSet.from_composer(wide_composer(), 3, force_unique=True)
        syllables.add("zo")
        clone = syllables.copy()
        clone.add("xi")
        assert clone.syllables == ["zo", "xi"]
        assert syllables.syllables == ["zo"]
        assert clone.source is not syllables.source
        assert clone.max_syllable_count == 3
        assert clone.force_unique
