"""
Tests for Symbol Pools
======================
Tests for weighted symbol pools and the randomness source in
namekit/generators/.
"""

import pytest
import sys
from collections import Counter
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namekit.errors import EmptyPoolError
from namekit.generators.entropy import RandomSource
from namekit.generators.symbols import Symbol, SymbolHandle, SymbolPool, atomize


class TestRandomSource:
    """Tests for RandomSource."""

    def test_same_seed_same_stream(self):
        """Two sources with one seed produce identical draws."""
        a = RandomSource(7)
        b = RandomSource(7)
        assert [a.randrange(100) for _ in range(20)] == [b.randrange(100) for _ in range(20)]

    def test_unseeded_sources_differ(self):
        """Sources created without a seed get distinct seeds."""
        assert RandomSource().seed != RandomSource().seed

    def test_weighted_index_skips_nothing(self):
        """Every index with positive weight can be chosen."""
        rng = RandomSource(1)
        seen = {rng.weighted_index([1, 1, 1]) for _ in range(300)}
        assert seen == {0, 1, 2}

    def test_weighted_index_single_weight(self):
        rng = RandomSource(1)
        assert all(rng.weighted_index([5]) == 0 for _ in range(20))

    @pytest.mark.parametrize("weights", [[], [0], [0, 0]])
    def test_weighted_index_rejects_empty(self, weights):
        with pytest.raises(IndexError):
            RandomSource(1).weighted_index(weights)

    def test_choice_empty_raises(self):
        with pytest.raises(IndexError):
            RandomSource(1).choice([])

    def test_fork_is_deterministic(self):
        """Forks of equally seeded sources match each other."""
        a = RandomSource(3).fork()
        b = RandomSource(3).fork()
        assert a.seed == b.seed
        assert a.random() == b.random()


class TestSymbol:
    """Tests for Symbol validation."""

    def test_default_weight(self):
        assert Symbol("a").weight == 1

    @pytest.mark.parametrize("weight", [0, -1])
    def test_non_positive_weight(self, weight):
        with pytest.raises(ValueError):
            Symbol("a", weight)

    @pytest.mark.parametrize("weight", [1.5, "2", True])
    def test_non_integer_weight(self, weight):
        with pytest.raises(TypeError):
            Symbol("a", weight)


class TestAtomize:
    """Tests for splitting text into symbols."""

    def test_plain_ascii(self):
        assert atomize("abc") == ["a", "b", "c"]

    def test_precomposed_accent(self):
        assert atomize("\u00e9a") == ["\u00e9", "a"]

    def test_combining_mark_stays_attached(self):
        """e + combining acute is one symbol."""
        assert atomize("e\u0301a") == ["e\u0301", "a"]

    def test_zero_width_joiner_sequence(self):
        text = "\U0001F469\u200d\U0001F52C"
        assert atomize(text + "x") == [text, "x"]

    def test_empty(self):
        assert atomize("") == []


class TestSymbolPool:
    """Tests for SymbolPool."""

    def test_add_splits_characters(self):
        pool = SymbolPool()
        pool.add("aei")
        assert pool.values == ["a", "e", "i"]

    def test_constructor_symbols(self):
        assert SymbolPool("xy").values == ["x", "y"]

    def test_cluster_keeps_groups(self):
        pool = SymbolPool()
        pool.cluster("th", "sh", weight=2)
        assert pool.values == ["th", "sh"]
        assert [s.weight for s in pool] == [2, 2]

    def test_add_returns_handle(self):
        pool = SymbolPool("ab")
        handle = pool.cluster("ch", "ph")
        assert handle == SymbolHandle(2, 4)
        assert len(handle) == 2

    def test_set_weight_targets_handle_only(self):
        pool = SymbolPool("ab")
        handle = pool.cluster("ch", "ph")
        pool.set_weight(handle, 5)
        assert [s.weight for s in pool] == [1, 1, 5, 5]
        assert pool.total_weight == 12

    def test_set_weight_foreign_handle(self):
        pool = SymbolPool("ab")
        with pytest.raises(IndexError):
            pool.set_weight(SymbolHandle(1, 9), 2)

    def test_set_weight_rejects_zero(self):
        pool = SymbolPool()
        handle = pool.add("a")
        with pytest.raises(ValueError):
            pool.set_weight(handle, 0)

    def test_empty_pool_raises(self):
        with pytest.raises(EmptyPoolError, match="pool is empty"):
            SymbolPool().next()

    def test_empty_pool_error_is_value_error(self):
        with pytest.raises(ValueError):
            SymbolPool().draw()

    def test_single_symbol(self):
        pool = SymbolPool("z")
        assert {pool.next() for _ in range(50)} == {"z"}

    def test_heavier_symbols_drawn_more(self):
        """Draw frequency follows weight order over many draws."""
        pool = SymbolPool(rng=RandomSource(12345))
        pool.cluster("a", weight=1)
        pool.cluster("b", weight=3)
        pool.cluster("c", weight=9)
        counts = Counter(pool.next() for _ in range(10000))
        assert counts["a"] < counts["b"] < counts["c"]
        assert 0.6 < counts["c"] / 10000 < 0.78

    def test_copy_is_independent(self):
        pool = SymbolPool("ab")
        clone = pool.copy()
        clone.add("c")
        clone.set_weight(SymbolHandle(0, 1), 4)
        assert pool.values == ["a", "b"]
        assert pool.symbols[0].weight == 1
        assert clone.rng is not pool.rng
