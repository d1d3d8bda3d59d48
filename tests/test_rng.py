"""Tests for the seeded random stream and seed handling."""

import pytest

from seedworld.rng import (
    DEFAULT_SEED,
    LCG_MODULUS,
    SEED_RANGE,
    RandomStream,
    derive_seed,
    normalize_seed,
    resolve_seed,
)


class TestRandomStream:
    """Tests for RandomStream draws."""

    def test_first_value_follows_recurrence(self) -> None:
        """Seed 1 advances to (9301 + 49297) mod 233280."""
        rng = RandomStream(1)
        assert rng.next() == 58598 / LCG_MODULUS

    def test_same_seed_same_sequence(self) -> None:
        """Two streams with one seed produce identical values."""
        a = RandomStream(42)
        b = RandomStream(42)
        assert [a.next() for _ in range(100)] == [b.next() for _ in range(100)]

    def test_different_seeds_differ(self) -> None:
        a = RandomStream(1)
        b = RandomStream(2)
        assert [a.next() for _ in range(10)] != [b.next() for _ in range(10)]

    def test_values_in_unit_interval(self) -> None:
        rng = RandomStream(7)
        for _ in range(1000):
            value = rng.next()
            assert 0.0 <= value < 1.0

    def test_below_range(self) -> None:
        """below(n) stays in [0, n)."""
        rng = RandomStream(3)
        values = {rng.below(5) for _ in range(500)}
        assert values <= set(range(5))
        assert len(values) == 5

    def test_between_inclusive(self) -> None:
        """between(lo, hi) reaches both ends."""
        rng = RandomStream(9)
        values = {rng.between(3, 6) for _ in range(500)}
        assert values == {3, 4, 5, 6}

    def test_chance_extremes(self) -> None:
        rng = RandomStream(11)
        assert not any(rng.chance(0.0) for _ in range(100))
        assert all(rng.chance(1.0) for _ in range(100))

    def test_choice_picks_member(self) -> None:
        rng = RandomStream(13)
        options = ["a", "b", "c"]
        for _ in range(50):
            assert rng.choice(options) in options

    def test_weighted_skips_zero_weight(self) -> None:
        """Options with zero weight are never drawn."""
        rng = RandomStream(17)
        picks = {rng.weighted([("never", 0.0), ("always", 1.0)]) for _ in range(200)}
        assert picks == {"always"}

    def test_each_helper_consumes_one_draw(self) -> None:
        """Helpers advance the stream exactly once."""
        a = RandomStream(5)
        b = RandomStream(5)
        a.below(10)
        a.chance(0.5)
        a.weighted([(1, 1.0), (2, 1.0)])
        for _ in range(3):
            b.next()
        assert a.next() == b.next()


class TestSeeds:
    """Tests for seed normalization and derivation."""

    @pytest.mark.parametrize(
        "value",
        [None, "abc", float("nan"), float("inf"), -float("inf"), 0, SEED_RANGE],
    )
    def test_degenerate_seeds_use_default(self, value) -> None:
        """Non-numeric, non-finite and zero seeds fall back to the default."""
        assert normalize_seed(value) == DEFAULT_SEED

    def test_negative_seed_wraps(self) -> None:
        assert normalize_seed(-1) == SEED_RANGE - 1

    def test_plain_seed_unchanged(self) -> None:
        assert normalize_seed(42) == 42

    def test_float_seed_truncated(self) -> None:
        assert normalize_seed(3.7) == 3

    def test_numeric_string_accepted(self) -> None:
        assert normalize_seed("12") == 12

    def test_resolve_none_uses_clock(self) -> None:
        """Omitted seeds resolve to a valid nonzero seed."""
        seed = resolve_seed(None)
        assert 0 < seed < SEED_RANGE

    def test_resolve_passes_through(self) -> None:
        assert resolve_seed(5) == 5

    def test_derive_seed_stable(self) -> None:
        """Derived seeds depend only on their inputs."""
        assert derive_seed(1, "dungeon", 10, 20) == derive_seed(1, "dungeon", 10, 20)

    def test_derive_seed_varies_with_parts(self) -> None:
        seeds = {derive_seed(1, "dungeon", x, 20) for x in range(20)}
        assert len(seeds) == 20

    def test_derived_seed_in_range(self) -> None:
        for part in ("elevation", "forest", "detail"):
            seed = derive_seed(99, part)
            assert 0 < seed < SEED_RANGE
