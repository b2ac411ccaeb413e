"""Tests for GameRNG -- determinism, state save/restore and ranges."""

import pytest

from blacktimes.sim.core.rng import GameRNG


class TestDeterminism:
    def test_same_seed_same_sequence(self):
        a = GameRNG(42)
        b = GameRNG(42)
        assert [a.random_float() for _ in range(100)] == [b.random_float() for _ in range(100)]

    def test_different_seeds_differ(self):
        a = GameRNG(1)
        b = GameRNG(2)
        assert [a.random_float() for _ in range(10)] != [b.random_float() for _ in range(10)]

    def test_seed_uses_low_32_bits(self):
        a = GameRNG(5)
        b = GameRNG(5 + 2**32)
        assert a.random_float() == b.random_float()

    def test_seed_property(self):
        assert GameRNG(1234).seed == 1234


class TestState:
    def test_initial_state_is_seed(self):
        assert GameRNG(99).get_state() == 99

    def test_state_roundtrip_resumes_sequence(self):
        rng = GameRNG(42)
        for _ in range(17):
            rng.random_float()
        saved = rng.get_state()
        expected = [rng.random_float() for _ in range(20)]

        other = GameRNG(0)
        other.set_state(saved)
        assert [other.random_float() for _ in range(20)] == expected

    def test_state_stays_32_bit(self):
        rng = GameRNG(0xFFFFFFFF)
        for _ in range(1000):
            rng.random_float()
            assert 0 <= rng.get_state() <= 0xFFFFFFFF


class TestRanges:
    def test_random_float_half_open(self):
        rng = GameRNG(7)
        for _ in range(5000):
            v = rng.random_float()
            assert 0.0 <= v < 1.0

    def test_random_int_inclusive(self):
        rng = GameRNG(7)
        seen = {rng.random_int(1, 6) for _ in range(2000)}
        assert seen == {1, 2, 3, 4, 5, 6}

    def test_random_int_single_value(self):
        rng = GameRNG(7)
        assert all(rng.random_int(3, 3) == 3 for _ in range(50))

    def test_random_range(self):
        rng = GameRNG(11)
        for _ in range(2000):
            v = rng.random_range(0.5, 1.0)
            assert 0.5 <= v < 1.0

    def test_chance_extremes(self):
        rng = GameRNG(3)
        assert not any(rng.chance(0.0) for _ in range(200))
        assert all(rng.chance(1.0) for _ in range(200))

    def test_gaussian_mean_roughly_centered(self):
        rng = GameRNG(21)
        samples = [rng.gaussian(10.0, 2.0) for _ in range(4000)]
        assert sum(samples) / len(samples) == pytest.approx(10.0, abs=0.2)

    def test_random_choice_returns_member(self):
        rng = GameRNG(5)
        items = ["a", "b", "c"]
        assert all(rng.random_choice(items) in items for _ in range(100))


class TestShuffle:
    def test_shuffle_is_permutation(self):
        rng = GameRNG(42)
        items = list(range(30))
        rng.shuffle(items)
        assert sorted(items) == list(range(30))

    def test_shuffle_deterministic(self):
        a, b = list(range(20)), list(range(20))
        GameRNG(8).shuffle(a)
        GameRNG(8).shuffle(b)
        assert a == b

    def test_shuffle_consumes_n_minus_one_draws(self):
        rng = GameRNG(8)
        rng.shuffle(list(range(10)))
        ref = GameRNG(8)
        for _ in range(9):
            ref.random_float()
        assert rng.get_state() == ref.get_state()


class TestWeightedIndex:
    def test_zero_weights_never_chosen(self):
        rng = GameRNG(42)
        for _ in range(500):
            assert rng.weighted_index([0.0, 1.0, 0.0]) == 1

    def test_all_indices_reachable(self):
        rng = GameRNG(42)
        seen = {rng.weighted_index([0.2, 0.3, 0.5]) for _ in range(1000)}
        assert seen == {0, 1, 2}

    def test_proportions_roughly_match(self):
        rng = GameRNG(1)
        counts = [0, 0]
        for _ in range(5000):
            counts[rng.weighted_index([1.0, 3.0])] += 1
        assert counts[1] / 5000 == pytest.approx(0.75, abs=0.03)
