from __future__ import annotations

import pytest

from propr import bucketing
from propr.bucketing import BUCKET_COUNT, calculate_bucket


@pytest.mark.parametrize("key", ["visitor-1", "a", "user@example.com", "ünïcode", "x" * 500])
def test_bucket_is_deterministic_and_in_range(key: str) -> None:
    first = calculate_bucket(key)

    assert first == calculate_bucket(key)
    assert 0 <= first < BUCKET_COUNT
    assert isinstance(first, int)


def test_buckets_spread_across_keys() -> None:
    buckets = {calculate_bucket(f"visitor-{n}") for n in range(50)}
    assert len(buckets) > 1


def test_hash_extremes_map_to_bucket_bounds(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []

    def fake_hash(key, seed=0, signed=True):
        calls.append((key, seed, signed))
        return int(key)

    monkeypatch.setattr(bucketing.mmh3, "hash", fake_hash)

    assert calculate_bucket("0") == 0
    assert calculate_bucket(str(2**32 - 1)) == BUCKET_COUNT - 1
    assert calculate_bucket(str(2**31 + 1000)) == BUCKET_COUNT // 2
    assert calls[0][1:] == (1, False)
