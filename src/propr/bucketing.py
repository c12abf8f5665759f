"""A/B-testing cohort assignment."""

from __future__ import annotations

import mmh3

BUCKET_COUNT = 10_000
HASH_SEED = 1
HASH_DIVISOR = 2**32 / BUCKET_COUNT


def calculate_bucket(key: str) -> int:
    """Map ``key`` onto one of ``BUCKET_COUNT`` buckets.

    The unsigned 32-bit MurmurHash3 of the key is scaled down into
    ``[0, BUCKET_COUNT - 1]``, so the same key always lands in the same
    bucket.
    """
    hashed = mmh3.hash(key, seed=HASH_SEED, signed=False)
    return int(hashed // HASH_DIVISOR)


__all__ = ["BUCKET_COUNT", "calculate_bucket"]
