"""
Synthetic two-channel coincidence stream used to exercise the writer.

Each simulated pair puts a tag on channel 0 at a uniformly random moment in a 7 minute
window. With probability 1/2 channel 1 sees the correlated partner photon, delayed by
10 cm of fiber plus detector jitter; otherwise channel 1 fires at an unrelated random
moment. Only tags strictly inside minutes 1..6 are kept, and the stream is sorted by time.

Notes
- Deterministic for a given seed (random.Random).
- Materializes the whole stream in memory; intended for tests and demos, not load.
"""

from __future__ import annotations

import random

from tagstream.core.schema import TimeTag

__all__ = [
    "pico_seconds",
    "pico_minutes",
    "pico_fiber_centimeters",
    "simulate_time_tags",
]

_PS_PER_SECOND = 1_000_000_000_000

# Approximate light propagation delay through fiber.
_PS_PER_FIBER_CM = 50

# Detector timing jitter bounds, ps (half-open).
_JITTER_PS = (-15, 15)


def pico_seconds(seconds: int) -> int:
    return _PS_PER_SECOND * seconds


def pico_minutes(minutes: int) -> int:
    return _PS_PER_SECOND * 60 * minutes


def pico_fiber_centimeters(centimeters: int) -> int:
    return _PS_PER_FIBER_CM * centimeters


def simulate_time_tags(
    pairs: int,
    seed: int = 42,
    *,
    correlated_fraction: float = 0.5,
    fiber_cm: int = 10,
) -> list[TimeTag]:
    """
    Generate a time-sorted synthetic coincidence stream.

    Args:
        pairs (int): Number of simulated emission pairs (>= 0).
        seed (int): Random seed.
        correlated_fraction (float): Probability that channel 1 sees the partner of the
            channel 0 tag rather than an unrelated event.
        fiber_cm (int): Fiber length between the two detectors.

    Returns:
        list[TimeTag]: Tags inside the sampling window, sorted by time_tag_ps.

    Raises:
        ValueError: If pairs < 0 or correlated_fraction is outside [0, 1].

    Examples:
        >>> tags = simulate_time_tags(100, seed=1)
        >>> all(a.time_tag_ps <= b.time_tag_ps for a, b in zip(tags, tags[1:]))
        True
    """
    if pairs < 0:
        raise ValueError("pairs must be >= 0")
    if not 0.0 <= correlated_fraction <= 1.0:
        raise ValueError("correlated_fraction must be within [0, 1]")

    rng = random.Random(seed)
    span = pico_minutes(7)
    offset = pico_seconds(1)  # keeps jittered tags away from zero
    lo, hi = pico_minutes(1), pico_minutes(6)
    delay = pico_fiber_centimeters(fiber_cm)

    tags: list[TimeTag] = []
    for _ in range(pairs):
        t0 = rng.randrange(span) + offset
        if rng.random() < correlated_fraction:
            t1 = t0 + delay + rng.randrange(*_JITTER_PS)
        else:
            t1 = rng.randrange(span) + offset
        if lo < t0 < hi:
            tags.append(TimeTag(0, t0))
        if lo < t1 < hi:
            tags.append(TimeTag(1, t1))

    tags.sort(key=lambda tag: tag.time_tag_ps)
    return tags
