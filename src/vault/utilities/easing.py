# File: src/vault/utilities/easing.py
"""Easing curves for tweens. Each maps progress t in [0, 1] to [0, 1]."""

import math


def linear(t):
    return t


def power1_out(t):
    return 1.0 - (1.0 - t) ** 2


def power2_out(t):
    return 1.0 - (1.0 - t) ** 3


def power2_in_out(t):
    if t < 0.5:
        return 4.0 * t * t * t
    return 1.0 - ((-2.0 * t + 2.0) ** 3) / 2.0


def sine_in_out(t):
    return -(math.cos(math.pi * t) - 1.0) / 2.0


EASINGS = {
    "linear": linear,
    "none": linear,
    "power1.out": power1_out,
    "power2.out": power2_out,
    "power2.inOut": power2_in_out,
    "sine.inOut": sine_in_out,
}

DEFAULT_EASE = "power1.out"


def get_easing(name):
    """Look up an easing curve by name; callables are passed through."""
    if callable(name):
        return name
    try:
        return EASINGS[name]
    except KeyError:
        raise ValueError(f"Unknown easing: {name!r}") from None
