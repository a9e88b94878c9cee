"""
Easing Curves

Easing functions map normalized progress in [0, 1] to eased progress and
control the curvature of interpolation in the normalization and
edge-shaping filters. Built-in curves work on floats and numpy arrays.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Union

import numpy as np


class Easing(ABC):
    """
    Abstract base class for easing curves.

    Subclasses implement ``ease``; instances are callable so they can be
    used wherever a plain function is expected.
    """
    name: str = ""

    @abstractmethod
    def ease(self, x):
        """Map progress (float or array) to eased progress."""
        pass

    def __call__(self, x):
        return self.ease(x)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))


class Linear(Easing):
    """No easing: output equals input."""
    name = "linear"

    def ease(self, x):
        return x


class EaseIn(Easing):
    """Start slow, finish fast."""
    name = "ease-in"

    def ease(self, x):
        return x * x


class EaseInWeak(Easing):
    name = "ease-in-weak"

    def ease(self, x):
        return np.power(x, 1.55)


class EaseInStrong(Easing):
    name = "ease-in-strong"

    def ease(self, x):
        return np.power(x, 7)


class EaseOut(Easing):
    """Start fast, finish slow."""
    name = "ease-out"

    def ease(self, x):
        return -x * (x - 2)


class EaseInOut(Easing):
    """Slow at both ends (smoothstep)."""
    name = "ease-in-out"

    def ease(self, x):
        return x * x * (3 - 2 * x)


class InEaseOut(Easing):
    """Fast at both ends, flat through the middle."""
    name = "in-ease-out"

    def ease(self, x):
        y = 2 * x - 1
        return 0.5 * y * y * y + 0.5


class CallableEasing(Easing):
    """
    Adapt a plain ``float -> float`` function to the Easing interface.

    Array inputs are evaluated element by element, so the wrapped function
    does not need to be numpy-aware.
    """

    def __init__(self, func: Callable[[float], float], name: str = "custom"):
        if not callable(func):
            raise TypeError(f"easing must be callable, got {type(func).__name__}")
        self.func = func
        self.name = name
        self._vectorized = np.vectorize(func, otypes=[float])

    def ease(self, x):
        if np.ndim(x) == 0:
            return float(self.func(float(x)))
        return self._vectorized(x)

    def __repr__(self) -> str:
        return f"CallableEasing({self.func!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, CallableEasing) and other.func is self.func

    def __hash__(self) -> int:
        return hash(self.func)


EASINGS: Dict[str, Easing] = {
    easing.name: easing
    for easing in (
        Linear(),
        EaseIn(),
        EaseInWeak(),
        EaseInStrong(),
        EaseOut(),
        EaseInOut(),
        InEaseOut(),
    )
}

EasingLike = Union[Easing, Callable[[float], float], str, None]


def resolve_easing(easing: EasingLike, default: Optional[Easing] = None) -> Easing:
    """
    Turn an easing specification into an Easing instance.

    Args:
        easing: Easing instance, plain callable, registered name, or None
        default: Returned when ``easing`` is None (Linear if not given)

    Raises:
        ValueError: If a name is not registered
    """
    if easing is None:
        return default if default is not None else Linear()
    if isinstance(easing, Easing):
        return easing
    if isinstance(easing, str):
        key = easing.strip().lower().replace("_", "-")
        if key not in EASINGS:
            raise ValueError(
                f"Unknown easing '{easing}'. "
                f"Available: {', '.join(sorted(EASINGS))}"
            )
        return EASINGS[key]
    return CallableEasing(easing)
