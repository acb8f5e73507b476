from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence


try:  # optional dependency
    import numpy as _np  # type: ignore
except ImportError:  # pragma: no cover - optional
    _np = None


@dataclass
class RandomSource:
    engine: str

    def randint(self, a: int, b: int) -> int:
        """Uniform integer in the closed range [a, b]."""
        raise NotImplementedError


class PyRandomSource(RandomSource):
    def __init__(self, seed: Optional[int] = None):
        super().__init__(engine="py_random")
        self._rng = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)


class NumpyPCG64Source(RandomSource):  # pragma: no cover - covered when numpy present
    def __init__(self, seed: Optional[int] = None):
        if _np is None:
            raise RuntimeError("numpy is not installed; install show-bingo[pcg]")
        super().__init__(engine="numpy_pcg64")
        self._rng = _np.random.Generator(_np.random.PCG64(seed))

    def randint(self, a: int, b: int) -> int:
        return int(self._rng.integers(low=a, high=b + 1))


class ScriptedRandomSource(RandomSource):
    """Replays a fixed list of draws; each draw is clamped into [a, b].

    Used to pin down exact permutations in tests and demos.
    """

    def __init__(self, draws: Sequence[int]):
        super().__init__(engine="scripted")
        self._draws: List[int] = list(draws)
        self._pos = 0

    def randint(self, a: int, b: int) -> int:
        if self._pos >= len(self._draws):
            raise RuntimeError("scripted random source exhausted")
        value = self._draws[self._pos]
        self._pos += 1
        return max(a, min(b, value))


def create_rng(engine: str, seed: Optional[int] = None) -> RandomSource:
    engine = (engine or "py_random").strip().lower()
    if engine == "py_random":
        return PyRandomSource(seed)
    if engine == "numpy_pcg64":
        return NumpyPCG64Source(seed)
    raise ValueError(f"Unsupported RNG engine: {engine}")
