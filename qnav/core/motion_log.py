"""Bounded log of recent pointer samples recorded while dragging."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class MotionSample:
    position: tuple[float, float]
    timestamp: float


class MotionLog:
    """
    Time-ordered record of normalized pointer positions, newest first.

    Index 0 is the most recent sample. The log only keeps the last `size`
    samples; it feeds the spin velocity estimate when a drag ends.
    """

    DEFAULT_SIZE = 16

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        if size < 3:
            raise ValueError(f"Motion log needs room for at least 3 samples, got {size}.")
        self._samples: deque[MotionSample] = deque(maxlen=size)

    @property
    def size(self) -> int:
        return self._samples.maxlen

    def append(self, position: tuple[float, float], timestamp: float) -> None:
        self._samples.appendleft(MotionSample(tuple(position), timestamp))

    def clear(self) -> None:
        self._samples.clear()

    def __len__(self) -> int:
        return len(self._samples)

    def __getitem__(self, index: int) -> MotionSample:
        return self._samples[index]

    def __iter__(self) -> Iterator[MotionSample]:
        return iter(self._samples)
