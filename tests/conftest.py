from __future__ import annotations

from typing import Iterable, List

import pytest

from falling_blocks.game import TetrominoType


class SequenceChoice:
    """Stands in for random.Random: `choice` hands out a fixed sequence of kinds."""

    def __init__(self, kinds: Iterable[TetrominoType]) -> None:
        self.kinds: List[TetrominoType] = list(kinds)
        self.calls = 0

    def choice(self, seq):
        kind = self.kinds[min(self.calls, len(self.kinds) - 1)]
        self.calls += 1
        assert kind in seq
        return kind


@pytest.fixture
def always():
    def make(*kinds: TetrominoType) -> SequenceChoice:
        return SequenceChoice(kinds)

    return make
