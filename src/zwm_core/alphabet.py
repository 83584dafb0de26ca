"""Invisible symbol alphabet for a chosen radix."""
from __future__ import annotations

from dataclasses import dataclass, field

from .errors import UnknownSymbol
from .protocol import DIGIT_POOL, FRAME_END, FRAME_SEP, FRAME_START, MAX_BASE, MIN_BASE


def field_width(space: int, base: int) -> int:
    """Smallest digit count able to represent ``space`` distinct values."""
    width = 1
    while base ** width < space:
        width += 1
    return width


@dataclass(frozen=True)
class Alphabet:
    base: int
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not MIN_BASE <= self.base <= MAX_BASE:
            raise ValueError(f"base must be in [{MIN_BASE}, {MAX_BASE}], got {self.base}")
        index = {s: d for d, s in enumerate(DIGIT_POOL[: self.base])}
        object.__setattr__(self, "_index", index)

    @property
    def digits(self) -> tuple[str, ...]:
        return DIGIT_POOL[: self.base]

    @property
    def digits_per_byte(self) -> int:
        return field_width(256, self.base)

    @property
    def symbols(self) -> frozenset[str]:
        """Every symbol in every role, including digits unused at this base."""
        return frozenset(DIGIT_POOL) | {FRAME_START, FRAME_SEP, FRAME_END}

    def digit_to_symbol(self, d: int) -> str:
        if not 0 <= d < self.base:
            raise ValueError(f"digit {d} out of range for base {self.base}")
        return DIGIT_POOL[d]

    def symbol_to_digit(self, s: str) -> int:
        try:
            return self._index[s]
        except KeyError:
            raise UnknownSymbol(f"U+{ord(s):04X} is not a base-{self.base} digit") from None

    def render(self, digits: list[int]) -> str:
        return "".join(self.digit_to_symbol(d) for d in digits)

    def read(self, text: str) -> list[int]:
        return [self.symbol_to_digit(s) for s in text]
