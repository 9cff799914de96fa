"""Underlying integer representations of an enum."""

from __future__ import annotations

import re
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

_INTEGER_HINT = re.compile(r"[ui]\d+")


class Representation(StrEnum):
    """Integer kind used to store the numeric value of a member."""

    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"

    @property
    def bits(self) -> int:
        return int(self.value[1:])

    @property
    def signed(self) -> bool:
        return self.value.startswith("i")

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def can_hold(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value

    def cast(self, value: int) -> int:
        """Reinterpret ``value`` in this representation (two's-complement truncation).

        Examples:
            >>> Representation.U8.cast(300)
            44
            >>> Representation.I8.cast(200)
            -56

        """
        truncated = value & ((1 << self.bits) - 1)
        if self.signed and truncated > self.max_value:
            truncated -= 1 << self.bits
        return truncated


def parse_representation(tokens: str | Iterable[str] | None) -> Representation | None:
    """Pick the first integer representation out of a list of hints.

    Hints that do not name an integer kind (``"C"``, ``"transparent"``, ``"f32"``,
    unknown widths such as ``"u7"``) are skipped.

    Args:
        tokens: A single hint or an iterable of hints, in declaration order.

    Returns:
        The first matching Representation, or None.

    """
    if tokens is None:
        return None
    if isinstance(tokens, str):
        tokens = [tokens]

    for token in tokens:
        hint = token.strip().lower()
        if not _INTEGER_HINT.fullmatch(hint):
            continue
        try:
            return Representation(hint)
        except ValueError:
            continue
    return None
