"""Fixed-size component bit masks and the identifier types used by the ECS."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

EntityID = int
ComponentID = int
Mask = int
ComponentInstanceID = int

WORD_BITS = 64
MASK_BITS = 256
_WORDS = MASK_BITS // WORD_BITS


def _empty_words() -> list[int]:
    return [0] * _WORDS


@dataclass
class ComponentBitArray256:
    """A 256-bit set of component ids, stored as four 64-bit words."""

    words: list[int] = field(default_factory=_empty_words)

    @staticmethod
    def _locate(index: ComponentID) -> tuple[int, int]:
        if not 0 <= index < MASK_BITS:
            raise IndexError(f"component id {index} out of range 0..{MASK_BITS - 1}")
        return divmod(index, WORD_BITS)

    def set(self, index: ComponentID) -> None:
        """Set the bit for ``index``."""
        word, bit = self._locate(index)
        self.words[word] |= 1 << bit

    def unset(self, index: ComponentID) -> None:
        """Clear the bit for ``index``."""
        word, bit = self._locate(index)
        self.words[word] &= ~(1 << bit)

    def toggle(self, index: ComponentID) -> None:
        """Flip the bit for ``index``."""
        word, bit = self._locate(index)
        self.words[word] ^= 1 << bit

    def is_set(self, index: ComponentID) -> bool:
        """Return whether the bit for ``index`` is set."""
        word, bit = self._locate(index)
        return bool(self.words[word] >> bit & 1)

    def all_set(self) -> Iterator[ComponentID]:
        """Yield every set id, word by word, highest bit first within a word."""
        for word_index, word in enumerate(self.words):
            while word:
                bit = word.bit_length() - 1
                word &= ~(1 << bit)
                yield word_index * WORD_BITS + bit