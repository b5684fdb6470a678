"""
CHIP-8 Emulator — 16-Key Hex Keypad Latch

Layout of the original COSMAC VIP keypad:

    1 2 3 C
    4 5 6 D
    7 8 9 E
    A 0 B F

The latch only records which keys are down. The input frontend owns the
mapping from physical keys to indices and calls set_key().
"""

from typing import Optional

from ..errors import InvalidKeyIndex


NUM_KEYS = 16


class Keypad:
    """Pressed/released state for keys 0x0–0xF."""

    def __init__(self):
        self._keys = [False] * NUM_KEYS

    def set_key(self, index: int, pressed: bool):
        if not 0 <= index < NUM_KEYS:
            raise InvalidKeyIndex(index)
        self._keys[index] = bool(pressed)

    def is_pressed(self, index: int) -> bool:
        if not 0 <= index < NUM_KEYS:
            raise InvalidKeyIndex(index)
        return self._keys[index]

    def first_pressed(self) -> Optional[int]:
        """Lowest pressed key index, or None when no key is down."""
        for index, pressed in enumerate(self._keys):
            if pressed:
                return index
        return None

    def reset(self):
        self._keys = [False] * NUM_KEYS
