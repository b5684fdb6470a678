"""
CHIP-8 Emulator — 64x32 Monochrome Framebuffer

One byte per pixel (0 = off, 1 = on), stored row-major as 32 rows of 64.
(0, 0) is the top-left corner.

Sprites are up to 15 bytes tall and always 8 pixels wide; each byte is one
row, most significant bit leftmost. Drawing XORs every sprite bit into the
framebuffer. The sprite origin wraps (x % 64, y % 32) but the sprite body
is clipped: columns past 63 and rows past 31 are dropped, not wrapped.

draw_sprite() reports a collision when any pixel goes from on to off.
Both clear() and draw_sprite() raise the redraw flag so the display
collaborator can poll take_redraw_flag() instead of repainting every cycle.
"""


WIDTH = 64
HEIGHT = 32
SPRITE_WIDTH = 8


class Framebuffer:
    """Pixel grid + redraw flag."""

    def __init__(self):
        self._rows = [bytearray(WIDTH) for _ in range(HEIGHT)]
        self._redraw = False

    def clear(self):
        for row in self._rows:
            row[:] = bytes(WIDTH)
        self._redraw = True

    def draw_sprite(self, x: int, y: int, sprite: bytes) -> bool:
        """XOR a sprite onto the screen. Returns True on collision."""
        x %= WIDTH
        y %= HEIGHT
        collision = False
        for dy, bits in enumerate(sprite):
            py = y + dy
            if py >= HEIGHT:
                break
            row = self._rows[py]
            for dx in range(SPRITE_WIDTH):
                px = x + dx
                if px >= WIDTH:
                    break
                if bits & (0x80 >> dx):
                    if row[px]:
                        collision = True
                    row[px] ^= 1
        self._redraw = True
        return collision

    def pixel(self, x: int, y: int) -> int:
        return self._rows[y][x]

    @property
    def rows(self) -> tuple:
        """Read-only copy of the grid: 32 bytes objects of 64 pixels."""
        return tuple(bytes(row) for row in self._rows)

    @property
    def redraw(self) -> bool:
        return self._redraw

    def take_redraw_flag(self) -> bool:
        """Return the redraw flag and clear it."""
        flag = self._redraw
        self._redraw = False
        return flag

    def is_blank(self) -> bool:
        return not any(any(row) for row in self._rows)

    def reset(self):
        self._rows = [bytearray(WIDTH) for _ in range(HEIGHT)]
        self._redraw = False


def render_text(rows, on: str = '#', off: str = '.') -> str:
    """Render framebuffer rows as text, one line per pixel row."""
    return '\n'.join(
        ''.join(on if px else off for px in row) for row in rows
    )
