"""
CHIP-8 Emulator — pygame Display + Keyboard Frontend

Renders the 64x32 framebuffer into a scaled window and maps a QWERTY
keyboard onto the hex keypad:

  CHIP-8 keypad:    Keyboard:
    1 2 3 C          1 2 3 4
    4 5 6 D          Q W E R
    7 8 9 E          A S D F
    A 0 B F          Z X C V

Sound is not synthesised; buzzer changes are only logged.
"""

import logging
import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame

from .config import SCALE, FG_COLOR, BG_COLOR
from .periph.display import WIDTH, HEIGHT


logger = logging.getLogger(__name__)

KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


class PygameFrontend:
    """Window + keyboard. Create after the ROM has loaded."""

    def __init__(self, scale: int = SCALE, fg_color=FG_COLOR,
                 bg_color=BG_COLOR, title: str = "CHIP-8"):
        self.scale = scale
        self.fg_color = pygame.Color(*fg_color)
        self.bg_color = pygame.Color(*bg_color)
        pygame.init()
        self.surface = pygame.display.set_mode((WIDTH * scale, HEIGHT * scale))
        pygame.display.set_caption(title)
        self.surface.fill(self.bg_color)
        pygame.display.flip()

    def poll(self):
        quit_requested = False
        events = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quit_requested = True
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                quit_requested = True
            elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                key = KEY_MAP.get(event.key)
                if key is not None:
                    events.append((key, event.type == pygame.KEYDOWN))
        return quit_requested, events

    def render(self, rows):
        self.surface.fill(self.bg_color)
        s = self.scale
        for y, row in enumerate(rows):
            for x, px in enumerate(row):
                if px:
                    pygame.draw.rect(self.surface, self.fg_color,
                                     (x * s, y * s, s, s))
        pygame.display.flip()

    def buzzer(self, on: bool):
        logger.debug("Buzzer %s", "on" if on else "off")

    def close(self):
        pygame.quit()
