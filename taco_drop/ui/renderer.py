"""
Renderer - Reads gameplay state and draws it with pygame.
This is a THIN ADAPTER - no game logic here.
"""
import math

import pygame

from taco_drop.gameplay.game import Game
from taco_drop.gameplay.tacos import Taco
from taco_drop.gameplay.constants import TACO_SIZE


# Colors
COLOR_BG = (255, 255, 255)
COLOR_TEXT = (30, 30, 30)
COLOR_SHELL = (240, 190, 70)
COLOR_SHELL_EDGE = (190, 130, 40)
COLOR_LETTUCE = (90, 170, 60)
COLOR_MEAT = (140, 70, 40)
COLOR_CHEESE = (255, 220, 60)

# Layout
LABEL_TOP = 20
LABEL_SPACING = 10
STATUS_FONT_SIZE = 22
LABEL_FONT_SIZE = 22


def make_taco_surface(size: int = TACO_SIZE) -> pygame.Surface:
    """Draw one taco (shell with filling) onto a transparent surface."""
    surface = pygame.Surface((size, size), pygame.SRCALPHA)
    shell = pygame.Rect(2, 2, size - 4, size - 4)

    # Shell is the lower half of an ellipse
    pygame.draw.ellipse(surface, COLOR_SHELL, shell)
    pygame.draw.rect(surface, (0, 0, 0, 0), pygame.Rect(0, 0, size, size // 2))
    pygame.draw.arc(surface, COLOR_SHELL_EDGE, shell, math.pi, 2 * math.pi, 3)

    # Filling peeks out above the shell
    for i, color in enumerate((COLOR_LETTUCE, COLOR_MEAT, COLOR_CHEESE)):
        cx = size // 4 + i * size // 4
        pygame.draw.circle(surface, color, (cx, size // 2), size // 7)
    return surface


class Renderer:
    """
    Renders game state to a pygame window.

    This class reads from Game but never modifies it.
    """

    def __init__(self, game: Game):
        self.game = game
        self.screen = None
        self.status_font = None
        self.score_font = None
        self.level_font = None
        self.taco_surface = None

    def init_display(self, title: str = "Taco Drop") -> None:
        """Open the window and load fonts."""
        pygame.init()
        pygame.display.set_caption(title)
        self.screen = pygame.display.set_mode((self.game.field.width, self.game.field.height))

        self.status_font = pygame.font.SysFont(None, STATUS_FONT_SIZE)
        self.score_font = pygame.font.SysFont(None, LABEL_FONT_SIZE, bold=True)
        self.level_font = pygame.font.SysFont(None, LABEL_FONT_SIZE)
        self.taco_surface = make_taco_surface()

    def render(self) -> None:
        self.screen.fill(COLOR_BG)

        for taco in self.game.field.tacos:
            self._draw_taco(taco)

        y = LABEL_TOP
        y = self._draw_label(self.status_font, self.game.status_text, y)
        y = self._draw_label(self.score_font, f"Score: {self.game.score}", y)
        self._draw_label(self.level_font, f"Level: {self.game.level}", y, self.game.pulse_scale)

        pygame.display.flip()

    def _draw_label(self, font, text: str, y: int, scale: float = 1.0) -> int:
        """Draw centered text at y; returns the y for the next label."""
        surface = font.render(text, True, COLOR_TEXT)
        if scale != 1.0:
            surface = pygame.transform.rotozoom(surface, 0, scale)
        rect = surface.get_rect(midtop=(self.screen.get_width() // 2, y))
        self.screen.blit(surface, rect)
        return y + font.get_height() + LABEL_SPACING

    def _draw_taco(self, taco: Taco) -> None:
        surface = pygame.transform.rotozoom(
            self.taco_surface, -math.degrees(taco.angle), taco.scale
        )
        if taco.popping:
            surface.set_alpha(int(255 * taco.alpha))
        rect = surface.get_rect(center=(int(taco.center[0]), int(taco.center[1])))
        self.screen.blit(surface, rect)
