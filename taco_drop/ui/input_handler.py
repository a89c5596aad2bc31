"""
Input Handler - Translates mouse and key presses to gameplay commands.
This is a THIN ADAPTER - no game logic here.
"""
from typing import Callable

import pygame

from taco_drop.gameplay.game import Game


class InputHandler:
    """
    Handles pygame events and calls game methods.

    `request_location` is invoked whenever the game asks for a new fix
    (pull-to-refresh is the R key here).
    """

    def __init__(self, game: Game, request_location: Callable[[], None]):
        self.game = game
        self.request_location = request_location

    def handle_event(self, event) -> bool:
        """
        Handle a single pygame event.
        Returns True if the game should quit.
        """
        if event.type == pygame.QUIT:
            return True

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.game.tap(*event.pos)

        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return True
            if event.key == pygame.K_r:
                if self.game.refresh():
                    self.request_location()

        return False
