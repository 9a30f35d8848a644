"""Render targets for the game loop: a headless no-op and a pygame window."""

from __future__ import annotations

import math
import os
from typing import Protocol

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402
from pygame import gfxdraw  # noqa: E402

from snake_decision.config import (  # noqa: E402
    BATTLE_FPS,
    CELL_SIZE,
    COLOR_BG,
    COLOR_BORDER,
    COLOR_FOOD,
    COLOR_GRID,
    COLOR_SNAKE_BODY,
    COLOR_SNAKE_HEAD,
    COLOR_TEXT,
    PANEL_WIDTH,
)
from snake_decision.game import DOWN, LEFT, RIGHT, GameState  # noqa: E402


class Renderer(Protocol):
    """What the game loop needs from a render target.

    ``closed`` turns True when the user asks to stop; the loop then stops
    scheduling ticks.
    """

    closed: bool

    def render(self, state: GameState) -> None: ...

    def clear(self) -> None: ...


class HeadlessRenderer:
    """Draws nothing; used for search, tests and batch comparisons."""

    closed = False

    def render(self, state: GameState) -> None:
        pass

    def clear(self) -> None:
        pass


class PygameRenderer:
    """Window with the board on the left and an info panel on the right."""

    def __init__(
        self,
        width: int,
        height: int,
        agent_name: str = "",
        cell_size: int = CELL_SIZE,
        fps: int = BATTLE_FPS,
    ) -> None:
        pygame.init()
        pygame.font.init()
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.fps = fps
        self.agent_name = agent_name
        self.window_width = width * cell_size + PANEL_WIDTH
        self.window_height = height * cell_size
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption(f"Snake Decision Engine - {agent_name or 'agent'}")
        self.clock = pygame.time.Clock()  # FPS controller
        self.font_large = pygame.font.SysFont(None, 48, bold=True)
        self.font_medium = pygame.font.SysFont(None, 28, bold=True)
        self.font_small = pygame.font.SysFont(None, 22)
        self.ticks = 0
        self.closed = False

    # ---- Renderer interface ----
    def clear(self) -> None:
        """Blank the window and reset the tick counter for a new episode."""
        self.ticks = 0
        if self.closed:
            return
        self.screen.fill(COLOR_BG)
        pygame.display.flip()

    def render(self, state: GameState) -> None:
        self._pump_events()
        if self.closed:
            return
        self.screen.fill(COLOR_BG)
        self.draw_grid()
        self.draw_snake(state)
        self.draw_food(state)
        self.draw_info_panel(state)
        if state.is_game_over() or not state.get_valid_next_positions():
            self.draw_game_over(state)
        pygame.display.flip()
        self.clock.tick(self.fps)
        self.ticks += 1

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            pygame.quit()

    def _pump_events(self) -> None:
        # Window close is the only event handled; it cancels future ticks
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.close()

    # ---- drawing ----
    def draw_grid(self) -> None:
        """Board border plus internal grid lines."""
        cs = self.cell_size
        board_w, board_h = self.width * cs, self.height * cs
        pygame.draw.rect(self.screen, COLOR_BORDER, (0, 0, board_w, board_h), 3)
        for x in range(1, self.width):
            pygame.draw.line(self.screen, COLOR_GRID, (x * cs, 0), (x * cs, board_h), 1)
        for y in range(1, self.height):
            pygame.draw.line(self.screen, COLOR_GRID, (0, y * cs), (board_w, y * cs), 1)

    def draw_snake(self, state: GameState) -> None:
        """Rounded head with direction-aligned eyes, body fading towards the tail."""
        cs = self.cell_size
        for i, (x, y) in enumerate(state.snake[1:]):
            alpha = max(0.5, 1 - i * 0.02)
            body_color = tuple(int(c * alpha) for c in COLOR_SNAKE_BODY)
            body_rect = pygame.Rect(x * cs + 4, y * cs + 4, cs - 8, cs - 8)
            pygame.draw.rect(self.screen, body_color, body_rect, border_radius=6)

        hx, hy = state.head
        head_rect = pygame.Rect(hx * cs + 2, hy * cs + 2, cs - 4, cs - 4)
        pygame.draw.rect(self.screen, COLOR_SNAKE_HEAD, head_rect, border_radius=8)

        cx, cy = head_rect.center
        offset, spread = cs // 4, cs // 8
        direction = state.direction
        if direction == RIGHT:
            eyes = [(cx + offset, cy - spread), (cx + offset, cy + spread)]
        elif direction == LEFT:
            eyes = [(cx - offset, cy - spread), (cx - offset, cy + spread)]
        elif direction == DOWN:
            eyes = [(cx - spread, cy + offset), (cx + spread, cy + offset)]
        else:
            eyes = [(cx - spread, cy - offset), (cx + spread, cy - offset)]
        for ex, ey in eyes:
            gfxdraw.filled_circle(self.screen, ex, ey, 3, (255, 255, 255))

    def draw_food(self, state: GameState) -> None:
        """Five-pointed star centred on the food cell."""
        cs = self.cell_size
        fx, fy = state.food
        center_x = fx * cs + cs // 2
        center_y = fy * cs + cs // 2
        outer_radius = cs // 2 - 6
        inner_radius = cs // 4 - 3
        star_points = []
        for i in range(5):
            angle_outer = math.radians(90 + i * 72)
            star_points.append((int(center_x + outer_radius * math.cos(angle_outer)),
                                int(center_y - outer_radius * math.sin(angle_outer))))
            angle_inner = math.radians(126 + i * 72)
            star_points.append((int(center_x + inner_radius * math.cos(angle_inner)),
                                int(center_y - inner_radius * math.sin(angle_inner))))
        gfxdraw.filled_polygon(self.screen, star_points, COLOR_FOOD)
        gfxdraw.aapolygon(self.screen, star_points, COLOR_BORDER)

    def draw_info_panel(self, state: GameState) -> None:
        panel_x = self.width * self.cell_size + 15
        self.screen.blit(self.font_medium.render("Decision Engine", True, COLOR_TEXT), (panel_x, 20))
        pygame.draw.line(self.screen, COLOR_GRID, (panel_x, 60), (self.window_width - 15, 60), 2)
        info_items = [
            f"Agent: {self.agent_name or '-'}",
            f"Direction: {state.direction_name}",
            f"Score: {state.get_score()}",
            f"Length: {state.length}",
            f"Tick: {self.ticks}",
        ]
        for row, text in enumerate(info_items):
            self.screen.blit(self.font_small.render(text, True, COLOR_TEXT), (panel_x, 80 + row * 35))

    def draw_game_over(self, state: GameState) -> None:
        """Half-transparent mask over the board with the final score."""
        board_w, board_h = self.width * self.cell_size, self.height * self.cell_size
        mask_surface = pygame.Surface((board_w, board_h), pygame.SRCALPHA)
        mask_surface.fill((0, 0, 0, 128))
        self.screen.blit(mask_surface, (0, 0))
        title = self.font_large.render("Game Over", True, COLOR_SNAKE_HEAD)
        self.screen.blit(title, title.get_rect(center=(board_w // 2, board_h // 2 - 30)))
        final = self.font_medium.render(f"Final Score: {state.get_score()}", True, (255, 255, 255))
        self.screen.blit(final, final.get_rect(center=(board_w // 2, board_h // 2 + 15)))
