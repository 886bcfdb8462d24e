"""
Human Play Mode
================

Play the tower stacking game interactively.

Controls:
    - Click/Space: Drop the moving block
    - R: Restart game
    - ESC: Quit

The window is resizable; the current width is handed to the game every frame.

Usage:
    python -m tools.play_human [--width WIDTH] [--height HEIGHT] [--fps FPS]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from tower_stack.stack_core.best_score import JsonBestScoreStore
from tower_stack.stack_core.config_loader import load_config, GameConfig
from tower_stack.stack_core.game import CoreGame
from tower_stack.stack_core.state_snapshot import GameSnapshot

DEFAULT_BEST_SCORE_FILE = Path.home() / ".tower_stack" / "best_score.json"


class TowerRenderer:
    """Draws the scene rectangles, the HUD and the game over card."""

    def __init__(self, config: GameConfig):
        self._config = config

        self._bg_top = (18, 18, 30)
        self._bg_bottom = (40, 30, 60)
        self._text = (240, 240, 240)
        self._best = (255, 167, 38)
        self._danger = (229, 57, 53)
        self._overlay = (0, 0, 0, 200)

        pygame.font.init()
        self._font_large = pygame.font.Font(None, 56)
        self._font_medium = pygame.font.Font(None, 30)
        self._font_small = pygame.font.Font(None, 22)

    def render(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        width, height = screen.get_size()
        self._draw_background(screen, width, height)

        for rect in snapshot.scene():
            color = self._config.palette.color_for(rect.color_index)
            # World y grows upwards
            top = height - (rect.bottom + rect.height)
            pygame_rect = pygame.Rect(
                int(rect.left), int(top), max(1, int(rect.width)), int(rect.height)
            )
            shadow = pygame_rect.move(3, 3)
            pygame.draw.rect(screen, (0, 0, 0), shadow, border_radius=3)
            pygame.draw.rect(screen, color, pygame_rect, border_radius=3)
            if rect.is_moving:
                pygame.draw.rect(screen, (255, 255, 255), pygame_rect, width=1, border_radius=3)

        self._draw_hud(screen, snapshot, width)
        if snapshot.is_game_over:
            self._draw_game_over(screen, snapshot, width, height)

    def _draw_background(self, screen: pygame.Surface, width: int, height: int) -> None:
        for y in range(0, height, 4):
            t = y / max(1, height)
            color = tuple(
                int(self._bg_top[i] * (1 - t) + self._bg_bottom[i] * t) for i in range(3)
            )
            pygame.draw.rect(screen, color, (0, y, width, 4))

    def _draw_hud(self, screen: pygame.Surface, snapshot: GameSnapshot, width: int) -> None:
        score = self._font_medium.render(f"Score: {snapshot.score}", True, self._text)
        best = self._font_medium.render(f"Best: {snapshot.best_score}", True, self._best)
        screen.blit(score, (12, 12))
        screen.blit(best, (width - best.get_width() - 12, 12))

        block_width = snapshot.current_block_width
        width_color = self._danger if block_width < 50 else self._text
        level = self._font_small.render(
            f"Level {snapshot.current_level}  Width {block_width:.1f}", True, width_color
        )
        screen.blit(level, (12, 44))

    def _draw_game_over(
        self,
        screen: pygame.Surface,
        snapshot: GameSnapshot,
        width: int,
        height: int
    ) -> None:
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill(self._overlay)
        screen.blit(overlay, (0, 0))

        lines = [
            (self._font_large, "GAME OVER", self._danger),
            (self._font_medium, f"Final Score: {snapshot.score}", self._text),
        ]
        if snapshot.score > 0 and snapshot.score == snapshot.best_score:
            lines.append((self._font_medium, "New best!", self._best))
        lines.append((self._font_small, "Click or R to play again, ESC to quit", self._text))

        y = height // 2 - 60
        for font, text, color in lines:
            surface = font.render(text, True, color)
            screen.blit(surface, ((width - surface.get_width()) // 2, y))
            y += surface.get_height() + 12


class HumanPlayer:
    """Real-time host: supplies viewport width and frame time every frame."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        window_width: int = 400,
        window_height: int = 700,
        target_fps: int = 60,
        best_score_file: Optional[Path] = None
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps

        store = JsonBestScoreStore(best_score_file or DEFAULT_BEST_SCORE_FILE)
        self._game = CoreGame(config=config, best_score_store=store)

        pygame.init()
        self._screen = pygame.display.set_mode((window_width, window_height), pygame.RESIZABLE)
        pygame.display.set_caption("Tower Stack")
        self._clock = pygame.time.Clock()
        self._renderer = TowerRenderer(config)

        self._running = True
        self._game.start(self._screen_width())

    def _screen_width(self) -> float:
        return float(self._screen.get_width())

    def run(self) -> int:
        """Run the game loop. Returns final score."""
        print("=== Tower Stack ===")
        print("Click or Space to drop the block")
        print("R to restart, ESC to quit")
        print()

        while self._running:
            dt = self._clock.tick(self._target_fps) / 1000.0
            self._handle_events()
            snapshot = self._game.tick(dt, self._screen_width())
            self._renderer.render(self._screen, snapshot)
            pygame.display.flip()

        self._game.persist_best_score()
        pygame.quit()
        return self._game.score

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.VIDEORESIZE:
                self._screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_r:
                    self._restart()
                elif event.key == pygame.K_SPACE:
                    self._tap()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if self._game.is_over:
                    self._restart()
                else:
                    self._tap()

    def _tap(self) -> None:
        outcome = self._game.place()
        if outcome is None:
            return
        if outcome.game_over:
            print(f"\nGAME OVER - Score: {self._game.score}")
        elif outcome.points:
            print(f"  +{outcome.points} (Total: {self._game.score})")

    def _restart(self) -> None:
        """Restart the game."""
        self._game.reset(self._screen_width())
        print("\n=== Game Restarted ===\n")


def main():
    parser = argparse.ArgumentParser(description="Play the tower stacking game interactively")
    parser.add_argument("--width", type=int, default=400, help="Window width (default: 400)")
    parser.add_argument("--height", type=int, default=700, help="Window height (default: 700)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument(
        "--best-score-file",
        type=Path,
        default=None,
        help=f"Where the best score is kept (default: {DEFAULT_BEST_SCORE_FILE})"
    )
    parser.add_argument("--verbose", action="store_true", help="Log every placement")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    try:
        player = HumanPlayer(
            config=load_config(),
            window_width=args.width,
            window_height=args.height,
            target_fps=args.fps,
            best_score_file=args.best_score_file
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
