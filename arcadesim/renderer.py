"""Snapshot renderer - filled rectangles, a score line and a game-over overlay."""

from typing import Dict, Optional, Tuple

import pygame

from arcadesim.entities import Category
from arcadesim.models import Color, EngineConfig
from arcadesim.snapshot import RenderSnapshot, Sprite

RGB = Tuple[int, int, int]

# Target colours when a spawn rule does not name one
CATEGORY_COLORS: Dict[Category, str] = {
    Category.OBSTACLE: "#f00",
    Category.ENEMY: "#0f0",
}

TEXT_COLOR: RGB = (0, 0, 0)
OVERLAY_TEXT_COLOR: RGB = (255, 255, 255)
OVERLAY_ALPHA = 128


class SnapshotRenderer:
    """Paints RenderSnapshots onto a field-sized pygame surface.

    Colours come from the engine configuration: the player and projectile
    settings, each spawn rule's colour, or the category default.
    """

    def __init__(self, config: EngineConfig):
        self.config = config
        self.background = Color.from_hex(config.background).as_tuple
        self.player_color = Color.from_hex(config.player.color).as_tuple
        projectile_hex = config.projectile.color if config.projectile is not None else "#fff"
        self.projectile_color = Color.from_hex(projectile_hex).as_tuple
        self._kind_colors: Dict[str, RGB] = {
            rule.kind: Color.from_hex(rule.color).as_tuple
            for rule in config.spawns
            if rule.color is not None
        }
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    def _ensure_font(self) -> None:
        """Ensure fonts are initialized."""
        if self._font is None:
            pygame.font.init()
            self._font = pygame.font.Font(None, 24)
            self._big_font = pygame.font.Font(None, 48)

    def color_for(self, sprite: Sprite) -> RGB:
        """Fill colour for a sprite."""
        if sprite.category == Category.PLAYER:
            return self.player_color
        if sprite.category == Category.PROJECTILE:
            return self.projectile_color
        if sprite.kind in self._kind_colors:
            return self._kind_colors[sprite.kind]
        return Color.from_hex(CATEGORY_COLORS[sprite.category]).as_tuple

    def _draw_sprite(self, surface: pygame.Surface, sprite: Sprite) -> None:
        pygame.draw.rect(surface, self.color_for(sprite), sprite.rect.as_tuple())

    def render(self, surface: pygame.Surface, snapshot: RenderSnapshot) -> None:
        """Draw one frame.

        Args:
            surface: Surface the size of the field
            snapshot: State to draw
        """
        surface.fill(self.background)

        self._draw_sprite(surface, snapshot.player)
        for sprite in snapshot.projectiles:
            self._draw_sprite(surface, sprite)
        for sprite in snapshot.targets:
            self._draw_sprite(surface, sprite)

        self._ensure_font()
        score = self._font.render(f"Score: {snapshot.score}", True, TEXT_COLOR)
        surface.blit(score, (10, 10))

        if snapshot.is_over:
            self._render_game_over(surface, snapshot)

    def _render_game_over(self, surface: pygame.Surface, snapshot: RenderSnapshot) -> None:
        """Render the translucent game-over overlay."""
        width, height = surface.get_size()
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, OVERLAY_ALPHA))
        surface.blit(overlay, (0, 0))

        title = self._big_font.render("Game Over", True, OVERLAY_TEXT_COLOR)
        surface.blit(title, title.get_rect(center=(width // 2, height // 2 - 20)))

        final = self._font.render(f"Final Score: {snapshot.final_score}", True, OVERLAY_TEXT_COLOR)
        surface.blit(final, final.get_rect(center=(width // 2, height // 2 + 20)))

        best = self._font.render(f"Best: {snapshot.best_score}", True, OVERLAY_TEXT_COLOR)
        surface.blit(best, best.get_rect(center=(width // 2, height // 2 + 45)))
