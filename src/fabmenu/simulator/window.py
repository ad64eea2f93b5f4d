"""
Simulator window using pygame.

Renders the FAB and its children from their tweened values so the menu
can be clicked through on a desktop.
"""

import pygame
import asyncio
import logging
import math

import numpy as np

from ..animation.engine import Tweener
from ..config.settings import Settings, SimulatorSettings
from ..core.events import EventBus, EventType, Event, press_event, tick_event, toggle_event
from ..menu.fab import FabMenu

logger = logging.getLogger(__name__)


class SimulatorWindow:
    """
    Desktop window hosting one FabMenu.

    Controls:
        Left click on FAB: Toggle menu
        Left click on child: Activate child
        SPACE / RETURN: Toggle menu
        D: Toggle debug panel
        L: Toggle log panel
        Q / ESC: Exit simulator
    """

    def __init__(
        self,
        settings: Settings | None = None,
        event_bus: EventBus | None = None,
        tweener: Tweener | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.config: SimulatorSettings = self.settings.simulator
        self.event_bus = event_bus or EventBus()
        self.tweener = tweener or Tweener()
        self.menu = FabMenu.from_settings(self.settings, self.tweener, self.event_bus)

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = True

        # Fonts
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None

        # Log viewer
        self._show_log = False
        self._log_buffer: list[str] = []
        self._max_log_lines = 16

        self._last_activation: str | None = None
        self.event_bus.subscribe(EventType.CHILD_ACTIVATED, self._on_child_activated)
        self.event_bus.subscribe(EventType.TICK, self._on_tick)

        # Attached only while run() is active
        self._log_handler: logging.Handler | None = None

        logger.info("SimulatorWindow created")

    @property
    def center(self) -> tuple[int, int]:
        """FAB center in window coordinates."""
        return self.config.width // 2, self.config.height - self.config.fab_radius * 3

    def _setup_log_capture(self) -> None:
        """Setup log capturing for the log viewer."""
        class SimulatorLogHandler(logging.Handler):
            def __init__(self, window: 'SimulatorWindow'):
                super().__init__()
                self.window = window

            def emit(self, record):
                msg = self.format(record)
                self.window._log_buffer.append(msg)
                # Keep buffer size limited
                if len(self.window._log_buffer) > self.window._max_log_lines * 2:
                    self.window._log_buffer = self.window._log_buffer[-self.window._max_log_lines:]

        self._log_handler = SimulatorLogHandler(self)
        self._log_handler.setFormatter(logging.Formatter('%(levelname).1s %(name)s: %(message)s'))
        logging.getLogger().addHandler(self._log_handler)

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption("fabmenu simulator")

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode((self.config.width, self.config.height), flags)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        # DejaVu Sans has the × and ＋ glyphs; SysFont falls back to the default font
        self._font = pygame.font.SysFont("DejaVu Sans", 28)
        self._small_font = pygame.font.SysFont("DejaVu Sans", 12)

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(*event.pos)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_l:
            self._show_log = not self._show_log
        elif key in (pygame.K_SPACE, pygame.K_RETURN):
            self.event_bus.post(toggle_event(source="keyboard"))

    def _handle_click(self, mx: int, my: int) -> None:
        """Toggle on the FAB, activate a child elsewhere."""
        cx, cy = self.center
        if math.hypot(mx - cx, my - cy) <= self.config.fab_radius:
            self.event_bus.post(toggle_event(source="mouse"))
            return

        index = self.menu.child_at(mx - cx, my - cy)
        if index is not None:
            self.event_bus.post(press_event(index, source="mouse"))

    def _on_child_activated(self, event: Event) -> None:
        self._last_activation = event.data.get("label")

    def _on_tick(self, event: Event) -> None:
        self.tweener.update(event.data.get("delta", 0.016))

    def _render(self) -> None:
        """Render all UI elements."""
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)

        self._render_arc_guide()
        self._render_children()
        self._render_fab()

        if self._show_debug:
            self._render_debug_panel()
        if self._show_log:
            self._render_log_panel()

        pygame.display.flip()

    def _render_arc_guide(self) -> None:
        """Draw the arc the children fan out along."""
        arc = self.menu.arc
        cx, cy = self.center
        angles = np.linspace(arc.start_angle, arc.start_angle - arc.arc_span, 48)
        points = np.column_stack((
            cx + arc.radius * np.cos(angles),
            cy - arc.radius * np.sin(angles),
        ))
        pygame.draw.lines(self._screen, self.config.guide_color, False, points.tolist(), 1)

    def _render_children(self) -> None:
        cx, cy = self.center
        radius = self.config.child_radius

        for child in self.menu.children:
            alpha = int(max(0.0, min(1.0, child.opacity)) * 255)
            if alpha == 0:
                continue

            surface = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
            pygame.draw.circle(surface, (*self.config.child_color, alpha), (radius, radius), radius)
            if self._small_font:
                text = self._small_font.render(child.label, True, self.config.text_color)
                text = pygame.transform.rotate(text, -child.rotation)
                text.set_alpha(alpha)
                surface.blit(text, text.get_rect(center=(radius, radius)))

            self._screen.blit(surface, (cx + child.x - radius, cy + child.y - radius))

    def _render_fab(self) -> None:
        center = self.center
        pygame.draw.circle(self._screen, self.config.fab_color, center, self.config.fab_radius)
        if self._font:
            text = self._font.render(self.menu.label, True, (255, 255, 255))
            self._screen.blit(text, text.get_rect(center=center))

    def _render_debug_panel(self) -> None:
        """Render the debug information panel."""
        if not self._small_font:
            return

        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            f"State: {self.menu.state.name}",
            f"Tweens: {self.tweener.tween_count}",
            f"Last: {self._last_activation or '-'}",
            "",
        ]
        for i, child in enumerate(self.menu.children):
            hit = "*" if child.interactable else " "
            lines.append(
                f"{hit}{i} x={child.x:6.1f} y={child.y:6.1f} "
                f"r={child.rotation:5.1f} a={child.opacity:.2f}"
            )

        y = 10
        for line in lines:
            text_surface = self._small_font.render(line, True, self.config.text_color)
            self._screen.blit(text_surface, (10, y))
            y += 16

    def _render_log_panel(self) -> None:
        """Render the log viewer panel."""
        if not self._small_font:
            return

        rect = pygame.Rect(self.config.width - 310, 10, 300, self.config.height // 2)
        surf = pygame.Surface((rect.width, rect.height), pygame.SRCALPHA)
        surf.fill((20, 25, 35, 230))
        self._screen.blit(surf, rect.topleft)

        y = rect.y + 6
        for line in self._log_buffer[-self._max_log_lines:]:
            # Color code by level
            if line.startswith('E'):
                color = (255, 100, 100)
            elif line.startswith('W'):
                color = (255, 200, 100)
            elif line.startswith('I'):
                color = (150, 200, 150)
            else:
                color = (150, 150, 170)

            display_line = line[:45] + "..." if len(line) > 48 else line
            self._screen.blit(self._small_font.render(display_line, True, color), (rect.x + 6, y))
            y += 14
            if y > rect.bottom - 10:
                break

    async def step(self, delta: float) -> None:
        """Advance one frame: deliver queued input, then tick the tweens."""
        await self.event_bus.drain()
        self.event_bus.emit(tick_event(delta, self._frame_count))
        self._frame_count += 1

    async def run(self) -> None:
        """Main simulator loop."""
        self._setup_log_capture()
        try:
            self._init_pygame()
            self._running = True

            logger.info("Simulator started")

            while self._running:
                self._handle_events()

                delta = self._clock.get_time() / 1000.0 if self._clock else 0.0
                await self.step(delta)

                self._render()

                # Frame timing
                if self._clock:
                    self._clock.tick(self.config.fps)

                # Yield to other tasks
                await asyncio.sleep(0)
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.menu.close()
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="simulator"))
        pygame.quit()
        logger.info("Simulator stopped")
        if self._log_handler is not None:
            logging.getLogger().removeHandler(self._log_handler)
            self._log_handler = None

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
