"""
Main entry point for the fabmenu demo.

Runs the pygame simulator, or with FABMENU_ENV=headless plays a scripted
toggle sequence on the tween engine and logs where the children end up.
"""

import asyncio
import logging
import sys

from fabmenu.animation.engine import Tweener
from fabmenu.config.presets import load_preset
from fabmenu.config.settings import Settings, get_settings
from fabmenu.core.events import EventBus, EventType, Event, toggle_event
from fabmenu.menu.fab import FabMenu


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_simulator(settings: Settings) -> None:
    """Run the simulator version."""
    from fabmenu.simulator.window import SimulatorWindow

    window = SimulatorWindow(settings=settings, event_bus=EventBus(), tweener=Tweener())
    await window.run()


def run_headless(settings: Settings, frame_dt: float = 1 / 60) -> list[dict]:
    """Expand, interrupt with a collapse, expand again and let it settle.

    Returns:
        Final child snapshot
    """
    logger = logging.getLogger(__name__)

    event_bus = EventBus()
    tweener = Tweener()
    menu = FabMenu.from_settings(settings, tweener, event_bus)

    def on_state_changed(event: Event) -> None:
        logger.info(f"Menu {event.data['from'].name} -> {event.data['to'].name} ({event.data['label']})")

    def on_settled(event: Event) -> None:
        logger.info(f"Children settled at {event.data['state'].name}")

    event_bus.subscribe(EventType.MENU_STATE_CHANGED, on_state_changed)
    event_bus.subscribe(EventType.ANIMATION_END, on_settled)

    def run_frames(seconds: float) -> None:
        for _ in range(round(seconds / frame_dt)):
            tweener.update(frame_dt)

    event_bus.emit(toggle_event(source="script"))
    run_frames(0.2)
    event_bus.emit(toggle_event(source="script"))  # interrupt the expand
    run_frames(0.1)
    event_bus.emit(toggle_event(source="script"))
    run_frames(2.0)

    snapshot = menu.snapshot()
    for i, child in enumerate(snapshot):
        logger.info(
            f"Child {i}: x={child['x']:.1f} y={child['y']:.1f} "
            f"rotation={child['rotation']:.0f} opacity={child['opacity']:.2f} "
            f"interactable={child['interactable']}"
        )
    menu.close()
    return snapshot


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("fabmenu starting...")

    if settings.preset:
        settings = load_preset(settings.preset, base=settings)

    try:
        if settings.is_simulator:
            logger.info("Running in simulator mode")
            asyncio.run(run_simulator(settings))
        else:
            logger.info("Running in headless mode")
            run_headless(settings)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("fabmenu stopped")


if __name__ == "__main__":
    main()
