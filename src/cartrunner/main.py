"""
Main entry point for Cart Runner.
"""

import asyncio
import logging
import random
import sys

from cartrunner.config.settings import Settings, get_settings


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_game(settings: Settings) -> None:
    """Build the session and run the window until it closes."""
    from cartrunner.app.window import GameWindow
    from cartrunner.assets.store import AssetStore, image_manifest
    from cartrunner.audio.engine import AudioEngine
    from cartrunner.audio.loudness import LoudnessSensor
    from cartrunner.core.events import EventBus
    from cartrunner.game.session import GameSession
    from cartrunner.game.trigger import AudioLevelState
    from cartrunner.storage.highscore import HighScoreStore

    event_bus = EventBus()

    audio = AudioEngine(settings.assets_path)
    audio.init()
    audio.attach(event_bus)

    sensor = LoudnessSensor(AudioLevelState(), settings.voice)
    assets = AssetStore(
        settings.assets_path,
        image_manifest(settings.round.product_count, settings.round.confetti_frames),
    )

    session = GameSession(
        settings,
        event_bus,
        HighScoreStore(settings.highscore_file),
        rng=random.Random(settings.seed),
        sensor=sensor,
    )

    window = GameWindow(settings, event_bus, session, assets, sensor=sensor)
    try:
        await window.run()
    finally:
        audio.cleanup()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("Cart Runner starting...")

    try:
        asyncio.run(run_game(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Cart Runner stopped")


if __name__ == "__main__":
    main()
