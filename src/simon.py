#!/usr/bin/env python3
"""
Simon Game Client

Four colored pads, each with its own tone. The game-state service plays a
growing sequence; the player repeats it on the pads, in a pygame window or
straight from the terminal (--headless).
"""

import argparse
import logging
import signal
import sys
from typing import List, Optional

from audio_system import MockToneController, ToneController, Waveform
from display_system import ConsoleBoard
from game_system import GameManager, GameRoundController
from game_system.config import GameConfig
from game_system.errors import ConfigurationError
from pad_system import PAD_BINDINGS
from pad_system.keyboard_source import KeyboardInputSource
from service_client import GameStateClient, ServiceWorker
from utils import FrameScheduler, HybridLogger

# Global logger reference for signal handlers
_global_logger = None


def emergency_flush_and_log(sig=None, frame=None):
    """Flush logs and exit; the game loop's cleanup runs on the way out"""
    if _global_logger:
        _global_logger.critical(f"⚠️  SIGNAL RECEIVED: {sig} - Process terminating")
        _global_logger.flush()
    sys.exit(1)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simon memory game client")
    parser.add_argument("--service-url", help="Game-state service URL (default: $SIMON_SERVICE_URL or localhost)")
    parser.add_argument("--headless", action="store_true", default=None,
                        help="Play in the terminal without a window")
    parser.add_argument("--mock-audio", action="store_true", default=None,
                        help="Do not open an audio device")
    parser.add_argument("--waveform", choices=[w.value for w in Waveform], help="Initial pad voice")
    parser.add_argument("--fullscreen", action="store_true", default=None, help="Fullscreen window")
    parser.add_argument("--log-dir", help="Directory for log files (empty string disables file logging)")
    parser.add_argument("--debug", action="store_true", default=None, help="Debug logging")
    return parser.parse_args(argv)


def create_config(args: argparse.Namespace) -> GameConfig:
    """
    Environment first, command line on top.

    Raises:
        ConfigurationError: If a value is missing or invalid
    """
    config = GameConfig.from_env()

    if args.service_url is not None:
        config.service.base_url = args.service_url
    if args.headless is not None:
        config.display.headless = args.headless
    if args.mock_audio is not None:
        config.audio.use_mock = args.mock_audio
    if args.waveform is not None:
        config.audio.waveform = Waveform.from_name(args.waveform)
    if args.fullscreen is not None:
        config.display.fullscreen = args.fullscreen
    if args.log_dir is not None:
        config.log_dir = args.log_dir or None
    if args.debug is not None:
        config.debug = args.debug

    config.validate()
    return config


def create_game_system(config: GameConfig, simon_logger) -> GameManager:
    """
    Create and wire the complete game system using provided config.

    Args:
        config: Validated GameConfig
        simon_logger: ClassLogger instance for logging initialization steps

    Returns:
        GameManager: Configured game manager ready to run
    """
    level = logging.DEBUG if config.debug else logging.INFO

    # Create class loggers for components
    game_manager_logger = simon_logger.create_class_logger("GameManager", level)
    controller_logger = simon_logger.create_class_logger("RoundController", level)
    client_logger = simon_logger.create_class_logger("StateClient", level)
    worker_logger = simon_logger.create_class_logger("ServiceWorker", level)
    sound_logger = simon_logger.create_class_logger("ToneController", level)
    board_logger = simon_logger.create_class_logger("Board", level)
    input_logger = simon_logger.create_class_logger("Input", level)

    frequencies = [binding.frequency_hz for binding in PAD_BINDINGS]

    try:
        client = GameStateClient(
            base_url=config.service.base_url,
            timeout_s=config.service.timeout_s,
            logger=client_logger
        )
        worker = ServiceWorker(worker_logger)
        scheduler = FrameScheduler()

        if config.audio.use_mock:
            simon_logger.info("🔇 Using MockToneController (audio device disabled)")
            sound_controller = MockToneController(frequencies, sound_logger, waveform=config.audio.waveform)
        else:
            sound_controller = ToneController(
                frequencies,
                sound_logger,
                waveform=config.audio.waveform,
                volume=config.audio.volume,
                tone_duration_ms=config.audio.tone_duration_ms,
                sample_rate=config.audio.sample_rate
            )

        if config.display.headless:
            board = ConsoleBoard(board_logger)
            input_source = KeyboardInputSource(input_logger)
        else:
            # pygame display is only needed when a window is shown
            from display_system.pygame_board import PygameBoard
            from pad_system.pygame_source import PygameInputSource
            board = PygameBoard(
                board_logger,
                width=config.display.width,
                height=config.display.height,
                fullscreen=config.display.fullscreen
            )
            input_source = PygameInputSource(board, input_logger)
        board.set_waveform(config.audio.waveform)

        controller = GameRoundController(
            client=client,
            worker=worker,
            scheduler=scheduler,
            board=board,
            sound_controller=sound_controller,
            logger=controller_logger
        )

        game_manager = GameManager(
            controller=controller,
            input_source=input_source,
            board=board,
            scheduler=scheduler,
            worker=worker,
            sound_controller=sound_controller,
            logger=game_manager_logger,
            frame_duration_ms=config.frame_duration_ms
        )

        simon_logger.info("Simon game system initialized successfully")
        return game_manager

    except Exception as e:
        simon_logger.error(f"Failed to initialize Simon game system: {e}", exception=e)
        raise


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - sets up and runs the Simon game client.

    Returns:
        Process exit code
    """
    global _global_logger

    args = parse_args(argv)

    try:
        config = create_config(args)
    except ConfigurationError as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        return 2

    main_logger = HybridLogger("simon", log_dir=config.log_dir)
    simon_logger = main_logger.get_class_logger("Simon", logging.DEBUG if config.debug else logging.INFO)
    _global_logger = simon_logger

    # Register signal handlers for graceful shutdown
    signal.signal(signal.SIGTERM, emergency_flush_and_log)
    if hasattr(signal, "SIGHUP"):
        signal.signal(signal.SIGHUP, emergency_flush_and_log)

    simon_logger.info("🎮 SIMON")
    if main_logger.log_file:
        simon_logger.info(f"Log file: {main_logger.log_file}")
    simon_logger.info(f"Game service: {config.service.base_url} (timeout {config.service.timeout_s}s)")
    simon_logger.info(f"Display: {'terminal' if config.display.headless else 'window'}, "
                      f"{config.frame_duration_ms}ms frames ({config.target_fps:.1f} FPS)")
    simon_logger.info(f"Voice: {config.audio.waveform.value}{' (mock audio)' if config.audio.use_mock else ''}")

    try:
        game_manager = create_game_system(config, simon_logger)
        simon_logger.info("🚀 Starting Simon...")
        game_manager.run_game_loop()
        return 0

    except KeyboardInterrupt:
        simon_logger.info("⏹️  Simon stopped by user")
        return 0
    except Exception as e:
        simon_logger.error(f"Simon system error: {e}", exception=e)
        return 1
    finally:
        simon_logger.info("✅ Simon shut down")
        simon_logger.flush()
        main_logger.cleanup()
        _global_logger = None


if __name__ == "__main__":
    sys.exit(main())
