"""
Main game manager - runs the frame loop that feeds input to the round
controller and delivers timers and service responses
"""

import time
from typing import TYPE_CHECKING

import psutil

from pad_system.events import ControlAction, ControlPressed, InputEvent, PadPressed, WaveformSelected
from pad_system.pads import index_to_color
from utils import OnceInMs

from .errors import InvalidTransition

if TYPE_CHECKING:
    from display_system.interfaces import Board
    from pad_system.interfaces import IInputSource
    from service_client.worker import ServiceWorker
    from utils import ClassLogger, FrameScheduler
    from .round_controller import GameRoundController


class GameManager:
    """
    Main game manager that orchestrates the entire game system.

    Responsibilities:
    - Turn input events into round controller operations
    - Deliver finished service calls and due timers on the loop thread
    - Maintain consistent frame timing
    """

    def __init__(self,
                 controller: 'GameRoundController',
                 input_source: 'IInputSource',
                 board: 'Board',
                 scheduler: 'FrameScheduler',
                 worker: 'ServiceWorker',
                 sound_controller,
                 logger: 'ClassLogger',
                 frame_duration_ms: float = 16.0):
        """
        Initialize the game manager.

        Args:
            controller: Round controller the input drives
            input_source: Where player input comes from (window or terminal)
            board: Screen, rendered once per frame
            scheduler: Frame scheduler shared with the controller
            worker: Service worker shared with the controller
            sound_controller: ToneController or MockToneController
            logger: Logger for debugging and monitoring
            frame_duration_ms: Target frame duration in milliseconds
        """
        self.controller = controller
        self.input_source = input_source
        self.board = board
        self.scheduler = scheduler
        self.worker = worker
        self.sound_controller = sound_controller
        self.logger = logger
        self.target_frame_duration = frame_duration_ms / 1000.0
        self.running = True
        self._stopped = False

        # Memory monitoring using OnceInMs
        self._memory_monitor = OnceInMs(60000)  # Log every 60 seconds
        self._process = psutil.Process()

        self.logger.info(f"GameManager initialized: {frame_duration_ms}ms frame duration")

    def run_game_loop(self) -> None:
        """
        Load the first game, then run the loop with frame duration limiting
        until quit is requested.
        """
        self.logger.info(f"Starting game loop with {int(self.target_frame_duration * 1000)}ms frame duration")

        try:
            self.input_source.setup()
            self.controller.initialize()

            while self.running:
                frame_start = time.monotonic()

                self.update()

                # Frame duration limiting
                frame_duration = time.monotonic() - frame_start
                sleep_time = self.target_frame_duration - frame_duration

                if sleep_time > 0:
                    time.sleep(sleep_time)

        except KeyboardInterrupt:
            self.logger.info("Game stopped by user (Ctrl+C)")
            self.logger.flush()
        except Exception as e:
            self.logger.error(f"Game loop error: {e}", exception=e)
            raise
        finally:
            self.stop()

    def update(self) -> None:
        """
        One frame: input, service responses, timers, then drawing.
        """
        if self._memory_monitor.should_execute():
            self._log_memory_usage()

        # 1. Player input
        for event in self.input_source.poll_events():
            self._dispatch(event)
            if not self.running:
                return

        # 2. Service responses
        self.worker.poll()

        # 3. Cues and the advance delay
        self.scheduler.run_due()

        # 4. Draw
        self.board.render()

    def _dispatch(self, event: InputEvent) -> None:
        """Route one input event; operations the round does not accept right now are ignored"""
        try:
            if isinstance(event, PadPressed):
                self.controller.submit_input(index_to_color(event.pad_index))
            elif isinstance(event, WaveformSelected):
                self.sound_controller.set_waveform(event.waveform)
                self.board.set_waveform(event.waveform)
            elif isinstance(event, ControlPressed):
                self._dispatch_control(event.action)
        except InvalidTransition as e:
            self.logger.debug(f"Ignored input: {e}")

    def _dispatch_control(self, action: ControlAction) -> None:
        if action is ControlAction.QUIT:
            self.logger.info("Quit requested")
            self.running = False
        elif action is ControlAction.START:
            self.controller.start_round()
        elif action is ControlAction.REPLAY:
            self.controller.replay_round()
        elif action is ControlAction.RESET:
            self.controller.reset_game()
        elif action is ControlAction.RETRY:
            self.controller.retry()

    def stop(self) -> None:
        """Stop the game and clean up resources."""
        self.running = False
        if self._stopped:
            return
        self._stopped = True

        self.worker.shutdown(wait=False)
        self.scheduler.cancel_all()
        self.controller.client.close()

        # Cleanup sound controller first (properly close the audio device)
        if self.sound_controller:
            self.sound_controller.cleanup()

        self.input_source.cleanup()
        self.board.cleanup()

        self.logger.info("Game stopped")

    def _log_memory_usage(self) -> None:
        """Log current memory and CPU usage (process and system)"""
        try:
            mem_info = self._process.memory_info()
            process_mb = mem_info.rss / 1024 / 1024  # Resident Set Size in MB
            process_cpu_percent = self._process.cpu_percent(interval=None)

            sys_mem = psutil.virtual_memory()
            sys_total_mb = sys_mem.total / 1024 / 1024
            sys_used_mb = sys_mem.used / 1024 / 1024
            sys_cpu_percent = psutil.cpu_percent(interval=None)

            self.logger.info(
                f"💾 Memory - Process: {process_mb:.1f}MB | "
                f"System: {sys_used_mb:.0f}/{sys_total_mb:.0f}MB ({sys_mem.percent:.1f}%) | "
                f"⚙️  CPU - Process: {process_cpu_percent:.1f}% | System: {sys_cpu_percent:.1f}%"
            )
        except psutil.Error as e:
            self.logger.warning(f"Failed to log system usage: {e}")
