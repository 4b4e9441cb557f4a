"""
Game Round Controller - presents the sequence, collects input and settles
each round with the game-state service
"""

from concurrent.futures import Future
from functools import partial
from typing import TYPE_CHECKING, Callable, Optional

from pad_system.pads import PadColor, color_to_index, colors_to_names
from service_client.errors import SequenceMismatch, StateServiceError

from .errors import InvalidTransition
from .round_state import RoundPhase, RoundState, can_transition

if TYPE_CHECKING:
    from display_system.interfaces import Board
    from service_client.state_client import GameStateClient
    from service_client.snapshot import GameStateSnapshot
    from service_client.worker import ServiceWorker
    from utils import ClassLogger, FrameScheduler


# Fixed game timing (ms)
CUE_SPACING_MS = 500      # between cue starts during playback
CUE_FLASH_MS = 300        # how long a pad stays lit
ADVANCE_DELAY_MS = 1000   # pause between an accepted round and the next playback


class GameRoundController:
    """
    Owns the round state and drives one round at a time.

    The service is the only source of sequences: the controller never
    generates or extends one. Every service call and every timer belongs to
    a round epoch; closing a round (reset or failure) cancels its timers and
    bumps the epoch, so responses for an older round are discarded.

    All methods must be called from the game loop thread. Operations the
    current phase does not accept raise InvalidTransition.
    """

    def __init__(self,
                 client: 'GameStateClient',
                 worker: 'ServiceWorker',
                 scheduler: 'FrameScheduler',
                 board: 'Board',
                 sound_controller,
                 logger: 'ClassLogger'):
        """
        Args:
            client: Game-state service client
            worker: Runs client calls off the loop, delivers results in poll()
            scheduler: Frame scheduler for cues and the advance delay
            board: Screen the round is shown on
            sound_controller: ToneController or MockToneController
            logger: Logger, errors reported here are the observability sink
        """
        self.client = client
        self.worker = worker
        self.scheduler = scheduler
        self.board = board
        self.sound_controller = sound_controller
        self.logger = logger

        self.state = RoundState()
        self.phase = RoundPhase.IDLE
        self.last_error: Optional[StateServiceError] = None

        self._round_loaded = False
        self._epoch = 0
        self._retry_action: Optional[Callable[[], None]] = None

        self._sync_controls()

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def start_enabled(self) -> bool:
        return self.phase is RoundPhase.IDLE and self._round_loaded

    @property
    def input_enabled(self) -> bool:
        return self.phase is RoundPhase.AWAITING_INPUT

    @property
    def retry_available(self) -> bool:
        return self._retry_action is not None

    @property
    def _timer_tag(self):
        return ("round", self._epoch)

    # Round operations

    def initialize(self) -> None:
        """Ask the service for a fresh game; start becomes available once it answers"""
        if self.phase is not RoundPhase.IDLE:
            raise InvalidTransition("initialize", self.phase)

        self._close_round()
        self._round_loaded = False
        self._clear_error()
        self.board.show_status("Loading a new game...")
        self._sync_controls()

        self.logger.info("Requesting a new game from the state service")
        self.worker.submit(self.client.reset_game, partial(self._on_reset_done, self._epoch))

    def start_round(self) -> None:
        if not self.start_enabled:
            reason = None if self.phase is not RoundPhase.IDLE else "no game loaded yet"
            raise InvalidTransition("start_round", self.phase, reason)

        self._transition(RoundPhase.AWAITING_INPUT)
        self.board.show_status("Watch the pads, then repeat the sequence")
        self.playback()

    def playback(self) -> None:
        """Clear the player's input and schedule one cue per sequence step"""
        if self.phase is not RoundPhase.AWAITING_INPUT:
            raise InvalidTransition("playback", self.phase)

        self.state.user_input.clear()
        tag = self._timer_tag
        for i, color in enumerate(self.state.sequence):
            self.scheduler.call_later(i * CUE_SPACING_MS, partial(self._cue, color), tag=tag)
        self.logger.debug(f"Playback scheduled: {colors_to_names(self.state.sequence)}")

    def submit_input(self, color: PadColor) -> None:
        """
        Record one pad press.

        The input is sent for validation once it is as long as the sequence;
        the service decides whether it matches.
        """
        if self.phase is not RoundPhase.AWAITING_INPUT:
            raise InvalidTransition("submit_input", self.phase)

        self.state.user_input.append(color)
        self._cue(color)
        self.logger.debug(f"Input {len(self.state.user_input)}/{len(self.state.sequence)}: {color.value}")

        if self.state.is_input_complete():
            self.validate()

    def validate(self) -> None:
        """Send the player's input to the service"""
        self._transition(RoundPhase.VALIDATING)
        self._submit_input()

    def advance_round(self) -> None:
        """Start the next round's playback after an accepted sequence"""
        if self.phase is not RoundPhase.ADVANCING_ROUND:
            raise InvalidTransition("advance_round", self.phase)

        self._transition(RoundPhase.AWAITING_INPUT)
        self.board.show_status(f"Level {self.state.level}: repeat the sequence")
        self.playback()

    def replay_round(self) -> None:
        """Play the current sequence again without asking the service"""
        if self.phase is not RoundPhase.AWAITING_INPUT:
            raise InvalidTransition("replay_round", self.phase)

        self.logger.info(f"Replaying sequence ({len(self.state.sequence)} cues)")
        self.playback()

    def acknowledge_failure(self) -> None:
        """Dismiss the failure indicator and load a new game"""
        if self.phase is not RoundPhase.FAILED:
            raise InvalidTransition("acknowledge_failure", self.phase)

        self.board.hide_failure()
        self._transition(RoundPhase.IDLE)
        self.initialize()

    def reset_game(self) -> None:
        """Abandon the current round (if any) and load a new game"""
        if self.phase is RoundPhase.FAILED:
            self.acknowledge_failure()
            return

        if self.phase is not RoundPhase.IDLE:
            self.logger.info(f"Round reset during {self.phase.name}")
            self._transition(RoundPhase.IDLE)
        self.initialize()

    def retry(self) -> None:
        """Repeat the service call that last failed with a transport error"""
        if self._retry_action is None:
            raise InvalidTransition("retry", self.phase, "nothing to retry")

        action = self._retry_action
        self._retry_action = None
        self.logger.info("Retrying last service call")
        action()

    # Service responses (delivered by ServiceWorker.poll on the loop thread)

    def _on_reset_done(self, epoch: int, future: Future) -> None:
        if epoch != self._epoch or self.phase is not RoundPhase.IDLE:
            self.logger.debug(f"Discarding stale reset response (epoch {epoch}, now {self._epoch})")
            return

        try:
            snapshot = future.result()
        except StateServiceError as e:
            self._report_failure("Could not load a new game", e, retry=self.initialize)
            return

        self._apply_snapshot(snapshot)
        self._round_loaded = True
        self.board.show_status("Press Start to play")
        self._sync_controls()
        self.logger.info(f"New game loaded: level {snapshot.level}, high score {snapshot.high_score}")

    def _on_validate_done(self, epoch: int, future: Future) -> None:
        if epoch != self._epoch or self.phase is not RoundPhase.VALIDATING:
            self.logger.debug(f"Discarding stale validation response (epoch {epoch}, now {self._epoch})")
            return

        try:
            snapshot = future.result()
        except SequenceMismatch:
            self.logger.info(f"Sequence rejected at level {self.state.level}")
            self._transition(RoundPhase.FAILED)
            self.board.show_failure()
            self.board.show_status("Wrong sequence! Press Reset to play again")
            return
        except StateServiceError as e:
            self._report_failure("Could not check the sequence", e, retry=self._submit_input)
            return

        self._apply_snapshot(snapshot)
        self._transition(RoundPhase.ADVANCING_ROUND)
        self.board.show_status(f"Correct! Level {snapshot.level} coming up")
        self.scheduler.call_later(ADVANCE_DELAY_MS, self.advance_round, tag=self._timer_tag)
        self.logger.info(f"Sequence accepted: level {snapshot.level}, high score {snapshot.high_score}")

    # Internals

    def _submit_input(self) -> None:
        submitted = list(self.state.user_input)
        self._clear_error()
        self.board.show_status("Checking your sequence...")
        self.worker.submit(self.client.submit_sequence, partial(self._on_validate_done, self._epoch), submitted)

    def _apply_snapshot(self, snapshot: 'GameStateSnapshot') -> None:
        """Replace the round state wholesale with the service's"""
        self.state = RoundState.from_snapshot(snapshot)
        self.board.set_level(self.state.level)
        self.board.set_high_score(self.state.high_score)

    def _cue(self, color: PadColor) -> None:
        index = color_to_index(color)
        self.board.flash_pad(index, CUE_FLASH_MS)
        self.sound_controller.play_tone(index)

    def _transition(self, new_phase: RoundPhase) -> None:
        if not can_transition(self.phase, new_phase):
            raise InvalidTransition(f"transition to {new_phase.name}", self.phase)

        old_phase = self.phase
        if new_phase in (RoundPhase.IDLE, RoundPhase.FAILED):
            self._close_round()
        self.phase = new_phase
        self.logger.info(f"Round phase: {old_phase.name} → {new_phase.name}")
        self._sync_controls()

    def _close_round(self) -> None:
        """Cancel the round's timers and invalidate its in-flight responses"""
        cancelled = self.scheduler.cancel_tag(self._timer_tag)
        if cancelled:
            self.logger.debug(f"Cancelled {cancelled} pending timers of epoch {self._epoch}")
        self._epoch += 1

    def _report_failure(self, message: str, error: StateServiceError, retry: Callable[[], None]) -> None:
        self.last_error = error
        self._retry_action = retry
        self.logger.error(f"{message}: {error}", exception=error)
        self.board.show_status(f"{message}: game service unavailable", retry_available=True)
        self._sync_controls()

    def _clear_error(self) -> None:
        self.last_error = None
        self._retry_action = None

    def _sync_controls(self) -> None:
        self.board.set_controls(
            start_enabled=self.start_enabled,
            replay_enabled=self.input_enabled,
            pads_enabled=self.input_enabled,
        )
