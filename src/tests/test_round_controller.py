"""
Round controller behaviour: the phase machine, playback timing, validation
outcomes, retry after transport errors, and stale responses after a reset.
"""

import pytest

from conftest import snapshot
from game_system import ADVANCE_DELAY_MS, CUE_SPACING_MS, InvalidTransition, RoundPhase
from pad_system import PadColor
from service_client import SequenceMismatch, TransportError

RED, YELLOW, GREEN, BLUE = PadColor.RED, PadColor.YELLOW, PadColor.GREEN, PadColor.BLUE


def start_with(controller, client, settle, *colors):
    """Load a game with the given sequence and start the first round"""
    client.reset_results.append(snapshot(*colors))
    controller.initialize()
    settle()
    controller.start_round()


class TestInitialize:

    def test_starts_idle_with_controls_disabled(self, controller, board):
        assert controller.phase is RoundPhase.IDLE
        assert not board.start_enabled
        assert not board.pads_enabled
        assert not board.replay_enabled

    def test_loaded_game_enables_start(self, controller, client, board, settle):
        client.reset_results.append(snapshot(RED, high_score=7))
        controller.initialize()

        assert not board.start_enabled  # still waiting for the service
        settle()

        assert client.reset_calls == 1
        assert controller.state.sequence == [RED]
        assert controller.state.level == 1
        assert controller.state.high_score == 7
        assert board.high_score == 7
        assert board.start_enabled
        assert controller.phase is RoundPhase.IDLE

    def test_not_allowed_during_a_round(self, ready_controller):
        ready_controller.start_round()
        with pytest.raises(InvalidTransition):
            ready_controller.initialize()

    def test_start_before_game_loaded_is_rejected(self, controller):
        with pytest.raises(InvalidTransition, match="no game loaded"):
            controller.start_round()


class TestPlayback:

    def test_single_pad_round(self, controller, client, board, sound, scheduler, settle):
        start_with(controller, client, settle, RED)
        assert controller.phase is RoundPhase.AWAITING_INPUT

        scheduler.run_due()
        assert board.flashes == [0]
        assert sound.played == [0]

        client.submit_results.append(snapshot(RED, YELLOW, level=2))
        controller.submit_input(RED)

        assert controller.phase is RoundPhase.VALIDATING
        assert client.submitted == []  # not sent until the worker runs
        settle()
        assert client.submitted == [[RED]]

    def test_cues_are_spaced(self, controller, client, board, scheduler, clock, settle):
        start_with(controller, client, settle, RED, GREEN, BLUE)

        scheduler.run_due()
        assert board.flashes == [0]

        clock.advance_ms(CUE_SPACING_MS - 1)
        scheduler.run_due()
        assert board.flashes == [0]

        clock.advance_ms(1)
        scheduler.run_due()
        assert board.flashes == [0, 2]

        clock.advance_ms(CUE_SPACING_MS)
        scheduler.run_due()
        assert board.flashes == [0, 2, 3]

    def test_playback_clears_input_before_cues(self, controller, client, scheduler, settle):
        start_with(controller, client, settle, RED, YELLOW)
        controller.submit_input(RED)
        assert controller.state.user_input == [RED]

        controller.playback()

        assert controller.state.user_input == []
        assert scheduler.pending_count() >= 2

    def test_replay_twice_schedules_two_full_playbacks(self, controller, client, board, scheduler, clock, settle):
        start_with(controller, client, settle, RED, YELLOW)
        scheduler.run_due()
        clock.advance_ms(CUE_SPACING_MS)
        scheduler.run_due()
        before = (list(controller.state.sequence), controller.state.level, controller.state.high_score)
        board.flashes.clear()

        controller.replay_round()
        controller.replay_round()
        clock.advance_ms(CUE_SPACING_MS)
        scheduler.run_due()

        assert board.flashes == [0, 0, 1, 1]
        assert (list(controller.state.sequence), controller.state.level, controller.state.high_score) == before
        assert client.submitted == []

    def test_replay_only_while_awaiting_input(self, ready_controller):
        with pytest.raises(InvalidTransition):
            ready_controller.replay_round()


class TestSubmitInput:

    def test_partial_input_keeps_awaiting(self, controller, client, settle):
        start_with(controller, client, settle, RED, YELLOW, GREEN)

        controller.submit_input(RED)
        controller.submit_input(YELLOW)

        assert controller.phase is RoundPhase.AWAITING_INPUT
        assert controller.state.user_input == [RED, YELLOW]
        settle()
        assert client.submitted == []

    def test_complete_input_validates_exactly_once(self, controller, client, settle):
        start_with(controller, client, settle, RED, YELLOW)
        client.submit_results.append(snapshot(RED, YELLOW, BLUE))

        controller.submit_input(RED)
        controller.submit_input(YELLOW)
        settle()

        assert client.submitted == [[RED, YELLOW]]
        with pytest.raises(InvalidTransition):
            controller.submit_input(BLUE)

    def test_wrong_color_waits_for_complete_input(self, controller, client, board, settle):
        start_with(controller, client, settle, RED, YELLOW, GREEN)
        client.submit_results.append(SequenceMismatch("wrong"))

        controller.submit_input(BLUE)
        settle()
        assert client.submitted == []
        assert controller.phase is RoundPhase.AWAITING_INPUT
        assert not board.failure_visible

        controller.submit_input(YELLOW)
        controller.submit_input(GREEN)
        settle()

        assert client.submitted == [[BLUE, YELLOW, GREEN]]
        assert controller.phase is RoundPhase.FAILED
        assert board.failure_visible

    def test_input_rejected_outside_a_round(self, ready_controller):
        with pytest.raises(InvalidTransition, match="IDLE"):
            ready_controller.submit_input(RED)

    def test_pressed_pad_is_cued(self, controller, client, board, sound, settle):
        start_with(controller, client, settle, RED, YELLOW)
        controller.submit_input(RED)

        assert board.flashes[-1] == 0
        assert sound.played[-1] == 0


class TestValidation:

    def test_accepted_sequence_advances_after_delay(self, controller, client, board, scheduler, clock, settle):
        start_with(controller, client, settle, RED)
        scheduler.run_due()
        client.submit_results.append(snapshot(RED, YELLOW, level=2, high_score=0))

        controller.submit_input(RED)
        settle()

        assert controller.phase is RoundPhase.ADVANCING_ROUND
        assert controller.state.sequence == [RED, YELLOW]
        assert controller.state.level == 2
        assert controller.state.user_input == []
        assert board.level == 2
        assert board.high_score == 0
        assert not board.pads_enabled
        flashes = len(board.flashes)

        clock.advance_ms(ADVANCE_DELAY_MS - 1)
        scheduler.run_due()
        assert controller.phase is RoundPhase.ADVANCING_ROUND
        assert len(board.flashes) == flashes

        clock.advance_ms(1)
        scheduler.run_due()
        assert controller.phase is RoundPhase.AWAITING_INPUT
        assert board.flashes[flashes:] == [0]

        clock.advance_ms(CUE_SPACING_MS)
        scheduler.run_due()
        assert board.flashes[flashes:] == [0, 1]

    def test_input_rejected_while_advancing(self, controller, client, settle):
        start_with(controller, client, settle, RED)
        client.submit_results.append(snapshot(RED, YELLOW))
        controller.submit_input(RED)
        settle()

        with pytest.raises(InvalidTransition, match="ADVANCING_ROUND"):
            controller.submit_input(RED)

    def test_mismatch_shows_failure_until_acknowledged(self, controller, client, board, settle):
        start_with(controller, client, settle, RED)
        client.submit_results.append(SequenceMismatch("wrong"))
        controller.submit_input(RED)
        settle()

        assert controller.phase is RoundPhase.FAILED
        assert board.failure_visible
        assert not board.start_enabled
        assert not board.pads_enabled
        with pytest.raises(InvalidTransition):
            controller.start_round()
        assert board.failure_visible

        resets_before = client.reset_calls
        client.reset_results.append(snapshot(GREEN))
        controller.acknowledge_failure()
        settle()

        assert client.reset_calls == resets_before + 1
        assert not board.failure_visible
        assert controller.phase is RoundPhase.IDLE
        assert controller.state.sequence == [GREEN]

    def test_acknowledge_only_after_failure(self, ready_controller):
        with pytest.raises(InvalidTransition):
            ready_controller.acknowledge_failure()

    def test_advance_only_after_accepted_round(self, ready_controller):
        with pytest.raises(InvalidTransition):
            ready_controller.advance_round()


class TestTransportErrors:

    def test_failed_load_offers_retry(self, controller, client, board, settle):
        client.reset_results.append(TransportError("connection refused"))
        controller.initialize()
        settle()

        assert isinstance(controller.last_error, TransportError)
        assert controller.retry_available
        assert board.retry_available
        assert not board.start_enabled

        client.reset_results.append(snapshot(BLUE))
        controller.retry()
        settle()

        assert client.reset_calls == 2
        assert controller.last_error is None
        assert board.start_enabled
        assert not board.retry_available

    def test_failed_validation_stalls_then_retries_same_input(self, controller, client, settle):
        start_with(controller, client, settle, RED, YELLOW)
        client.submit_results.append(TransportError("timed out"))
        controller.submit_input(RED)
        controller.submit_input(YELLOW)
        settle()

        assert controller.phase is RoundPhase.VALIDATING
        assert controller.state.sequence == [RED, YELLOW]
        assert controller.retry_available

        client.submit_results.append(snapshot(RED, YELLOW, GREEN))
        controller.retry()
        settle()

        assert client.submitted == [[RED, YELLOW], [RED, YELLOW]]
        assert controller.phase is RoundPhase.ADVANCING_ROUND

    def test_retry_without_failure_is_rejected(self, ready_controller):
        with pytest.raises(InvalidTransition, match="nothing to retry"):
            ready_controller.retry()


class TestReset:

    def test_reset_discards_in_flight_validation(self, controller, client, executor, settle):
        start_with(controller, client, settle, RED)
        client.submit_results.append(snapshot(RED, YELLOW, level=2, high_score=5))
        controller.submit_input(RED)

        client.reset_results.append(snapshot(BLUE))
        controller.reset_game()
        assert controller.phase is RoundPhase.IDLE
        settle()

        assert client.submitted == [[RED]]
        assert controller.phase is RoundPhase.IDLE
        assert controller.state.sequence == [BLUE]
        assert controller.state.high_score == 0

    def test_reset_cancels_pending_cues(self, controller, client, board, scheduler, clock, settle):
        start_with(controller, client, settle, RED, YELLOW, GREEN)
        scheduler.run_due()
        assert board.flashes == [0]

        client.reset_results.append(snapshot(BLUE))
        controller.reset_game()
        clock.advance_ms(5 * CUE_SPACING_MS)
        scheduler.run_due()

        assert board.flashes == [0]
        assert scheduler.pending_count() == 0

    def test_reset_cancels_advance_delay(self, controller, client, scheduler, clock, settle):
        start_with(controller, client, settle, RED)
        client.submit_results.append(snapshot(RED, YELLOW))
        controller.submit_input(RED)
        settle()
        assert controller.phase is RoundPhase.ADVANCING_ROUND

        client.reset_results.append(snapshot(GREEN))
        controller.reset_game()
        settle()
        clock.advance_ms(ADVANCE_DELAY_MS)
        scheduler.run_due()

        assert controller.phase is RoundPhase.IDLE
        assert controller.state.sequence == [GREEN]

    def test_second_reset_wins(self, controller, client, settle):
        client.reset_results.extend([snapshot(RED), snapshot(YELLOW)])
        controller.initialize()
        controller.reset_game()
        settle()

        assert client.reset_calls == 2
        assert controller.state.sequence == [YELLOW]

    def test_reset_while_failed_acknowledges(self, controller, client, board, settle):
        start_with(controller, client, settle, RED)
        client.submit_results.append(SequenceMismatch("wrong"))
        controller.submit_input(YELLOW)
        settle()
        assert board.failure_visible

        client.reset_results.append(snapshot(GREEN))
        controller.reset_game()
        settle()

        assert not board.failure_visible
        assert controller.phase is RoundPhase.IDLE
        assert board.start_enabled

    def test_each_closed_round_bumps_epoch(self, controller, client, settle):
        start_with(controller, client, settle, RED)
        epoch = controller.epoch

        client.reset_results.append(snapshot(RED))
        controller.reset_game()

        assert controller.epoch > epoch
