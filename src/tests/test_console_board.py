import pytest

from audio_system import MockToneController, Waveform
from display_system import Pixel


def test_board_tracks_what_is_shown(board):
    board.set_controls(start_enabled=True, replay_enabled=False, pads_enabled=False)
    board.set_level(3)
    board.set_high_score(9)
    board.show_failure()
    board.show_status("Service down", retry_available=True)

    assert board.start_enabled
    assert board.level == 3
    assert board.high_score == 9
    assert board.failure_visible
    assert board.retry_available

    board.hide_failure()
    assert not board.failure_visible


def test_mock_tone_controller_records_pads(logger):
    sound = MockToneController([261.63, 293.66], logger)
    sound.play_tone(1)
    sound.set_waveform(Waveform.TRIANGLE)

    assert sound.played == [1]
    assert sound.waveform is Waveform.TRIANGLE
    with pytest.raises(IndexError):
        sound.play_tone(2)


def test_pixel_channels():
    pixel = Pixel(0xD6, 0x28, 0x28)
    assert pixel.rgb == (0xD6, 0x28, 0x28)
    assert pixel.scaled(0.5).rgb == (0x6B, 0x14, 0x14)
    assert pixel.scaled(2.0).r == 255
