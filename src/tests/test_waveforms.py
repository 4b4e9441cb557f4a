import pytest

from audio_system import Waveform, sample_at, synthesize


@pytest.mark.parametrize("waveform", list(Waveform))
def test_samples_stay_in_range(waveform):
    for step in range(100):
        assert -1.0 <= sample_at(waveform, step / 100) <= 1.0


def test_shapes_at_known_phases():
    assert sample_at(Waveform.SINE, 0.25) == pytest.approx(1.0)
    assert sample_at(Waveform.SQUARE, 0.1) == 1.0
    assert sample_at(Waveform.SQUARE, 0.6) == -1.0
    assert sample_at(Waveform.TRIANGLE, 0.0) == -1.0
    assert sample_at(Waveform.TRIANGLE, 0.5) == 1.0
    assert sample_at(Waveform.SAWTOOTH, 0.0) == -1.0
    assert sample_at(Waveform.SAWTOOTH, 0.75) == pytest.approx(0.5)


def test_synthesize_length_and_fades():
    samples = synthesize(440.0, Waveform.SQUARE, duration_ms=100, sample_rate=8000, amplitude=0.5)

    assert len(samples) == 800
    assert samples.typecode == 'h'
    assert samples[0] == 0
    assert samples[-1] == 0
    assert max(abs(s) for s in samples) <= int(32767 * 0.5)
    assert max(samples) > 16000  # full level between the fades


def test_synthesize_rejects_bad_input():
    with pytest.raises(ValueError):
        synthesize(0, Waveform.SINE, 100)
    with pytest.raises(ValueError):
        synthesize(440, Waveform.SINE, 100, amplitude=1.5)


def test_waveform_names():
    assert Waveform.from_name("Triangle") is Waveform.TRIANGLE
    with pytest.raises(ValueError, match="choose from"):
        Waveform.from_name("noise")
