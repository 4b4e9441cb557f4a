"""
Game system configuration
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional
from urllib.parse import urlparse

from audio_system.waveforms import Waveform
from service_client.state_client import DEFAULT_SERVICE_URL

from .errors import ConfigurationError


@dataclass
class ServiceConfig:
    """Game-state service connection"""
    base_url: str = DEFAULT_SERVICE_URL
    timeout_s: float = 5.0


@dataclass
class AudioConfig:
    """Pad voice configuration"""
    waveform: Waveform = Waveform.SINE
    volume: float = 0.6
    tone_duration_ms: int = 250
    sample_rate: int = 44100
    use_mock: bool = False  # True to run without an audio device


@dataclass
class DisplayConfig:
    """Screen configuration"""
    headless: bool = False  # True for terminal play (no window)
    width: int = 640
    height: int = 760
    fullscreen: bool = False


@dataclass
class GameConfig:
    """Main game configuration"""

    service: ServiceConfig = field(default_factory=ServiceConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    # Timing configuration
    frame_duration_ms: float = 16.0  # ~60 FPS

    # Logging
    log_dir: Optional[str] = "logs"
    debug: bool = False

    @property
    def target_fps(self) -> float:
        """Target FPS derived from frame duration"""
        return 1000.0 / self.frame_duration_ms

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = None) -> 'GameConfig':
        """
        Build a config from SIMON_* environment variables, defaults for the rest.

        Variables: SIMON_SERVICE_URL, SIMON_SERVICE_TIMEOUT_S, SIMON_WAVEFORM,
        SIMON_VOLUME, SIMON_MOCK_AUDIO, SIMON_HEADLESS, SIMON_FULLSCREEN,
        SIMON_FRAME_MS, SIMON_LOG_DIR, SIMON_DEBUG

        Raises:
            ConfigurationError: If a variable cannot be parsed
        """
        env = os.environ if environ is None else environ
        config = cls()
        try:
            config.service.base_url = env.get('SIMON_SERVICE_URL', config.service.base_url)
            config.service.timeout_s = float(env.get('SIMON_SERVICE_TIMEOUT_S', config.service.timeout_s))
            config.audio.waveform = Waveform.from_name(env.get('SIMON_WAVEFORM', config.audio.waveform.value))
            config.audio.volume = float(env.get('SIMON_VOLUME', config.audio.volume))
            config.audio.use_mock = _env_flag(env, 'SIMON_MOCK_AUDIO', config.audio.use_mock)
            config.display.headless = _env_flag(env, 'SIMON_HEADLESS', config.display.headless)
            config.display.fullscreen = _env_flag(env, 'SIMON_FULLSCREEN', config.display.fullscreen)
            config.frame_duration_ms = float(env.get('SIMON_FRAME_MS', config.frame_duration_ms))
            config.debug = _env_flag(env, 'SIMON_DEBUG', config.debug)
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment configuration: {e}") from e
        if 'SIMON_LOG_DIR' in env:
            config.log_dir = env['SIMON_LOG_DIR'] or None
        return config

    def validate(self) -> None:
        """
        Basic validation of configuration

        Raises:
            ConfigurationError: On the first invalid value found
        """
        url = urlparse(self.service.base_url)
        if url.scheme not in ('http', 'https') or not url.netloc:
            raise ConfigurationError(f"Service URL must be http(s)://host/..., got {self.service.base_url!r}")

        if self.service.timeout_s <= 0:
            raise ConfigurationError(f"Service timeout must be positive, got {self.service.timeout_s}")

        if not (0.0 <= self.audio.volume <= 1.0):
            raise ConfigurationError(f"Volume must be 0.0-1.0, got {self.audio.volume}")

        if self.audio.tone_duration_ms <= 0:
            raise ConfigurationError(f"Tone duration must be positive, got {self.audio.tone_duration_ms}")

        if self.audio.sample_rate < 8000:
            raise ConfigurationError(f"Sample rate too low: {self.audio.sample_rate}")

        if self.frame_duration_ms <= 0:
            raise ConfigurationError("Frame duration must be positive")

        if self.display.width < 320 or self.display.height < 400:
            raise ConfigurationError(
                f"Window too small: {self.display.width}x{self.display.height} (minimum 320x400)"
            )


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    value = env.get(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in ('1', 'true', 'yes', 'on'):
        return True
    if value in ('0', 'false', 'no', 'off', ''):
        return False
    raise ValueError(f"{name} must be a boolean flag, got {value!r}")
