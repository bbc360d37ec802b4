"""Sound effects synthesized from game notifications."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from neon_snake.engine import GameEvent

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_RATE = 22_050

Sink = Callable[[np.ndarray, int], None]


class Waveform(enum.Enum):
    SINE = "sine"
    SAWTOOTH = "sawtooth"
    TRIANGLE = "triangle"


class Ramp(enum.Enum):
    """How a parameter moves from its start to its end value."""

    CONSTANT = "constant"
    LINEAR = "linear"
    EXPONENTIAL = "exponential"


@dataclass(frozen=True)
class Tone:
    """A single oscillator note with frequency and gain envelopes."""

    waveform: Waveform
    duration: float
    start_hz: float
    end_hz: float
    start_gain: float
    end_gain: float
    frequency_ramp: Ramp = Ramp.EXPONENTIAL
    gain_ramp: Ramp = Ramp.EXPONENTIAL

    def __post_init__(self) -> None:
        if self.duration <= 0:
            raise ValueError("duration must be positive.")
        # Exponential ramps are undefined at or through zero.
        if self.frequency_ramp == Ramp.EXPONENTIAL and min(self.start_hz, self.end_hz) <= 0:
            raise ValueError("exponential frequency ramp needs positive endpoints.")
        if self.gain_ramp == Ramp.EXPONENTIAL and min(self.start_gain, self.end_gain) <= 0:
            raise ValueError("exponential gain ramp needs positive endpoints.")


TONES: dict[GameEvent, Tone] = {
    GameEvent.EAT: Tone(
        Waveform.SINE, 0.1, 600.0, 1000.0, 0.3, 0.01,
    ),
    GameEvent.DIE: Tone(
        Waveform.SAWTOOTH, 0.3, 200.0, 50.0, 0.3, 0.01,
        gain_ramp=Ramp.LINEAR,
    ),
    GameEvent.MOVE: Tone(
        Waveform.TRIANGLE, 0.03, 800.0, 800.0, 0.05, 0.01,
        frequency_ramp=Ramp.CONSTANT,
    ),
}
TONES[GameEvent.START] = TONES[GameEvent.MOVE]


def _envelope(start: float, end: float, ramp: Ramp, progress: np.ndarray) -> np.ndarray:
    if ramp == Ramp.CONSTANT:
        return np.full_like(progress, start)
    if ramp == Ramp.LINEAR:
        return start + (end - start) * progress
    return start * (end / start) ** progress


def synthesize(tone: Tone, sample_rate: int = DEFAULT_SAMPLE_RATE) -> np.ndarray:
    """Render *tone* to mono float32 samples in ``[-1, 1]``."""
    if sample_rate <= 0:
        raise ValueError("sample_rate must be positive.")
    n = max(1, int(round(tone.duration * sample_rate)))
    progress = np.arange(n, dtype=np.float64) / n

    freq = _envelope(tone.start_hz, tone.end_hz, tone.frequency_ramp, progress)
    # Integrate frequency so sweeps stay phase-continuous.
    cycles = np.cumsum(freq) / sample_rate
    frac = cycles - np.floor(cycles)

    if tone.waveform == Waveform.SINE:
        wave = np.sin(2.0 * np.pi * cycles)
    elif tone.waveform == Waveform.SAWTOOTH:
        wave = 2.0 * frac - 1.0
    else:
        wave = 1.0 - 4.0 * np.abs(frac - 0.5)

    gain = _envelope(tone.start_gain, tone.end_gain, tone.gain_ramp, progress)
    return (wave * gain).astype(np.float32)


class AudioAdapter:
    """Engine listener that turns notifications into sample buffers.

    The *sink* receives ``(samples, sample_rate)`` and is expected to play
    them. Failures anywhere in synthesis or playback are logged and
    dropped; sound never interrupts the game.
    """

    def __init__(
        self,
        sink: Sink,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        muted: bool = False,
        play_moves: bool = False,
    ) -> None:
        self.sink = sink
        self.sample_rate = sample_rate
        self.muted = muted
        self.play_moves = play_moves

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        return self.muted

    def __call__(self, event: GameEvent) -> None:
        if self.muted:
            return
        if event == GameEvent.MOVE and not self.play_moves:
            return
        tone = TONES.get(event)
        if tone is None:
            return
        try:
            self.sink(synthesize(tone, self.sample_rate), self.sample_rate)
        except Exception:
            logger.warning("Audio playback failed for %s.", event.value, exc_info=True)
