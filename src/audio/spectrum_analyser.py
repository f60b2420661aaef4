"""
Spectrum audio analyser

Maps live audio to colour: bass energy drives red, mids green, treble blue.
PCM blocks are pushed in with feed() (by the audio bridge or a capture task);
get_rgb() is cheap and is called once per frame by the controller.

Small FFT (1024 samples) so it keeps up on a Raspberry Pi.
"""

from typing import Optional

import numpy as np

from audio.analyser_interface import IAudioAnalyser
from models.color import Color
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.AUDIO)

# -- Audio constants -------------------------------------------------------
SAMPLE_RATE = 44100
FFT_SIZE = 1024

# -- FFT band boundaries (bin indices for 1024-point FFT at 44100 Hz) ------
# Bin resolution: 44100 / 1024 ~ 43.07 Hz per bin
BASS_LOW, BASS_HIGH = 1, 6          # ~43 - 258 Hz
MID_LOW, MID_HIGH = 6, 93           # ~258 - 4000 Hz
TREBLE_LOW, TREBLE_HIGH = 93, 372   # ~4000 - 16000 Hz

# -- Smoothing --------------------------------------------------------------
ATTACK = 0.6    # EMA weight when a band rises
RELEASE = 0.15  # EMA weight when a band falls
PEAK_DECAY = 0.995


class SpectrumAudioAnalyser(IAudioAnalyser):
    """
    Band-energy to RGB mapper

    Each band is normalised against its own slowly decaying peak, so quiet
    and loud music both use the full 0-255 range.
    """

    def __init__(self, fft_size: int = FFT_SIZE):
        self.fft_size = fft_size
        self._window = np.hanning(fft_size)
        self._levels = np.zeros(3)
        self._peaks = np.full(3, 1e-6)
        self._last: Optional[Color] = None

    def feed(self, samples) -> Color:
        """
        Analyse one block of mono or interleaved-stereo int16/float samples

        Returns:
            The colour for this block (also what get_rgb() returns next)
        """
        mono = np.asarray(samples, dtype=np.float64)
        if mono.ndim == 2:
            mono = mono.mean(axis=1)
        if mono.size < self.fft_size:
            mono = np.pad(mono, (0, self.fft_size - mono.size))
        mono = mono[-self.fft_size:]

        spectrum = np.abs(np.fft.rfft(mono * self._window))
        bands = np.array([
            float(np.mean(spectrum[BASS_LOW:BASS_HIGH + 1])),
            float(np.mean(spectrum[MID_LOW:MID_HIGH + 1])),
            float(np.mean(spectrum[TREBLE_LOW:min(TREBLE_HIGH + 1, len(spectrum))])),
        ])

        alpha = np.where(bands > self._levels, ATTACK, RELEASE)
        self._levels = self._levels + alpha * (bands - self._levels)
        self._peaks = np.maximum(self._peaks * PEAK_DECAY, self._levels)

        r, g, b = (self._levels / self._peaks * 255.0).tolist()
        self._last = Color.from_rgb(r, g, b)
        return self._last

    def get_rgb(self) -> Color:
        if self._last is None:
            return Color.black()
        return self._last

    def reset(self) -> None:
        self._levels = np.zeros(3)
        self._peaks = np.full(3, 1e-6)
        self._last = None
