from .analyser_interface import IAudioAnalyser
from .spectrum_analyser import SpectrumAudioAnalyser

__all__ = ["IAudioAnalyser", "SpectrumAudioAnalyser"]
