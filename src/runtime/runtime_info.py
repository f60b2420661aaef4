import importlib.util
import sys
from pathlib import Path

# The device-tree model string is the reliable probe on current Raspberry Pi OS;
# older kernels only expose the board name in cpuinfo.
PI_MODEL_FILES = (Path("/proc/device-tree/model"), Path("/proc/cpuinfo"))


class RuntimeInfo:
    """Decides whether the hardware factories may touch real pins"""

    @classmethod
    def is_raspberry_pi(cls) -> bool:
        if not sys.platform.startswith("linux"):
            return False
        for path in PI_MODEL_FILES:
            try:
                if "Raspberry Pi" in path.read_text(errors="ignore"):
                    return True
            except OSError:
                continue
        return False

    @classmethod
    def has_ws281x(cls) -> bool:
        return cls._importable("rpi_ws281x")

    @classmethod
    def has_gpio(cls) -> bool:
        return cls._importable("RPi.GPIO")

    @staticmethod
    def _importable(module_name: str) -> bool:
        try:
            return importlib.util.find_spec(module_name) is not None
        except (ImportError, ValueError):
            return False
