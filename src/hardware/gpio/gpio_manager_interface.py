"""
GPIO manager contract plus the pin-ownership bookkeeping both backends share.

The fixture needs at most two pins: the door reed switch (input) and the
WS281x data line (claimed only so nothing else grabs it).
"""

from typing import Dict, Protocol

from models.enums import GPIOPullMode
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


class IGPIOManager(Protocol):

    def register_input(self, pin: int, component: str, pull_mode: GPIOPullMode = GPIOPullMode.PULL_UP) -> None: ...

    def register_ws281x(self, pin: int, component: str) -> None: ...

    def read(self, pin: int) -> int:
        """Current level (0 or 1)"""
        ...

    def cleanup(self) -> None: ...

    def get_registry(self) -> Dict[int, str]: ...


class PinOwnership:
    """pin -> owning component; a pin can be claimed once until release_all()"""

    def __init__(self):
        self._owners: Dict[int, str] = {}

    def claim(self, pin: int, component: str, kind: str) -> None:
        owner = self._owners.get(pin)
        if owner is not None:
            msg = f"GPIO {pin} requested by '{component}' is already owned by '{owner}'"
            log.error(msg)
            raise ValueError(msg)
        self._owners[pin] = component
        log.debug(f"GPIO {pin} claimed ({kind})", component=component)

    def release_all(self) -> int:
        count = len(self._owners)
        self._owners.clear()
        return count

    def snapshot(self) -> Dict[int, str]:
        return dict(self._owners)
