from typing import Protocol


class IShutdownHandler(Protocol):
    """
    One step of the stop sequence. ShutdownCoordinator runs handlers from
    the highest shutdown_priority down, each under its own timeout:

        100  fixture blanked, settings flushed
         90  API server stopped
         40  remaining tracked tasks cancelled
         10  GPIO released
    """

    @property
    def shutdown_priority(self) -> int: ...

    async def shutdown(self) -> None: ...
