"""Cosmetic progress feedback during generation.

Hides the timer behind a start/stop interface. The simulator never knows
whether the generation succeeded; it only walks through stage indices.
"""

import asyncio
from collections.abc import Callable

from ..exceptions import InvalidStateError
from .stages import DEFAULT_MAX_INDEX, STAGE_INTERVAL_SECONDS


class ProgressSimulator:
    """Emits stage indices 0..max_index on a fixed cadence.

    Index 0 is emitted synchronously by start(). Each further index follows
    after `interval` seconds until max_index is reached, then the simulator
    holds there and emits nothing more.

    Usage:
        simulator = ProgressSimulator(on_advance=print, interval=0.5)
        simulator.start()
        ...
        simulator.stop()  # safe to call any number of times
    """

    def __init__(
        self,
        on_advance: Callable[[int], None],
        max_index: int = DEFAULT_MAX_INDEX,
        interval: float = STAGE_INTERVAL_SECONDS,
    ):
        """Initialize the simulator.

        Args:
            on_advance: Called with each new stage index
            max_index: Last stage index (inclusive)
            interval: Seconds between two stage advances
        """
        if max_index < 0:
            raise ValueError("max_index must be >= 0")
        if interval <= 0:
            raise ValueError("interval must be > 0")

        self._on_advance = on_advance
        self._max_index = max_index
        self._interval = interval
        self._index = 0
        self._task: asyncio.Task | None = None

    @property
    def index(self) -> int:
        """Last emitted stage index."""
        return self._index

    @property
    def max_index(self) -> int:
        """Highest index the simulator will reach."""
        return self._max_index

    @property
    def running(self) -> bool:
        """Whether the timer is still scheduled to advance."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Emit index 0 and schedule the following advances.

        Must be called from within a running event loop.

        Raises:
            InvalidStateError: If the simulator is already running
        """
        if self.running:
            raise InvalidStateError("Progress simulator is already running")

        self._index = 0
        self._on_advance(0)
        if self._max_index > 0:
            self._task = asyncio.get_running_loop().create_task(self._advance_loop())

    def stop(self) -> None:
        """Stop advancing immediately. Idempotent."""
        if self._task is not None:
            if not self._task.done():
                self._task.cancel()
            self._task = None

    async def _advance_loop(self) -> None:
        while self._index < self._max_index:
            await asyncio.sleep(self._interval)
            self._index += 1
            self._on_advance(self._index)
