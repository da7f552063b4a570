"""Debounced scheduling on the running asyncio loop."""

import asyncio
from typing import Any, Callable, Optional

from fitgenius.utils.logger import setup_logger

logger = setup_logger(__name__)


class Debouncer:
    """Delay a call until input has been quiet for ``delay`` seconds.

    Every ``schedule`` cancels the pending call, if any, and reschedules with
    the newest arguments. The returned ``asyncio.TimerHandle`` can be
    cancelled by the caller.
    """

    def __init__(self, func: Callable[..., Any], delay: float):
        self.func = func
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None and not self._handle.cancelled()

    def schedule(self, *args: Any) -> asyncio.TimerHandle:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, args)
        return self._handle

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, args: tuple) -> None:
        self._handle = None
        try:
            self.func(*args)
        except Exception as e:
            logger.error(f"Debounced call {getattr(self.func, '__name__', self.func)!r} failed: {e}", exc_info=True)
