from __future__ import annotations

import logging
import signal
import threading
from typing import Callable, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class InterruptSignalSource:
    """Turn process interrupt/termination signals into a one-shot stop event.

    A source is created per crawl invocation and its event is passed down to
    the phase runner and the fetcher. The first signal received sets the event;
    any later signal, of the same or another kind, is ignored.
    """

    def __init__(
        self,
        signals: Iterable[int] = DEFAULT_SIGNALS,
        *,
        event_factory: Callable[[], threading.Event] = threading.Event,
        signal_module=signal,
    ):
        self._signals = tuple(signals)
        self._signal = signal_module
        # Acquired once and never released: the acquisition is the pending->fired transition.
        self._once = threading.Lock()
        self._previous: Dict[int, object] = {}
        self.stop_event = event_factory()

    @property
    def fired(self) -> bool:
        return self._once.locked()

    def install(self) -> threading.Event:
        """Register the handlers and return the stop event."""
        if threading.current_thread() is not threading.main_thread():
            logger.warning("Signal handlers can only be installed from the main thread; interrupts are not tracked")
            return self.stop_event
        for signum in self._signals:
            self._previous[signum] = self._signal.getsignal(signum)
            self._signal.signal(signum, self._handle)
        return self.stop_event

    def restore(self) -> None:
        """Reinstate the handlers that were active before `install()`."""
        for signum, previous in self._previous.items():
            if previous is None:
                previous = self._signal.SIG_DFL
            self._signal.signal(signum, previous)
        self._previous.clear()

    def fire(self, signum: Optional[int] = None) -> bool:
        """Set the stop event if it has not been set yet.

        Returns True only for the call that performed the transition.
        """
        if not self._once.acquire(blocking=False):
            return False
        logger.warning("Interrupt signal received (%s)", _signal_name(signum))
        self.stop_event.set()
        return True

    def _handle(self, signum, frame) -> None:
        self.fire(signum)

    def __enter__(self) -> threading.Event:
        return self.install()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()


def _signal_name(signum: Optional[int]) -> str:
    if signum is None:
        return "manual"
    try:
        return signal.Signals(signum).name
    except ValueError:
        return str(signum)
