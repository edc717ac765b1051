# deck/debounce.py
"""
Coalesce bursts of calls into one call after a quiet period.

``Debouncer(wait, func)`` postpones ``func`` until ``wait`` seconds have
passed without another call; only the arguments of the last call are
used. It is a public helper for client code and knows nothing about the
catalog: a front-end wraps its search callback in it (a 0.3 s wait suits
a search box) so that typing a query sends one request per pause.
"""

from __future__ import annotations

import functools
import threading
from typing import Any, Callable, Optional, Tuple


class Debouncer:
    def __init__(self, wait: float, func: Callable[..., Any]) -> None:
        if wait < 0:
            raise ValueError("wait must be >= 0")
        self.wait = wait
        self.func = func
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._call: Optional[Tuple[tuple, dict]] = None
        self._generation = 0

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._call = (args, kwargs)
            self._timer = threading.Timer(self.wait, self._fire, args=(self._generation,))
            self._timer.daemon = True
            self._timer.start()

    @property
    def pending(self) -> bool:
        return self._call is not None

    def _take(self, generation: Optional[int] = None) -> Optional[Tuple[tuple, dict]]:
        with self._lock:
            # A timer that lost the race against a newer call must not fire.
            if generation is not None and generation != self._generation:
                return None
            call, self._call = self._call, None
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            return call

    def _fire(self, generation: int) -> None:
        call = self._take(generation)
        if call is not None:
            args, kwargs = call
            self.func(*args, **kwargs)

    def flush(self) -> bool:
        """Run the pending call now. Returns False when nothing was pending."""
        call = self._take()
        if call is None:
            return False
        args, kwargs = call
        self.func(*args, **kwargs)
        return True

    def cancel(self) -> None:
        self._take()


def debounce(wait: float) -> Callable[[Callable[..., Any]], Debouncer]:
    """Decorator form of ``Debouncer``."""

    def decorator(func: Callable[..., Any]) -> Debouncer:
        debouncer = Debouncer(wait, func)
        functools.update_wrapper(debouncer, func)
        return debouncer

    return decorator
