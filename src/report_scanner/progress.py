"""Progress callbacks for import and validation runs."""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

LOGGER = logging.getLogger("report_scanner.progress")

ProgressObserver = Callable[[float], None]


class ProgressReporter:
    """Delivers progress percentages to every subscribed observer.

    Delivery is synchronous and in subscription order. An observer that
    raises is logged and skipped; the run it observes is not affected.
    """

    def __init__(self, observers: Optional[List[ProgressObserver]] = None) -> None:
        self._observers: List[ProgressObserver] = list(observers or [])
        self.value = 0.0

    def subscribe(self, observer: ProgressObserver) -> Callable[[], None]:
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def report(self, value: float) -> None:
        self.value = value
        for observer in list(self._observers):
            try:
                observer(value)
            except Exception:
                LOGGER.warning("Progress observer %r failed", observer, exc_info=True)

    def reset(self) -> None:
        self.report(0.0)
