"""
Observers of completed client operations.

An ObserverHub builds each notification and fans it out to every registered
observer on a background thread. Delivery is best effort: the caller never
waits for it and observer failures never reach the caller.
"""

import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Protocol, runtime_checkable

from .transport import CallContext


@runtime_checkable
class Observer(Protocol):
    """Receives serialized notification messages."""

    observer_id: str

    def update(self, message: str, ctx: Optional[CallContext] = None) -> None:
        ...


class EchoObserver:
    """Observer that prints every message it receives."""

    def __init__(self, observer_id: str):
        self.observer_id = observer_id

    def update(self, message: str, ctx: Optional[CallContext] = None) -> None:
        print(f"Observer: {self.observer_id};  Message: {message}")


def _print_error(observer, error: Exception) -> None:
    name = getattr(observer, "observer_id", observer)
    print(f"Error: notifying {name}: {error}", file=sys.stderr)


class ObserverHub:
    """
    Registry of observers plus the executor delivering to them.

    The executor exists only while there is work to do: it is created on
    demand and shut down when the last observer unregisters.
    """

    def __init__(
        self,
        on_error: Optional[Callable[[object, Exception], None]] = None,
        max_workers: int = 4,
    ):
        """
        Args:
            on_error: Called with (observer, exception) when delivery fails;
                      defaults to printing on stderr
            max_workers: Size of the delivery thread pool
        """
        self.on_error = on_error or _print_error
        self.max_workers = max_workers
        self._observers: List[Observer] = []
        self._executor: Optional[ThreadPoolExecutor] = None
        self._lock = threading.Lock()

    @property
    def observers(self) -> List[Observer]:
        with self._lock:
            return list(self._observers)

    @property
    def active(self) -> bool:
        """True while the delivery executor is alive."""
        return self._executor is not None

    def has_observers(self) -> bool:
        with self._lock:
            return bool(self._observers)

    def register_observer(self, observer: Observer) -> None:
        with self._lock:
            if observer not in self._observers:
                self._observers.append(observer)

    def unregister_observer(self, observer: Observer) -> None:
        """Remove observer; tear down the executor once none are left."""
        with self._lock:
            if observer in self._observers:
                self._observers.remove(observer)
            if self._observers or self._executor is None:
                return
            executor, self._executor = self._executor, None
        # Pending deliveries still run to completion.
        executor.shutdown(wait=False)

    def publish(self, build: Callable[[], Optional[str]], ctx: Optional[CallContext] = None) -> None:
        """
        Build a message in the background and deliver it to every observer.

        Args:
            build: Returns the serialized message, or None to drop it
            ctx: Passed on to each observer's update()

        The observers registered at the time of the call receive the message,
        one after another, on a single executor task.
        """
        observers = self.observers
        if not observers:
            return
        try:
            with self._lock:
                if self._executor is None:
                    self._executor = ThreadPoolExecutor(
                        max_workers=self.max_workers,
                        thread_name_prefix="g2client-notify",
                    )
                self._executor.submit(self._dispatch, build, observers, ctx)
        except RuntimeError as e:
            # Raised by submit() during interpreter shutdown.
            self._report(None, e)

    def notify_observers(self, message: str, ctx: Optional[CallContext] = None) -> None:
        """Deliver an already serialized message without blocking."""
        self.publish(lambda: message, ctx)

    def _dispatch(self, build: Callable[[], Optional[str]], observers: List[Observer], ctx) -> None:
        try:
            message = build()
        except Exception as e:
            self._report(None, e)
            return
        if message is None:
            return
        for observer in observers:
            try:
                observer.update(message, ctx)
            except Exception as e:
                self._report(observer, e)

    def _report(self, observer, error: Exception) -> None:
        try:
            self.on_error(observer, error)
        except Exception:
            _print_error(observer, error)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the executor, optionally waiting for pending deliveries."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)
