"""
Instrumentation shared by every client operation.

The ``operation`` decorator wraps a client method with entry/exit tracing,
call metrics and observer notification, so each method body only maps its
parameters to a wire request and the wire response to a return value.
"""

import functools
import inspect
import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar

from .logger import MessageLogger
from .observers import Observer, ObserverHub
from .schema import decode, encode
from .transport import CallContext, Transport

R = TypeVar("R")

OBSERVER_FAILED = 3001
NOTIFICATION_NOT_SERIALIZED = 3002

COMMON_MESSAGES = {
    OBSERVER_FAILED: "Observer notification failed.",
    NOTIFICATION_NOT_SERIALIZED: "Notification payload could not be serialized.",
}


@dataclass(frozen=True)
class OperationDescriptor:
    """Static description of one client operation."""

    name: str
    trace_id: int
    notify_id: Optional[int] = None
    notify_fields: Tuple[Tuple[str, str], ...] = ()  # (payload key, parameter name)

    @property
    def exit_id(self) -> int:
        return self.trace_id + 1


def operation(
    name: str,
    trace_id: int,
    notify_id: Optional[int] = None,
    notify_fields: Optional[Dict[str, str]] = None,
):
    """
    Decorator instrumenting an InstrumentedClient method.

    Args:
        name: Operation name used in metrics
        trace_id: Message id logged on entry; exit logs trace_id + 1
        notify_id: Message id of the observer notification (None = never notify)
        notify_fields: Payload key -> parameter name copied into notifications

    The wrapped method's exception, if any, is re-raised unchanged after the
    exit trace and notification.

    Example:
        @operation("GetConfig", 7, notify_id=8003)
        def get_config(self, config_id: int, ctx=None) -> str:
            ...
    """
    descriptor = OperationDescriptor(
        name=name,
        trace_id=trace_id,
        notify_id=notify_id,
        notify_fields=tuple((notify_fields or {}).items()),
    )

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)
        returns_value = signature.return_annotation not in (None, inspect.Signature.empty)

        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            bound = signature.bind(self, *args, **kwargs)
            bound.apply_defaults()
            ctx = bound.arguments.get("ctx")
            params = {k: v for k, v in bound.arguments.items() if k not in ("self", "ctx")}
            inputs = list(params.values())

            tracing = self.is_trace
            if tracing:
                self.logger.log(descriptor.trace_id, *inputs)
            entry_time = time.perf_counter()
            self.logger.record_call(descriptor.name)

            result = None
            error = None
            try:
                result = func(self, *args, **kwargs)
            except Exception as err:
                error = err
                self.logger.record_failure(descriptor.name, type(err).__name__)
            else:
                self.logger.record_success(descriptor.name)

            if descriptor.notify_id is not None and self.observers.has_observers():
                self.observers.publish(functools.partial(self._notification, descriptor, params, error), ctx)

            if tracing:
                details = inputs + ([result] if returns_value else [])
                elapsed = round(time.perf_counter() - entry_time, 6)
                self.logger.log(descriptor.exit_id, *details, error, elapsed)

            if error is not None:
                raise error
            return result

        wrapper.descriptor = descriptor
        return wrapper

    return decorator


class InstrumentedClient:
    """
    Base class of the service clients.

    Holds the shared transport, the injected logger and the observer hub.
    Subclasses set SERVICE, PRODUCT_ID, LOGGER_NAME and ID_MESSAGES.
    """

    SERVICE = ""
    PRODUCT_ID = 9999
    LOGGER_NAME = "g2client"
    ID_MESSAGES: Dict[int, str] = {}

    def __init__(
        self,
        transport: Transport,
        logger: Optional[MessageLogger] = None,
        observers: Optional[ObserverHub] = None,
    ):
        self.transport = transport
        self.logger = logger if logger is not None else self.new_logger()
        self.observers = observers if observers is not None else ObserverHub(on_error=self._observer_failed)

    @classmethod
    def new_logger(cls, **kwargs) -> MessageLogger:
        """Build a MessageLogger carrying this client's message catalog."""
        id_messages = dict(COMMON_MESSAGES)
        id_messages.update(cls.ID_MESSAGES)
        kwargs.setdefault("name", cls.LOGGER_NAME)
        return MessageLogger(product_id=cls.PRODUCT_ID, id_messages=id_messages, **kwargs)

    @property
    def is_trace(self) -> bool:
        return self.logger.is_trace()

    def register_observer(self, observer: Observer, ctx: Optional[CallContext] = None) -> None:
        """Add observer to the observers notified after each operation."""
        self.observers.register_observer(observer)

    def unregister_observer(self, observer: Observer, ctx: Optional[CallContext] = None) -> None:
        """Remove observer from the observers notified after each operation."""
        self.observers.unregister_observer(observer)

    def _invoke(self, method: str, request: Any, response_type: Type[R], ctx: Optional[CallContext]) -> R:
        payload = self.transport.invoke(self.SERVICE, method, encode(request), ctx)
        return decode(response_type, payload)

    def _notification(
        self,
        descriptor: OperationDescriptor,
        params: Dict[str, Any],
        error: Optional[Exception],
    ) -> Optional[str]:
        """Serialized notification for one completed call; runs on the hub's executor."""
        details = {key: str(params[param]) for key, param in descriptor.notify_fields}
        details["subjectId"] = str(self.PRODUCT_ID)
        details["messageId"] = str(descriptor.notify_id)
        details["messageTime"] = str(time.time_ns())
        if error is not None:
            details["error"] = str(error)
        try:
            return json.dumps(details)
        except (TypeError, ValueError) as e:
            self.logger.log(NOTIFICATION_NOT_SERIALIZED, descriptor.notify_id, e)
            return None

    def _observer_failed(self, observer, error: Exception) -> None:
        self.logger.log(OBSERVER_FAILED, getattr(observer, "observer_id", None), error)
