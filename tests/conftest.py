"""
Pytest configuration and shared fixtures.
"""

import json
import threading
import time
from typing import Any, Dict, List, Optional

import pytest

from g2client.g2configmgr import G2ConfigMgrClient
from g2client.g2product import G2ProductClient
from g2client.logger import MessageLogger
from g2client.operation import COMMON_MESSAGES


class StubTransport:
    """Transport answering each method with a canned wire response."""

    def __init__(
        self,
        responses: Optional[Dict[str, Dict[str, Any]]] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.responses = responses or {}
        self.error = error
        self.delay = delay
        self.calls: List[tuple] = []
        self.closed = False

    def invoke(self, service, method, payload, ctx=None):
        self.calls.append((service, method, payload, ctx))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.responses.get(method, {})

    def methods(self) -> List[str]:
        return [call[1] for call in self.calls]

    def close(self):
        self.closed = True


class RecordingObserver:
    """Observer collecting decoded notification payloads."""

    def __init__(self, observer_id: str = "recorder"):
        self.observer_id = observer_id
        self.messages: List[Dict[str, str]] = []
        self._cond = threading.Condition()

    def update(self, message, ctx=None):
        with self._cond:
            self.messages.append(json.loads(message))
            self._cond.notify_all()

    def wait_for(self, count: int = 1, timeout: float = 2.0) -> List[Dict[str, str]]:
        with self._cond:
            self._cond.wait_for(lambda: len(self.messages) >= count, timeout)
            return list(self.messages)


class BlockingObserver(RecordingObserver):
    """Observer that holds every delivery until released."""

    def __init__(self, observer_id: str = "blocking"):
        super().__init__(observer_id)
        self.release = threading.Event()

    def update(self, message, ctx=None):
        self.release.wait(5.0)
        super().update(message, ctx)


class FailingObserver:
    def __init__(self, observer_id: str = "failing"):
        self.observer_id = observer_id

    def update(self, message, ctx=None):
        raise RuntimeError("observer exploded")


class RecordingLogger(MessageLogger):
    """MessageLogger that also remembers every log() call."""

    def __init__(self, **kwargs):
        kwargs.setdefault("enable_console", False)
        super().__init__(**kwargs)
        self.records: List[tuple] = []

    def log(self, message_id, *details):
        self.records.append((message_id, details))
        super().log(message_id, *details)

    def ids(self) -> List[int]:
        return [record[0] for record in self.records]

    def details(self, message_id: int) -> tuple:
        for record_id, details in self.records:
            if record_id == message_id:
                return details
        raise KeyError(message_id)


def client_logger(client_class, level: str = "INFO") -> RecordingLogger:
    id_messages = dict(COMMON_MESSAGES)
    id_messages.update(client_class.ID_MESSAGES)
    return RecordingLogger(
        name=f"test.{client_class.LOGGER_NAME}",
        level=level,
        product_id=client_class.PRODUCT_ID,
        id_messages=id_messages,
    )


@pytest.fixture
def transport() -> StubTransport:
    return StubTransport()


@pytest.fixture
def configmgr_logger() -> RecordingLogger:
    return client_logger(G2ConfigMgrClient)


@pytest.fixture
def trace_logger() -> RecordingLogger:
    return client_logger(G2ConfigMgrClient, level="TRACE")


@pytest.fixture
def configmgr(transport, configmgr_logger):
    client = G2ConfigMgrClient(transport, logger=configmgr_logger)
    yield client
    client.observers.shutdown(wait=True)


@pytest.fixture
def product(transport):
    client = G2ProductClient(transport, logger=client_logger(G2ProductClient))
    yield client
    client.observers.shutdown(wait=True)


@pytest.fixture
def recorder() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def sample_config() -> str:
    return json.dumps({"G2_CONFIG": {"CFG_DSRC": [{"DSRC_ID": 1001, "DSRC_CODE": "CUSTOMERS"}]}})
