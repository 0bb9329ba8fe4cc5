"""Thin Python client for the Senzing G2 engine services."""

__version__ = "0.1.0"

from .transport import CallContext, HttpTransport, RemoteCallError
from .observers import EchoObserver, ObserverHub
from .logger import MessageLogger
from .g2configmgr import G2ConfigMgrClient
from .g2product import G2ProductClient

__all__ = [
    "CallContext",
    "EchoObserver",
    "G2ConfigMgrClient",
    "G2ProductClient",
    "HttpTransport",
    "MessageLogger",
    "ObserverHub",
    "RemoteCallError",
]
