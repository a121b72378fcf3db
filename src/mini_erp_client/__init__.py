from .app import MiniErpClient
from .config import ClientConfig, ConfigError, load_config
from .credentials import CredentialStore
from .documents import DocumentRetrieval, DocumentSink, FileDocumentSink, MemoryDocumentSink
from .error_slot import ErrorSlot
from .exceptions import (
    ApiError,
    AuthenticationDenied,
    NoCredentials,
    ServerError,
    TransportError,
    ValidationFailed,
)
from .http_client import HttpClient
from .messages import Messages
from .models import Product, ProductInput, ProductListView
from .scheduler import InlineScheduler, Scheduler, ThreadedScheduler
from .search import SearchController
from .session import SessionController, SessionStatus
from .sync import ProductSyncEngine

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "AuthenticationDenied",
    "ClientConfig",
    "ConfigError",
    "CredentialStore",
    "DocumentRetrieval",
    "DocumentSink",
    "ErrorSlot",
    "FileDocumentSink",
    "HttpClient",
    "InlineScheduler",
    "MemoryDocumentSink",
    "Messages",
    "MiniErpClient",
    "NoCredentials",
    "Product",
    "ProductInput",
    "ProductListView",
    "ProductSyncEngine",
    "Scheduler",
    "SearchController",
    "ServerError",
    "SessionController",
    "SessionStatus",
    "ThreadedScheduler",
    "TransportError",
    "ValidationFailed",
    "load_config",
]
