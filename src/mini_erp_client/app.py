from __future__ import annotations

from pathlib import Path

from .config import ClientConfig, load_config
from .documents import DocumentRetrieval, DocumentSink, FileDocumentSink
from .error_slot import ErrorSlot
from .http_client import HttpClient
from .messages import Messages
from .models import ProductListView
from .scheduler import Scheduler
from .search import SearchController
from .session import SessionController, SessionStatus
from .sync import Confirm, ProductSyncEngine


class MiniErpClient:
    """Wires the session, sync engine, search and document components together."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        sink: DocumentSink | None = None,
        scheduler: Scheduler | None = None,
        confirm: Confirm | None = None,
        http: HttpClient | None = None,
    ) -> None:
        self.config = config or load_config()
        self.http = http or HttpClient(self.config)
        self.messages = Messages(self.config.locale)
        self.errors = ErrorSlot()
        self.session = SessionController()
        self.documents = DocumentRetrieval(
            sink=sink or FileDocumentSink(Path.cwd()),
            filename=self.config.invoice_filename,
        )
        self.engine = ProductSyncEngine(
            self.http,
            self.session,
            self.errors,
            documents=self.documents,
            scheduler=scheduler,
            messages=self.messages,
            confirm=confirm,
        )
        self.search = SearchController(self.engine, self.session)

    @property
    def status(self) -> SessionStatus:
        return self.session.status

    @property
    def view(self) -> ProductListView:
        return self.engine.view

    @property
    def error_message(self) -> str | None:
        return self.errors.message

    def login(self, username: str, password: str) -> None:
        self.session.login(username, password)

    def logout(self) -> None:
        self.session.logout()
        self.search.reset()
        self.engine.reset()

    def close(self) -> None:
        self.http.close()
