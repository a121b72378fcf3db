"""Product Sync Engine.

The engine owns the displayed product list and never patches it: every
mutation is followed by a full re-read, and every applied read replaces the
list wholesale. Each ``refresh`` takes a new generation number and only the
response of the latest generation may replace the list, so slow responses
to superseded queries are dropped.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from . import messages as msg
from .clients.products import ProductsClient
from .documents import DocumentRetrieval
from .error_slot import ErrorSlot
from .exceptions import ApiError, AuthenticationDenied, TransportError, ValidationFailed
from .http_client import HttpClient
from .messages import Messages
from .models import Product, ProductInput, ProductListView
from .scheduler import InlineScheduler, Scheduler
from .session import SessionController

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]
ViewListener = Callable[[ProductListView], None]


def _never_confirm(prompt: str) -> bool:
    return False


class ProductSyncEngine:
    def __init__(
        self,
        http: HttpClient,
        session: SessionController,
        errors: ErrorSlot,
        *,
        documents: DocumentRetrieval,
        scheduler: Scheduler | None = None,
        messages: Messages | None = None,
        confirm: Confirm | None = None,
    ) -> None:
        self.http = http
        self.session = session
        self.errors = errors
        self.documents = documents
        self.scheduler = scheduler or InlineScheduler()
        self.messages = messages or Messages()
        self.confirm = confirm or _never_confirm
        self.view = ProductListView()
        self.filter_text = ""
        self.draft = ProductInput()
        self.editing: Product | None = None
        self.pending = 0
        self._generation = 0
        self._listeners: list[ViewListener] = []

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def products(self) -> tuple[Product, ...]:
        return self.view.products

    def subscribe(self, listener: ViewListener) -> None:
        self._listeners.append(listener)

    # buffers

    def reset_draft(self) -> None:
        self.draft = ProductInput()

    def begin_edit(self, product: Product) -> None:
        self.editing = product

    def cancel_edit(self) -> None:
        self.editing = None

    def reset(self) -> None:
        """Forget local state after an explicit logout; in-flight reads become stale."""
        self._generation += 1
        self.filter_text = ""
        self.reset_draft()
        self.cancel_edit()
        self._replace_view(ProductListView(generation=self._generation))

    # reads

    def refresh(self, filter_text: str | None = None) -> int | None:
        if filter_text is not None:
            self.filter_text = filter_text
        if not self.session.is_active:
            logger.debug("refresh_skipped_no_session")
            return None
        self._generation += 1
        generation = self._generation
        epoch = self.session.epoch
        term = self.filter_text
        client = self._client()
        logger.debug("refresh_issued", extra={"generation": generation, "filter_text": term})
        self._submit(
            "refresh",
            lambda: client.fetch(term),
            lambda products: self._refresh_succeeded(generation, epoch, term, products),
            lambda exc: self._refresh_failed(generation, epoch, exc),
        )
        return generation

    def _refresh_succeeded(self, generation: int, epoch: int, term: str, products: list[Product]) -> None:
        if epoch != self.session.epoch:
            logger.debug("refresh_discarded_stale_session", extra={"generation": generation})
            return
        self.session.confirm(epoch)
        if generation != self._generation:
            logger.debug(
                "refresh_discarded_superseded",
                extra={"generation": generation, "latest_generation": self._generation},
            )
            return
        self.errors.clear()
        self._replace_view(ProductListView(products=tuple(products), filter_text=term, generation=generation))
        logger.info("refresh_applied", extra={"generation": generation, "count": len(products)})

    def _refresh_failed(self, generation: int, epoch: int, exc: Exception) -> None:
        if self._handle_auth_denied(exc, epoch):
            return
        if epoch != self.session.epoch or generation != self._generation:
            logger.debug("refresh_failure_discarded", extra={"generation": generation})
            return
        if isinstance(exc, TransportError):
            self.errors.set(self.messages.get(msg.NETWORK_ERROR))
        elif isinstance(exc, ApiError):
            self.errors.set(self.messages.get(msg.SERVER_ERROR))
        else:
            self._unexpected(exc, "refresh")

    # writes

    def create(self, draft: ProductInput | Mapping[str, Any] | None = None) -> bool:
        if not self.session.is_active:
            logger.debug("create_skipped_no_session")
            return False
        payload = self.draft if draft is None else draft
        epoch = self.session.epoch
        client = self._client()
        self._submit(
            "create",
            lambda: client.create_product(payload),
            lambda created: self._create_succeeded(epoch, created),
            lambda exc: self._create_failed(epoch, exc),
        )
        return True

    def _create_succeeded(self, epoch: int, created: Product | None) -> None:
        if epoch != self.session.epoch:
            return
        logger.info("product_created", extra={"product_id": created.id if created else None})
        self.errors.clear()
        self.reset_draft()
        self.refresh()

    def _create_failed(self, epoch: int, exc: Exception) -> None:
        if self._handle_auth_denied(exc, epoch) or epoch != self.session.epoch:
            return
        if isinstance(exc, ValidationFailed):
            logger.info("product_create_rejected", extra={"fields": list(exc.field_errors)})
            self.errors.set(exc.aggregate())
        elif isinstance(exc, ApiError):
            self.errors.set(self.messages.get(msg.CREATE_FAILED))
        else:
            self._unexpected(exc, "create")

    def update(
        self,
        product_id: int | None = None,
        patch: ProductInput | Mapping[str, Any] | None = None,
    ) -> bool:
        if product_id is None or patch is None:
            if self.editing is None:
                raise ValueError("No product is being edited")
            product_id = self.editing.id if product_id is None else product_id
            patch = self.editing.to_input() if patch is None else patch
        if not self.session.is_active:
            logger.debug("update_skipped_no_session")
            return False
        epoch = self.session.epoch
        client = self._client()
        target_id = product_id
        body = patch
        self._submit(
            "update",
            lambda: client.update_product(target_id, body),
            lambda updated: self._update_succeeded(epoch, target_id),
            lambda exc: self._update_failed(epoch, target_id, exc),
        )
        return True

    def _update_succeeded(self, epoch: int, product_id: int) -> None:
        if epoch != self.session.epoch:
            return
        logger.info("product_updated", extra={"product_id": product_id})
        self.errors.clear()
        self.cancel_edit()
        self.refresh()

    def _update_failed(self, epoch: int, product_id: int, exc: Exception) -> None:
        if self._handle_auth_denied(exc, epoch) or epoch != self.session.epoch:
            return
        if not isinstance(exc, ApiError):
            self._unexpected(exc, "update")
            return
        logger.info("product_update_failed", extra={"product_id": product_id, "status_code": exc.status_code})
        self.errors.set(self.messages.get(msg.UPDATE_FAILED))

    def remove(self, product_id: int) -> bool:
        if not self.session.is_active:
            logger.debug("remove_skipped_no_session")
            return False
        if not self.confirm(self.messages.get(msg.CONFIRM_DELETE)):
            logger.info("product_delete_cancelled", extra={"product_id": product_id})
            return False
        epoch = self.session.epoch
        client = self._client()
        self._submit(
            "remove",
            lambda: client.delete_product(product_id),
            lambda _: self._remove_done(epoch, product_id),
            lambda exc: self._remove_done(epoch, product_id, exc),
        )
        return True

    def _remove_done(self, epoch: int, product_id: int, exc: Exception | None = None) -> None:
        # Deletes are fire-and-forget: only auth and transport failures reach the user.
        if exc is None:
            logger.info("product_deleted", extra={"product_id": product_id})
        elif self._handle_auth_denied(exc, epoch):
            return
        elif epoch != self.session.epoch:
            return
        elif isinstance(exc, TransportError):
            self.errors.set(self.messages.get(msg.NETWORK_ERROR))
        elif isinstance(exc, ApiError):
            logger.warning(
                "product_delete_failed_ignored",
                extra={"product_id": product_id, "status_code": exc.status_code},
            )
        else:
            self._unexpected(exc, "remove")
        if epoch == self.session.epoch:
            self.refresh()

    # documents

    def fetch_invoice_document(self) -> bool:
        if not self.session.is_active:
            logger.debug("invoice_skipped_no_session")
            return False
        epoch = self.session.epoch
        client = self._client()
        self._submit(
            "fetch_invoice_document",
            lambda: self.documents.download_invoice(client),
            lambda content: self._invoice_received(epoch, content),
            lambda exc: self._invoice_failed(epoch, exc),
        )
        return True

    def _invoice_received(self, epoch: int, content: bytes) -> None:
        if epoch != self.session.epoch:
            return
        self.session.confirm(epoch)
        self.documents.deliver(content)
        logger.info("invoice_delivered", extra={"file_name": self.documents.filename, "size_bytes": len(content)})

    def _invoice_failed(self, epoch: int, exc: Exception) -> None:
        if self._handle_auth_denied(exc, epoch) or epoch != self.session.epoch:
            return
        if isinstance(exc, TransportError):
            self.errors.set(self.messages.get(msg.NETWORK_ERROR))
        elif isinstance(exc, ApiError):
            logger.warning("invoice_download_failed_ignored", extra={"status_code": exc.status_code})
        else:
            self._unexpected(exc, "fetch_invoice_document")

    # helpers

    def _client(self) -> ProductsClient:
        return ProductsClient(http=self.http, credentials=self.session.credentials.snapshot())

    def _submit(
        self,
        operation: str,
        work: Callable[[], Any],
        on_success: Callable[[Any], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        self.pending += 1

        def succeeded(result: Any) -> None:
            self.pending -= 1
            self._complete(operation, on_success, result)

        def failed(exc: Exception) -> None:
            self.pending -= 1
            self._complete(operation, on_error, exc)

        self.scheduler.submit(work, succeeded, failed)

    def _complete(self, operation: str, callback: Callable[[Any], None], value: Any) -> None:
        # completions run on the event stream; nothing may propagate into it
        try:
            callback(value)
        except Exception as exc:
            self._unexpected(exc, operation)

    def _handle_auth_denied(self, exc: Exception, epoch: int) -> bool:
        if not isinstance(exc, AuthenticationDenied):
            return False
        if self.session.deny(epoch):
            self.errors.set(self.messages.get(msg.INVALID_CREDENTIALS))
        return True

    def _unexpected(self, exc: Exception, operation: str) -> None:
        logger.error("unexpected_failure", exc_info=exc, extra={"operation": operation})
        self.errors.set(self.messages.get(msg.UNEXPECTED_ERROR))

    def _replace_view(self, view: ProductListView) -> None:
        self.view = view
        for listener in list(self._listeners):
            listener(view)
