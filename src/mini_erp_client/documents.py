from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from .clients.products import ProductsClient
from .config import DEFAULT_INVOICE_FILENAME

logger = logging.getLogger(__name__)


class DocumentSink(Protocol):
    def save(self, content: bytes, filename: str) -> None: ...


@dataclass
class FileDocumentSink:
    directory: Path

    def __post_init__(self) -> None:
        self.directory = Path(self.directory)

    def save(self, content: bytes, filename: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / Path(filename).name
        target.write_bytes(content)
        logger.info("document_saved", extra={"path": str(target), "size_bytes": len(content)})


@dataclass
class MemoryDocumentSink:
    """Keeps saved documents in memory; handy for previews and tests."""

    documents: dict[str, bytes] = field(default_factory=dict)

    def save(self, content: bytes, filename: str) -> None:
        self.documents[filename] = content


@dataclass
class DocumentRetrieval:
    """Fetches the delivery note and hands it to the environment's sink."""

    sink: DocumentSink
    filename: str = DEFAULT_INVOICE_FILENAME
    delivered: int = 0

    def download_invoice(self, client: ProductsClient) -> bytes:
        return client.download_invoice()

    def deliver(self, content: bytes) -> None:
        self.sink.save(content, self.filename)
        self.delivered += 1
