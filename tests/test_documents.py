from __future__ import annotations

from pathlib import Path

from mini_erp_client.documents import DocumentRetrieval, FileDocumentSink, MemoryDocumentSink


def test_file_sink_writes_into_directory(tmp_path: Path) -> None:
    sink = FileDocumentSink(tmp_path / "out")

    sink.save(b"%PDF", "Lieferschein_Altenburg.pdf")

    assert (tmp_path / "out" / "Lieferschein_Altenburg.pdf").read_bytes() == b"%PDF"


def test_file_sink_ignores_directory_parts(tmp_path: Path) -> None:
    sink = FileDocumentSink(tmp_path)

    sink.save(b"x", "../escape.pdf")

    assert (tmp_path / "escape.pdf").exists()
    assert not (tmp_path.parent / "escape.pdf").exists()


def test_retrieval_uses_configured_name() -> None:
    sink = MemoryDocumentSink()
    retrieval = DocumentRetrieval(sink=sink, filename="Lieferschein.pdf")

    retrieval.deliver(b"data")

    assert sink.documents == {"Lieferschein.pdf": b"data"}
    assert retrieval.delivered == 1
