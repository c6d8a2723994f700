from datetime import date

import pytest

from travel_admin.errors import PersistenceError
from travel_admin.services.document_store import (
    GeneratedDocumentStore,
    build_proposal_filename,
    sanitize_customer_name,
)


def test_sanitize_customer_name():
    assert sanitize_customer_name("Jane O'Brien") == "Jane_OBrien"
    assert sanitize_customer_name("  Alice   Smith ") == "Alice_Smith"
    assert sanitize_customer_name("Jean-Luc  Picard") == "Jean_Luc_Picard"
    assert sanitize_customer_name("__Dr. Who!__") == "Dr_Who"
    assert sanitize_customer_name("!!!") == "Customer"


def test_filename_is_deterministic_per_customer_and_day():
    day = date(2025, 1, 5)
    first = build_proposal_filename("Jane O'Brien", day)
    second = build_proposal_filename("Jane O'Brien", day)
    assert first == second == "Travel_Proposal_Jane_OBrien_2025-01-05.pdf"
    assert build_proposal_filename("Jane O'Brien", date(2025, 1, 6)) != first


def test_save_creates_directory_and_reports_size(tmp_path):
    store = GeneratedDocumentStore(tmp_path / "out" / "generated-pdfs")
    doc = store.save("a.pdf", b"x" * 4096)
    assert doc.file_path == tmp_path / "out" / "generated-pdfs" / "a.pdf"
    assert doc.file_path.read_bytes() == b"x" * 4096
    assert doc.file_size_kb == 4
    assert store.download_url("a.pdf") == "/generated-pdfs/a.pdf"


def test_second_save_overwrites_same_path(tmp_path):
    store = GeneratedDocumentStore(tmp_path)
    store.save("same.pdf", b"first")
    doc = store.save("same.pdf", b"second")
    assert doc.file_path.read_bytes() == b"second"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["same.pdf"]


def test_write_failure_raises_persistence_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    store = GeneratedDocumentStore(blocker / "generated-pdfs")
    with pytest.raises(PersistenceError):
        store.save("a.pdf", b"data")


def test_resolve_rejects_unknown_and_nested_names(tmp_path):
    store = GeneratedDocumentStore(tmp_path)
    store.save("ok.pdf", b"data")
    assert store.resolve("ok.pdf") == tmp_path / "ok.pdf"
    assert store.resolve("missing.pdf") is None
    assert store.resolve("../ok.pdf") is None
    assert store.resolve("") is None
