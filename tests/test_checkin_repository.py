import pytest
from sqlalchemy import text

from kiosk.core.exceptions import StorageError
from kiosk.infrastructure.database import init_db


def test_insert_assigns_increasing_ids(repo):
    first = repo.insert("Ana", "(11) 98765-4321", "CASAL", "2026-10-16T22:00:00.000Z")
    second = repo.insert("Bia", "(11) 91234-5678", "SOLTEIRO", "2026-10-16T22:01:00.000Z")
    assert second > first


def test_list_all_orders_by_created_at_then_id(repo):
    repo.insert("A", "1", "CASAL", "2026-10-16T22:00:00.000Z")
    repo.insert("B", "2", "CASAL", "2026-10-16T22:05:00.000Z")
    repo.insert("C", "3", "CASAL", "2026-10-16T22:05:00.000Z")

    assert [c.name for c in repo.list_all()] == ["C", "B", "A"]


def test_list_all_empty(repo):
    assert repo.list_all() == []


def test_clear_all_counts_and_empties(repo):
    for i in range(4):
        repo.insert(f"V{i}", "1", "CASAL", f"2026-10-16T22:0{i}:00.000Z")

    assert repo.clear_all() == 4
    assert repo.count() == 0
    assert repo.list_all() == []


def test_ids_are_not_reused_after_clear(repo):
    last = repo.insert("A", "1", "CASAL", "2026-10-16T22:00:00.000Z")
    repo.clear_all()
    assert repo.insert("B", "2", "CASAL", "2026-10-16T22:01:00.000Z") > last


def test_created_at_is_stored_verbatim(repo):
    repo.insert("A", "1", "CASAL", "2026-10-16T22:00:00.123Z")
    assert repo.list_all()[0].created_at == "2026-10-16T22:00:00.123Z"


def test_init_db_is_idempotent(engine, repo):
    repo.insert("A", "1", "CASAL", "2026-10-16T22:00:00.000Z")
    init_db(engine)
    assert repo.count() == 1


def test_database_failure_raises_storage_error(repo):
    repo.db.execute(text("DROP TABLE checkins"))
    repo.db.commit()

    with pytest.raises(StorageError) as exc:
        repo.insert("A", "1", "CASAL", "2026-10-16T22:00:00.000Z")
    assert exc.value.message == "Failed to save check-in"
    assert exc.value.status_code == 500

    with pytest.raises(StorageError):
        repo.list_all()
    with pytest.raises(StorageError):
        repo.clear_all()
