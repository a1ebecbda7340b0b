import pytest
from sqlalchemy.exc import IntegrityError

from ember.errors import UnitOfWorkError
from ember.repositories import PlayerRepository
from ember.rows import PlayerRow
from ember.unit import ExecResult, UnitOfWork


def _player_count(engine):
    with UnitOfWork(engine, read_only=True) as unit:
        return unit.prepare("SELECT COUNT(*) FROM Player").scalar()


def _add_player(unit, name="dora"):
    return PlayerRepository(unit).create(name, "pw", f"{name}@example.com")


def test_commit_persists(engine):
    with UnitOfWork(engine) as unit:
        ok, player_id = _add_player(unit)
        unit.commit()
    assert ok and player_id == 1
    assert _player_count(engine) == 1


def test_rollback_discards(engine):
    unit = UnitOfWork(engine)
    _add_player(unit)
    unit.rollback()
    assert unit.completed
    assert _player_count(engine) == 0


def test_complete_is_idempotent(engine):
    unit = UnitOfWork(engine)
    _add_player(unit)
    unit.complete(True)
    unit.complete(False)
    unit.complete()
    assert _player_count(engine) == 1


def test_read_write_needs_a_decision(engine):
    unit = UnitOfWork(engine)
    _add_player(unit)
    with pytest.raises(UnitOfWorkError):
        unit.complete()
    assert unit.completed
    assert _player_count(engine) == 0
    # the connection went back to the pool; a writer is not blocked
    with UnitOfWork(engine) as other:
        _add_player(other, "erin")
        other.commit()
    assert _player_count(engine) == 1


def test_read_only_completes_without_decision(engine):
    unit = UnitOfWork(engine, read_only=True)
    assert unit.prepare("SELECT 1").scalar() == 1
    unit.complete()
    assert unit.completed


def test_scope_exit_without_decision_rolls_back(engine, caplog):
    with UnitOfWork(engine) as unit:
        _add_player(unit)
    assert unit.completed
    assert _player_count(engine) == 0
    assert "without a decision" in caplog.text


def test_exception_in_scope_rolls_back_and_propagates(engine):
    with pytest.raises(RuntimeError):
        with UnitOfWork(engine) as unit:
            _add_player(unit)
            raise RuntimeError("boom")
    assert _player_count(engine) == 0


def test_completed_unit_rejects_statements(engine):
    unit = UnitOfWork(engine, read_only=True)
    unit.complete()
    with pytest.raises(UnitOfWorkError):
        unit.prepare("SELECT 1")
    with pytest.raises(UnitOfWorkError):
        unit.connection


def test_last_insert_id_tracks_this_unit_only(engine):
    with UnitOfWork(engine) as unit:
        with pytest.raises(UnitOfWorkError):
            unit.last_insert_id()
        result = unit.prepare(
            "INSERT INTO Player (username, password, email, joinedAt) "
            "VALUES ('fay', 'x', 'fay@example.com', '2024-01-01T00:00:00.000Z')"
        ).execute()
        assert result == ExecResult(rows_affected=1, last_row_id=1)
        assert unit.last_insert_id() == 1
        unit.commit()
    # a later borrower of the same pooled connection starts clean
    with UnitOfWork(engine) as unit:
        with pytest.raises(UnitOfWorkError):
            unit.last_insert_id()
        unit.rollback()


def test_statement_shapes(engine):
    with UnitOfWork(engine) as unit:
        _add_player(unit, "gus")
        _add_player(unit, "hal")
        unit.commit()
    with UnitOfWork(engine, read_only=True) as unit:
        one = unit.prepare("SELECT * FROM Player WHERE username = :u", {"u": "gus"}, PlayerRow).one()
        assert isinstance(one, PlayerRow) and one.username == "gus"
        assert unit.prepare("SELECT * FROM Player WHERE username = 'nobody'").one() is None
        many = unit.prepare("SELECT * FROM Player ORDER BY playerId", row=PlayerRow).many()
        assert [p.username for p in many] == ["gus", "hal"]
        raw = unit.prepare("SELECT username FROM Player ORDER BY playerId").many()
        assert raw[1]["username"] == "hal"


def test_update_reports_rows_affected(engine):
    with UnitOfWork(engine) as unit:
        _add_player(unit)
        result = unit.prepare("UPDATE Player SET coins = 5 WHERE coins = 0").execute()
        missing = unit.prepare("UPDATE Player SET coins = 5 WHERE playerId = 99").execute()
        unit.commit()
    assert result.rows_affected == 1 and result.last_row_id is None
    assert missing.rows_affected == 0


def test_integrity_error_propagates(engine):
    with UnitOfWork(engine) as unit:
        _add_player(unit)
        with pytest.raises(IntegrityError):
            _add_player(unit)
        unit.rollback()


def test_foreign_keys_are_enforced(engine):
    with UnitOfWork(engine) as unit:
        with pytest.raises(IntegrityError, match="FOREIGN KEY"):
            unit.prepare(
                "INSERT INTO Stove (typeId, currentOwnerId, mintedAt) VALUES (42, 42, 'now')"
            ).execute()
        unit.rollback()


def test_read_only_unit_holds_no_transaction(engine):
    reader = UnitOfWork(engine, read_only=True)
    assert reader.prepare("SELECT COUNT(*) FROM Player").scalar() == 0
    with UnitOfWork(engine) as writer:
        _add_player(writer)
        writer.commit()
    # no snapshot is held open, the reader sees the committed row
    assert reader.prepare("SELECT COUNT(*) FROM Player").scalar() == 1
    reader.complete()
