"""Integration tests for schema creation and table constraints."""

from sqlalchemy import text

from netwatch.database import get_table_names


def test_all_tables_created(engine):
    assert set(get_table_names(engine)) == {
        "users",
        "players",
        "computers",
        "defenses",
        "hack_operations",
        "progression_unlocks",
    }


def test_foreign_keys_enforced(engine):
    with engine.connect() as connection:
        assert connection.execute(text("PRAGMA foreign_keys")).scalar() == 1
