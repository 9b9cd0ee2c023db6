from datetime import timezone

import pytest

from app.database.conn import MongoConnection, utc_now


def test_utc_now_is_aware_and_millisecond_precise():
    now = utc_now()
    assert now.tzinfo == timezone.utc
    assert now.microsecond % 1000 == 0


def test_database_requires_connect_or_bind():
    conn = MongoConnection(uri="mongodb://unused", db_name="unused")
    with pytest.raises(RuntimeError):
        conn.database
    assert conn.connected is False

    sentinel = object()
    conn.bind(sentinel)
    assert conn.database is sentinel
