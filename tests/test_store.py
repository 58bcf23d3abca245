import time

import pytest
from sqlalchemy.exc import OperationalError

from arcade import db
from arcade.models import GameSessionRecord
from arcade.services.games import MemorySessionStore, SqlSessionStore, StoreConflict, StoreError
from arcade.services.games.session import Session


def new_session(session_id='s-1', **overrides):
    fields = dict(
        session_id=session_id,
        game='memory',
        config={'difficulty': 'Easy'},
        content={'cards': [{'id': 0, 'value': 'x'}]},
        progress={'moves': 0},
        start_time=time.time(),
    )
    fields.update(overrides)
    return Session(**fields)


def test_memory_store_copies_on_the_way_in_and_out():
    store = MemorySessionStore()
    session = new_session()
    store.put(session)
    assert session.version == 1
    session.progress['moves'] = 99
    fetched = store.get('s-1')
    assert fetched.progress['moves'] == 0
    fetched.progress['moves'] = 5
    assert store.get('s-1').progress['moves'] == 0
    assert store.get('missing') is None
    assert len(store) == 1


def test_memory_store_rejects_duplicate_create():
    store = MemorySessionStore()
    store.put(new_session())
    with pytest.raises(StoreConflict):
        store.put(new_session())


def test_sql_store_round_trip(flask_app):
    store = SqlSessionStore(db)
    session = new_session(user_id=None)
    store.put(session)
    assert session.version == 1

    fetched = store.get('s-1')
    assert fetched == session

    fetched.progress['moves'] = 3
    fetched.completed = True
    fetched.end_time = fetched.start_time + 5
    store.put(fetched)
    assert fetched.version == 2

    again = store.get('s-1')
    assert again.progress == {'moves': 3}
    assert again.completed is True
    assert again.version == 2
    assert store.get('nope') is None


def test_sql_store_stale_write(flask_app):
    store = SqlSessionStore(db)
    store.put(new_session())
    a = store.get('s-1')
    b = store.get('s-1')
    a.progress['moves'] = 1
    store.put(a)
    b.progress['moves'] = 2
    with pytest.raises(StoreConflict):
        store.put(b)
    assert store.get('s-1').progress['moves'] == 1


def test_sql_store_wraps_database_errors(flask_app, monkeypatch):
    store = SqlSessionStore(db)

    def broken_commit():
        raise OperationalError('COMMIT', {}, Exception('disk I/O error'))

    monkeypatch.setattr(db.session, 'commit', broken_commit)
    with pytest.raises(StoreError) as excinfo:
        store.put(new_session())
    assert not isinstance(excinfo.value, StoreConflict)


def test_purge_incomplete(flask_app):
    store = SqlSessionStore(db)
    old = time.time() - 10 * 86400
    store.put(new_session('old-open', start_time=old))
    store.put(new_session('old-done', start_time=old, completed=True, end_time=old + 60))
    store.put(new_session('fresh'))

    assert store.purge_incomplete(time.time() - 7 * 86400) == 1
    remaining = {r.session_id for r in GameSessionRecord.query.all()}
    assert remaining == {'old-done', 'fresh'}
