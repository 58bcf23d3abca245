import time

from arcade import db
from arcade.models import GameSessionRecord, User
from arcade.services.games import SqlSessionStore
from arcade.services.games.session import Session


def add_session(session_id, started, completed=False):
    SqlSessionStore(db).put(Session(
        session_id=session_id,
        game='memory',
        config={},
        content={},
        progress={},
        start_time=started,
        completed=completed,
    ))


def test_purge_sessions_uses_retention_default(flask_app):
    now = time.time()
    add_session('stale', now - 8 * 86400)
    add_session('recent', now - 2 * 86400)
    add_session('finished', now - 30 * 86400, completed=True)

    result = flask_app.test_cli_runner().invoke(args=['purge-sessions'])
    assert result.exit_code == 0
    assert 'Purged 1 unfinished sessions older than 7 days.' in result.output
    assert {r.session_id for r in GameSessionRecord.query.all()} == {'recent', 'finished'}


def test_purge_sessions_days_option(flask_app):
    add_session('recent', time.time() - 2 * 86400)
    result = flask_app.test_cli_runner().invoke(args=['purge-sessions', '--days', '1'])
    assert result.exit_code == 0
    assert 'Purged 1' in result.output
    assert GameSessionRecord.query.count() == 0


def test_db_reset_seeds_users(flask_app):
    result = flask_app.test_cli_runner().invoke(args=['db-reset'])
    assert result.exit_code == 0
    assert 'Database has been reset and seeded!' in result.output
    users = User.query.order_by(User.username).all()
    assert [u.username for u in users] == ['testuser1', 'testuser2', 'testuser3']
    assert users[0].check_password('password')
