from flask_socketio import join_room, leave_room, emit
from flask import current_app
from arcade import socketio
from arcade.services.games import GameError


def _room(data):
    session_id = data.get('sessionId') if isinstance(data, dict) else None
    if not session_id or not isinstance(session_id, str):
        emit('error', {'message': 'sessionId is required'})
        return None
    return f"session:{session_id}"


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_watch_session(data):
    """Join the room that receives ``session_update`` for one session."""
    room = _room(data)
    if not room:
        return
    engine = current_app.extensions['game_engine']
    try:
        session = engine.get(data['sessionId'])
    except GameError as exc:
        emit('error', exc.to_dict())
        return
    join_room(room)
    emit('watching', {'room': room, 'session': engine.project(session)})


def handle_unwatch_session(data):
    room = _room(data)
    if not room:
        return
    leave_room(room)
    emit('unwatched', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    handlers = {
        'connect': handle_connect,
        'watch_session': handle_watch_session,
        'unwatch_session': handle_unwatch_session,
        'ping': handle_ping,
    }
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        for event, handler in handlers.items():
            socketio.on_event(event, handler, namespace=namespace)
