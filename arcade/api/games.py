from flask import Blueprint, jsonify, request, current_app
from flask_login import current_user
from arcade import socketio
from arcade.services.games import InvalidAction


games = Blueprint('games', __name__)


def _engine():
    return current_app.extensions['game_engine']


def _flag(value) -> bool:
    return str(value).lower() in ('1', 'true', 'yes')


def _session_id(data: dict) -> str:
    session_id = data.pop('sessionId', None)
    if not session_id or not isinstance(session_id, str):
        raise InvalidAction('sessionId is required')
    return session_id


def _body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidAction('Request body must be a JSON object')
    return dict(data)


def _broadcast(view: dict) -> None:
    socketio.emit('session_update', view, to=f"session:{view['sessionId']}", namespace='/ws')


@games.route('', methods=['GET'])
def list_games():
    return jsonify({'games': [g.describe() for g in _engine().games.values()]})


@games.route('/<string:game>/start', methods=['POST'])
def start_session(game):
    engine = _engine()
    data = request.get_json(silent=True)
    user_id = current_user.id if current_user.is_authenticated else None
    session = engine.create(game, {} if data is None else data, user_id=user_id)
    current_app.logger.info(f"[{game}] start session={session.session_id} user={user_id}")
    return jsonify(engine.project(session)), 201


@games.route('/<string:game>/session/<string:session_id>', methods=['GET'])
def get_session(game, session_id):
    engine = _engine()
    engine.game(game)
    session = engine.get(session_id, game_name=game)
    include_answers = _flag(request.args.get('includeAnswers'))
    return jsonify(engine.project(session, include_answers=include_answers))


@games.route('/<string:game>/move', methods=['POST'])
def move(game):
    engine = _engine()
    engine.game(game)
    data = _body()
    session_id = _session_id(data)
    outcome, session = engine.process(session_id, data, game_name=game)
    current_app.logger.info(
        f"[{game}] move session={session_id} result={outcome.result.value} completed={session.completed}"
    )
    view = engine.project(session)
    _broadcast(view)
    return jsonify({
        **outcome.to_dict(),
        'completed': session.completed,
        'score': session.score,
        'session': view,
    })


@games.route('/<string:game>/complete', methods=['POST'])
def complete(game):
    engine = _engine()
    engine.game(game)
    session = engine.finalize(_session_id(_body()), game_name=game)
    current_app.logger.info(f"[{game}] complete session={session.session_id} score={session.score}")
    _broadcast(engine.project(session))
    reveal = current_app.config.get('REVEAL_ANSWERS_ON_COMPLETE', True)
    return jsonify(engine.project(session, include_answers=reveal))
