import threading

import pytest

from arcade.services.games import (
    GameNotFound,
    InvalidAction,
    InvalidConfig,
    SessionAlreadyCompleted,
    SessionNotFound,
    StoreConflict,
)
from arcade.services.games.session import Result
from conftest import cards_by_pair, find_keys


def test_create_returns_unique_ids(engine):
    ids = {engine.create('memory', {}).session_id for _ in range(50)}
    assert len(ids) == 50


def test_create_persists_full_session(engine, clock):
    session = engine.create('memory', {'difficulty': 'Medium'}, user_id=7)
    stored = engine.get(session.session_id)
    assert stored.user_id == 7
    assert stored.start_time == clock.now
    assert len(stored.content['cards']) == 16
    assert all('value' in c for c in stored.content['cards'])
    assert stored.completed is False
    assert stored.end_time is None


def test_same_seed_same_content(engine):
    a = engine.create('sudoku', {'seed': 42, 'difficulty': 'medium'})
    b = engine.create('sudoku', {'seed': 42, 'difficulty': 'medium'})
    c = engine.create('sudoku', {'seed': 43, 'difficulty': 'medium'})
    assert a.content == b.content
    assert a.content != c.content


def test_unknown_game(engine):
    with pytest.raises(GameNotFound):
        engine.create('pinball', {})


@pytest.mark.parametrize('payload', [
    {'difficulty': 'Impossible'},
    {'theme': 'cars'},
    {'unexpected': True},
    {'timeLimit': 0},
    ['not', 'an', 'object'],
])
def test_invalid_config(engine, payload):
    with pytest.raises(InvalidConfig):
        engine.create('memory', payload)


def test_config_is_stored_with_camel_case_names(engine):
    session = engine.create('quiz', {'numberOfQuestions': 3, 'timeLimit': 120})
    assert session.config['numberOfQuestions'] == 3
    assert session.config['timeLimit'] == 120
    assert session.config['seed'] is None


def test_process_unknown_session(engine):
    with pytest.raises(SessionNotFound):
        engine.process('missing', {'cardIds': [0, 1]})


def test_process_under_wrong_game_is_not_found(engine):
    session = engine.create('memory', {})
    with pytest.raises(SessionNotFound):
        engine.process(session.session_id, {'cardIds': [0, 1]}, game_name='quiz')


@pytest.mark.parametrize('payload', [
    {},
    {'cardIds': [1]},
    {'cardIds': [0, 1, 2]},
    {'type': 'jump', 'cardIds': [0, 1]},
    {'cardIds': [0, 1], 'extra': 1},
    None,
])
def test_malformed_action_does_not_mutate(engine, payload):
    session = engine.create('memory', {})
    with pytest.raises(InvalidAction):
        engine.process(session.session_id, payload)
    stored = engine.get(session.session_id)
    assert stored.progress == session.progress
    assert stored.version == session.version


def test_rule_violation_does_not_mutate(engine):
    session = engine.create('memory', {'seed': 3})
    first, second = cards_by_pair(session)[:2]
    engine.process(session.session_id, {'cardIds': first})
    before = engine.get(session.session_id)
    with pytest.raises(InvalidAction):
        engine.process(session.session_id, {'cardIds': [first[0], second[0]]})
    after = engine.get(session.session_id)
    assert after.progress == before.progress
    assert after.content == before.content


def test_completed_session_rejects_moves(engine):
    session = engine.create('memory', {'seed': 5})
    for pair in cards_by_pair(session):
        outcome, updated = engine.process(session.session_id, {'cardIds': pair})
    assert updated.completed is True
    with pytest.raises(SessionAlreadyCompleted):
        engine.process(session.session_id, {'cardIds': [0, 1]})
    assert engine.get(session.session_id).completed is True


def test_terminal_move_scores_like_finalize(engine, clock):
    session = engine.create('memory', {'seed': 9})
    pairs = cards_by_pair(session)
    clock.advance(30)
    for pair in pairs:
        outcome, updated = engine.process(session.session_id, {'cardIds': pair})
    assert outcome.terminal
    assert outcome.result is Result.CORRECT
    # 6 perfect moves in 30 s: (1000 + 440) + 500 bonus
    assert updated.score == 1940
    assert updated.end_time == clock.now
    assert updated.progress['timeElapsed'] == 30


def test_finalize_is_idempotent(engine, clock):
    session = engine.create('quiz', {'numberOfQuestions': 3})
    clock.advance(12)
    first = engine.finalize(session.session_id)
    clock.advance(100)
    second = engine.finalize(session.session_id)
    assert first.completed and second.completed
    assert second.end_time == first.end_time
    assert second.score == first.score
    assert second == first


def test_finalize_unknown_session(engine):
    with pytest.raises(SessionNotFound):
        engine.finalize('nope')


def test_time_limit_expires_session(engine, clock):
    session = engine.create('math', {'timeLimit': 60, 'seed': 1})
    clock.advance(61)
    question = session.content['questions'][0]
    outcome, updated = engine.process(session.session_id, {'questionId': 1, 'answer': question['ans']})
    assert outcome.result is Result.NO_EFFECT
    assert outcome.details['expired'] is True
    assert updated.completed is True
    assert updated.progress['correctAnswers'] == 0
    with pytest.raises(SessionAlreadyCompleted):
        engine.process(session.session_id, {'questionId': 1, 'answer': question['ans']})


def test_within_time_limit_applies_move(engine, clock):
    session = engine.create('math', {'timeLimit': 60, 'seed': 1})
    clock.advance(59)
    question = session.content['questions'][0]
    outcome, updated = engine.process(session.session_id, {'questionId': 1, 'answer': question['ans']})
    assert outcome.result is Result.CORRECT
    assert updated.completed is False


def test_default_projection_hides_secrets(engine):
    for name, game in engine.games.items():
        session = engine.create(name, {})
        view = engine.project(session)
        assert not find_keys(view['content'], game.secret_fields), name
        assert not find_keys(view['progress'], game.secret_fields), name


def test_include_answers_needs_completion_or_authorization(engine):
    session = engine.create('quiz', {'numberOfQuestions': 2})
    assert not find_keys(engine.project(session, include_answers=True), {'ans'})
    assert find_keys(engine.project(session, include_answers=True, authorized=True), {'ans'})
    done = engine.finalize(session.session_id)
    assert find_keys(engine.project(done, include_answers=True), {'ans'})
    assert not find_keys(engine.project(done), {'ans'})


def test_moves_on_one_session_are_serialized(engine):
    session = engine.create('number-maze', {'maxMoves': 100, 'seed': 11})
    errors = []

    def play():
        try:
            engine.process(session.session_id, {'operation': 'multiply', 'operand': 1})
        except Exception as exc:  # collected for the assertion below
            errors.append(exc)

    threads = [threading.Thread(target=play) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    stored = engine.get(session.session_id)
    assert stored.progress['moves'] == 20
    assert len(engine.locks) == 0


def test_stale_write_is_a_conflict(engine):
    session = engine.create('memory', {})
    a = engine.get(session.session_id)
    b = engine.get(session.session_id)
    a.progress['moves'] = 1
    engine.store.put(a)
    b.progress['moves'] = 2
    with pytest.raises(StoreConflict):
        engine.store.put(b)
    assert engine.get(session.session_id).progress['moves'] == 1
