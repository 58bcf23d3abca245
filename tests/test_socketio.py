def events(sio_client, name):
    return [e for e in sio_client.get_received('/ws') if e['name'] == name]


def test_socket_connect_and_ping(sio_client):
    assert sio_client.is_connected('/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'connected' for pkt in received)

    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    pongs = events(sio_client, 'pong')
    assert pongs and pongs[0]['args'][0] == {'n': 1}


def test_watch_session_receives_updates(sio_client, client):
    view = client.post('/api/games/number-maze/start', json={'seed': 3}).get_json()
    sid = view['sessionId']
    sio_client.get_received('/ws')  # flush

    sio_client.emit('watch_session', {'sessionId': sid}, namespace='/ws')
    watching = events(sio_client, 'watching')
    assert watching[0]['args'][0]['room'] == f'session:{sid}'
    assert watching[0]['args'][0]['session']['sessionId'] == sid

    client.post('/api/games/number-maze/move', json={'sessionId': sid, 'operation': 'multiply', 'operand': 1})
    updates = events(sio_client, 'session_update')
    assert len(updates) == 1
    assert updates[0]['args'][0]['progress']['moves'] == 1

    client.post('/api/games/number-maze/complete', json={'sessionId': sid})
    updates = events(sio_client, 'session_update')
    assert updates[0]['args'][0]['completed'] is True


def test_unwatch_stops_updates(sio_client, client):
    sid = client.post('/api/games/number-maze/start', json={}).get_json()['sessionId']
    sio_client.emit('watch_session', {'sessionId': sid}, namespace='/ws')
    sio_client.emit('unwatch_session', {'sessionId': sid}, namespace='/ws')
    sio_client.get_received('/ws')

    client.post('/api/games/number-maze/move', json={'sessionId': sid, 'operation': 'multiply', 'operand': 1})
    assert events(sio_client, 'session_update') == []


def test_watch_unknown_session(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('watch_session', {'sessionId': 'missing'}, namespace='/ws')
    errors = events(sio_client, 'error')
    assert errors[0]['args'][0]['kind'] == 'session_not_found'

    sio_client.emit('watch_session', {}, namespace='/ws')
    assert events(sio_client, 'error')[0]['args'][0] == {'message': 'sessionId is required'}


def test_watch_rejects_non_object_payload(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('watch_session', 'abc', namespace='/ws')
    assert events(sio_client, 'error')[0]['args'][0] == {'message': 'sessionId is required'}

    sio_client.emit('unwatch_session', ['abc'], namespace='/ws')
    assert events(sio_client, 'error')[0]['args'][0] == {'message': 'sessionId is required'}

    sio_client.emit('watch_session', {'sessionId': 42}, namespace='/ws')
    assert events(sio_client, 'error')[0]['args'][0] == {'message': 'sessionId is required'}
    assert sio_client.is_connected('/ws')
