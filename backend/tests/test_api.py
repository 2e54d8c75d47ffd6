import importlib
import json

from quizroom import config as config_module
from quizroom.realtime import events


def test_health_counts_rooms(client, sio_factory):
    assert client.get('/api/health').get_json() == {'ok': True, 'rooms': 0}

    sio_factory().emit(events.ROOM_CREATE, callback=True)
    sio_factory().emit(events.ROOM_CREATE, callback=True)

    assert client.get('/api/health').get_json() == {'ok': True, 'rooms': 2}


def test_room_summary(client, sio_factory):
    host = sio_factory()
    code = host.emit(events.ROOM_CREATE, callback=True)['roomCode']
    sio_factory().emit(events.ROOM_JOIN, {'roomCode': code, 'name': 'Ann'}, callback=True)

    res = client.get(f'/api/rooms/{code.lower()}')
    assert res.status_code == 200
    data = res.get_json()
    assert data['code'] == code
    assert data['phase'] == 'not_started'
    assert data['questionNumber'] == 0
    assert data['totalQuestions'] == 3
    assert [p['name'] for p in data['players']] == ['Ann']

    host.emit(events.GAME_START, {'roomCode': code}, callback=True)
    data = client.get(f'/api/rooms/{code}').get_json()
    assert data['phase'] == 'question_active'
    assert data['questionNumber'] == 1


def test_questions_file_and_create_attempts_are_wired(app_factory, tmp_path):
    question = {'text': 'Largest planet?', 'choices': ['Mars', 'Jupiter'],
                'correctIndex': 1, 'timeLimitSeconds': 20}
    path = tmp_path / 'questions.json'
    path.write_text(json.dumps([question] * 5), encoding='utf-8')

    application, socketio = app_factory(QUESTIONS_FILE=str(path), MAX_CREATE_ATTEMPTS=3)
    assert application.extensions['quizroom'].registry._max_create_attempts == 3

    host = socketio.test_client(application, flask_test_client=application.test_client())
    code = host.emit(events.ROOM_CREATE, callback=True)['roomCode']
    data = application.test_client().get(f'/api/rooms/{code}').get_json()
    assert data['totalQuestions'] == 5

    host.emit(events.GAME_START, {'roomCode': code}, callback=True)
    started = [p['args'][0] for p in host.get_received() if p['name'] == events.QUESTION_STARTED]
    assert started[0]['text'] == 'Largest planet?'
    assert started[0]['timeLimitSeconds'] == 20
    host.disconnect()


def test_proxy_headers_off_by_default(monkeypatch):
    monkeypatch.delenv('TRUST_PROXY_HEADERS', raising=False)
    assert importlib.reload(config_module).Config.TRUST_PROXY_HEADERS is False

    monkeypatch.setenv('TRUST_PROXY_HEADERS', '1')
    assert importlib.reload(config_module).Config.TRUST_PROXY_HEADERS is True
    monkeypatch.delenv('TRUST_PROXY_HEADERS')
    importlib.reload(config_module)


def test_unknown_room(client):
    res = client.get('/api/rooms/ZZZZ')
    assert res.status_code == 404
    assert res.get_json() == {'error': 'room_not_found'}
