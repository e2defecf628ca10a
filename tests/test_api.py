from chessroom.models import ChatMessage
from chessroom.services.chat import post_message


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_initial_game_state(client):
    res = client.get('/api/game/state')
    assert res.status_code == 200
    state = res.get_json()
    assert state['status'] == 'waiting'
    assert state['side_to_move'] == 'first'
    assert state['clock'] == {'first': 600, 'second': 600}
    assert state['clock_running'] is False
    assert state['slots'] == {'first': False, 'second': False}
    assert state['observers'] == 0
    assert state['reason'] is None


def test_game_state_follows_socket_play(client, sio_clients):
    white = sio_clients()
    sio_clients()
    sio_clients()
    white.emit('move', {'from': 'd2', 'to': 'd4'})

    state = client.get('/api/game/state').get_json()
    assert state['status'] == 'in_progress'
    assert state['side_to_move'] == 'second'
    assert state['slots'] == {'first': True, 'second': True}
    assert state['observers'] == 1
    assert '3P4' in state['position']


def test_chat_history_is_oldest_first_and_limited(flask_app, client):
    for i in range(5):
        post_message('observer', {'message': f'msg {i}'})
    assert ChatMessage.query.count() == 5

    res = client.get('/api/chat/messages?limit=3')
    assert res.status_code == 200
    assert [m['message'] for m in res.get_json()] == ['msg 2', 'msg 3', 'msg 4']
    assert {m['sender'] for m in res.get_json()} == {'user'}


def test_chat_history_rejects_bad_limit(client):
    res = client.get('/api/chat/messages?limit=lots')
    assert res.status_code == 400
