from chessroom.services.games.registry import ConnectionRegistry
from chessroom.services.games.types import Role, Side


def test_first_two_connections_take_slots_then_observers():
    reg = ConnectionRegistry()
    assert reg.on_connect('a') is Role.FIRST_PLAYER
    assert reg.on_connect('b') is Role.SECOND_PLAYER
    assert reg.on_connect('c') is Role.OBSERVER
    assert reg.on_connect('d') is Role.OBSERVER
    assert reg.both_occupied()
    assert reg.connections() == ['a', 'b', 'c', 'd']
    assert reg.observer_count() == 2


def test_disconnect_frees_only_the_holders_slot():
    reg = ConnectionRegistry()
    for sid in ('a', 'b', 'c'):
        reg.on_connect(sid)

    assert reg.on_disconnect('c') is Role.OBSERVER
    assert reg.both_occupied()

    assert reg.on_disconnect('a') is Role.FIRST_PLAYER
    assert reg.holder(Side.FIRST) is None
    assert reg.holder(Side.SECOND) == 'b'
    assert reg.occupancy() == {'first': False, 'second': True}
    assert not reg.both_occupied()


def test_reconnecting_player_gets_free_slot_or_observer():
    reg = ConnectionRegistry()
    reg.on_connect('a')
    reg.on_connect('b')
    reg.on_connect('watcher')

    reg.on_disconnect('a')
    # the watcher keeps its observer role; a fresh connection fills the gap
    assert reg.role_of('watcher') is Role.OBSERVER
    assert reg.on_connect('a-again') is Role.FIRST_PLAYER
    assert reg.on_connect('late') is Role.OBSERVER


def test_role_of_unknown_connection_is_observer():
    reg = ConnectionRegistry()
    assert reg.role_of('nobody') is Role.OBSERVER
    assert reg.on_disconnect('nobody') is Role.OBSERVER
    assert len(reg) == 0
