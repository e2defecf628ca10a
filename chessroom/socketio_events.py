from flask import current_app, request
from flask_socketio import emit

from chessroom import socketio
from chessroom.exceptions import ChatError
from chessroom.services.chat import post_message
from chessroom.services.games import SessionCoordinator


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def register_socketio_handlers(coordinator: SessionCoordinator, namespace: str = '/') -> None:
    """Register Socket.IO event handlers bound to the process' coordinator."""

    def handle_connect(auth=None):
        coordinator.handle_connect(_get_sid())

    def handle_disconnect(reason=None):
        coordinator.handle_disconnect(_get_sid())

    def handle_move(data):
        coordinator.handle_move_request(_get_sid(), data)

    def handle_sync(data=None):
        coordinator.handle_sync(_get_sid())

    def handle_chat(data):
        sid = _get_sid()
        author = coordinator.session.registry.role_of(sid).value
        try:
            msg = post_message(author, data, max_length=current_app.config.get('CHAT_MAX_LENGTH', 500))
        except ChatError as exc:
            current_app.logger.info(f"[chat-rejected] sid={sid} error={exc}")
            emit('error', {'message': str(exc)})
            return
        coordinator.broadcaster.broadcast('chat', msg.to_dict())

    def handle_ping(data=None):
        emit('pong', data or {})

    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('move', handle_move, namespace=namespace)
    socketio.on_event('sync', handle_sync, namespace=namespace)
    socketio.on_event('chat', handle_chat, namespace=namespace)
    socketio.on_event('ping', handle_ping, namespace=namespace)
