from flask import Blueprint, jsonify, request

from chessroom import get_coordinator
from chessroom.services.chat import recent_messages

game_api = Blueprint('game_api', __name__)

MAX_CHAT_PAGE = 200


@game_api.route('/game/state', methods=['GET'])
def get_game_state():
    return jsonify(get_coordinator().snapshot())


@game_api.route('/chat/messages', methods=['GET'])
def get_chat_messages():
    try:
        limit = int(request.args.get('limit', 50))
    except (TypeError, ValueError):
        return jsonify({'error': 'limit must be an integer'}), 400
    limit = max(1, min(limit, MAX_CHAT_PAGE))
    return jsonify([m.to_dict() for m in recent_messages(limit)])
