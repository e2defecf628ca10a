from typing import Any, List

from chessroom import db
from chessroom.exceptions import ChatError
from chessroom.models import ChatMessage


def post_message(author: str, data: Any, max_length: int = 500) -> ChatMessage:
    """Validate and store one chat message.

    Raises ChatError for empty/oversized messages or when the insert fails;
    the session is rolled back in the latter case.
    """
    text = (data or {}).get('message') if isinstance(data, dict) else None
    if not isinstance(text, str) or not text.strip():
        raise ChatError('message is required')
    text = text.strip()
    if len(text) > max_length:
        raise ChatError(f'message exceeds {max_length} characters')

    msg = ChatMessage(author=author, message=text)
    try:
        db.session.add(msg)
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        raise ChatError('message could not be stored') from exc
    return msg


def recent_messages(limit: int = 50) -> List[ChatMessage]:
    """Most recent messages, oldest first."""
    rows = (
        ChatMessage.query
        .order_by(ChatMessage.timestamp.desc(), ChatMessage.id.desc())
        .limit(limit)
        .all()
    )
    return list(reversed(rows))
