class ChessRoomError(Exception):
    """Base error for the chessroom server."""


class RulesEngineError(ChessRoomError):
    """The rules engine failed on the authoritative position."""


class ChatError(ChessRoomError):
    """A chat message could not be accepted or stored."""
