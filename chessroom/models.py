from datetime import datetime, timezone

from chessroom import db


def _utcnow():
    return datetime.now(timezone.utc)


class ChatMessage(db.Model):
    __tablename__ = 'chat_message'
    id = db.Column(db.Integer, primary_key=True)
    author = db.Column(db.String(32), nullable=False)  # role of the sender when sent
    sender = db.Column(db.String(16), nullable=False, default='user')  # user, bot, admin
    message = db.Column(db.Text, nullable=False)
    timestamp = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'author': self.author,
            'sender': self.sender,
            'message': self.message,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
        }
