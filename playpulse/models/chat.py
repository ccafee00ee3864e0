"""Chat message SQLAlchemy model definition."""

from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from playpulse.database import Base


class ChatMessage(Base):
    __tablename__ = "chat_message"

    message_id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    receiver_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    content = Column(Text, nullable=False)
    enrollment_id = Column(Integer, ForeignKey("enrollment.enrollment_id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    sender = relationship("User", foreign_keys=[sender_id])
    receiver = relationship("User", foreign_keys=[receiver_id])

    __table_args__ = (
        Index("idx_chat_sender", "sender_id", "created_at"),
        Index("idx_chat_receiver", "receiver_id", "created_at"),
    )

    @property
    def sender_name(self) -> str | None:
        return self.sender.name if self.sender else None

    @property
    def receiver_name(self) -> str | None:
        return self.receiver.name if self.receiver else None
