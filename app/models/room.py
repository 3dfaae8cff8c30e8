import uuid
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import relationship
from app.models.base import Base
from .room_membership import room_participants

DEFAULT_CAPACITY = 5

class Room(Base):
    __tablename__ = "rooms"
    
    guid = Column(PG_UUID(as_uuid=True), unique=True, nullable=False, default=uuid.uuid4, index=True)
    name = Column(String(100), nullable=False)
    capacity = Column(Integer, nullable=False, default=DEFAULT_CAPACITY)
    host_id = Column(PG_UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    
    host = relationship("User", back_populates="hosted_rooms")
    participants = relationship("User", secondary=room_participants, back_populates="joined_rooms")

    def has_participant(self, user_id: uuid.UUID) -> bool:
        return any(participant.id == user_id for participant in self.participants)

    @property
    def is_full(self) -> bool:
        return len(self.participants) >= self.capacity
    
    def __repr__(self):
        return f"<Room(id={self.id}, guid={self.guid}, name='{self.name}', capacity={self.capacity})>"
