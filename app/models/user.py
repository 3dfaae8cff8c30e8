from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.models.base import Base
from app.models.room_membership import room_participants

class User(Base):
    __tablename__ = "users"
    
    username = Column(String(20), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    mobile_token = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    # Relationships
    hosted_rooms = relationship("Room", back_populates="host")
    joined_rooms = relationship(
        "Room",
        secondary=room_participants,
        back_populates="participants",
    )
    
    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
