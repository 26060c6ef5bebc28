from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from app.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String, unique=True, nullable=False)
    # bcrypt hash, never serialized
    password = Column(String, nullable=False)

    tasks = relationship("Task", back_populates="owner")
