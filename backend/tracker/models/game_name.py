# tracker/models/game_name.py
from sqlalchemy import Column, DateTime, Integer, String, func

from tracker.db import Base


class GameName(Base):
    __tablename__ = "game_names"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True)
    created_by = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
