from sqlalchemy import Column, String

from app.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    usuario = Column(String, nullable=False, unique=True)
    password = Column(String, nullable=False)
