"""
SQLAlchemy Base model
"""
from sqlalchemy.orm import DeclarativeBase

class Base(DeclarativeBase):
    """SQLAlchemy Base class"""
    pass
