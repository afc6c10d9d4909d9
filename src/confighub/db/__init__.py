"""Engine, session factory and declarative base for ConfigHub."""

from .session import Base, SessionLocal, engine, get_db

__all__ = ["Base", "SessionLocal", "engine", "get_db"]
