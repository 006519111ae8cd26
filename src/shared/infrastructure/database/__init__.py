"""
Shared Database Infrastructure
Declarative base and async session management
"""
from src.shared.infrastructure.database.base_model import Base, JSONType, TimestampMixin
from src.shared.infrastructure.database.session import DatabaseSessionFactory

__all__ = [
    "Base",
    "JSONType",
    "TimestampMixin",
    "DatabaseSessionFactory",
]
