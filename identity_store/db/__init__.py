from .session import Base, DatabaseManager, IdentityItem, get_database_manager

__all__ = ["Base", "DatabaseManager", "IdentityItem", "get_database_manager"]
