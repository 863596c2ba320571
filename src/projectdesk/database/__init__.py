"""
Database module for the projectdesk backend
"""

from .connection import create_all, get_async_engine, get_async_session, init_database
from .gateway import EntityGateway, apply_updates

__all__ = [
    "EntityGateway",
    "apply_updates",
    "create_all",
    "get_async_engine",
    "get_async_session",
    "init_database",
]
