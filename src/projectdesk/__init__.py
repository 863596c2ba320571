"""
projectdesk backend
Multi-tenant project and task management over GraphQL
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
