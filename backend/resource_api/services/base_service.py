"""
Base service class.
Services contain logic that is not tied to a single resource.
"""

from abc import ABC


class BaseService(ABC):
    """Base service class for all services."""
    pass
