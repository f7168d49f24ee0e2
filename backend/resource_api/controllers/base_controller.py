"""
Base controller class.
Controllers turn a route's inputs into calls on collaborators and return responses.
"""

from abc import ABC


class BaseController(ABC):
    """Base controller class for all controllers."""
    pass
