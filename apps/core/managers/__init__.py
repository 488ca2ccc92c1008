"""
Core managers for soft-deleted documents and policies.
"""
from .document import DocumentManager, DocumentQuerySet
from .policy import PolicyManager, PolicyQuerySet

__all__ = [
    'DocumentQuerySet',
    'DocumentManager',
    'PolicyQuerySet',
    'PolicyManager',
]
