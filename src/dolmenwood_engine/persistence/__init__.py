from .idioms import find_or_create, patch_record
from .interfaces import Document, Repository, RepositoryFactory, SupportsInsertIfAbsent
from .memory import MemoryRepository, MemoryRepositoryFactory

__all__ = [
    "Document",
    "Repository",
    "RepositoryFactory",
    "SupportsInsertIfAbsent",
    "MemoryRepository",
    "MemoryRepositoryFactory",
    "find_or_create",
    "patch_record",
]
