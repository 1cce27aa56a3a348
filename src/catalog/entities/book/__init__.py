"""Entity package: Book."""

from .entity import Book, BookCreate, BookReplace
from .repository import BookRepository
from .table import BookTable

__all__ = ["Book", "BookCreate", "BookReplace", "BookRepository", "BookTable"]
