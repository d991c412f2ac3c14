"""Catalog table models. Importing this package registers both tables."""

from library_catalog.models.author import Author
from library_catalog.models.book import Book

__all__ = ["Author", "Book"]
