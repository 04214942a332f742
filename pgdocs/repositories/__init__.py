"""
repositories/ - Object Facade
=============================
Table-bound repository objects over the functional API in ``pgdocs.db``.
"""

from pgdocs.repositories.document_repo import DocumentRepository

__all__ = ["DocumentRepository"]
