from .document_loader import load_document
from .errors import LoaderError
from .schema_loader import load_schemas

__all__ = ["LoaderError", "load_document", "load_schemas"]
