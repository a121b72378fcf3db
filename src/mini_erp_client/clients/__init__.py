from .base import BaseClient
from .products import ProductsClient

__all__ = ["BaseClient", "ProductsClient"]
