from .api import APIClient
from .endpoints import Endpoint

__all__ = ["APIClient", "Endpoint"]
