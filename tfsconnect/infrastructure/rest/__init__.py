from .config_server import RestConfigServerClient, authenticate_collection
from .factory import RestConnectionFactory

__all__ = ["RestConfigServerClient", "RestConnectionFactory", "authenticate_collection"]
