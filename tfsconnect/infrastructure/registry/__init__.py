from .registered_store import RegisteredConnectionStore

__all__ = ["RegisteredConnectionStore"]
