"""I/O utilities: filesystem checks."""

from infrastructure.io.fs import ensure_exists

__all__ = [
    "ensure_exists",
]
