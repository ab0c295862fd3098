from .content_backend import SQLAlchemyContentBackend, register_sqlalchemy_backends

__all__ = [
    "SQLAlchemyContentBackend",
    "register_sqlalchemy_backends",
]
