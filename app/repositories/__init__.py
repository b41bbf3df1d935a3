"""Repository package - expose all concrete repositories from one import."""
from .film_repository import FilmRepository, IdentifierExhaustedError

__all__ = [
    'FilmRepository',
    'IdentifierExhaustedError',
]
