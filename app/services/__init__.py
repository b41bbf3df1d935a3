"""Services package - expose all concrete services from one import."""
from .film_service import AGE_RATINGS, FilmService, ValidationError

__all__ = [
    'AGE_RATINGS',
    'FilmService',
    'ValidationError',
]
