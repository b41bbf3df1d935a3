"""Repository for film records ({film_id: film})."""
import uuid
from typing import Callable, Dict, List, Optional

from .base import BaseRepository

DEFAULT_LIMIT = 20
# Fresh ids drawn before create() gives up on a colliding id space
MAX_ID_ATTEMPTS = 3


class IdentifierExhaustedError(RuntimeError):
    """Raised when no unused film id could be drawn."""


def _copy(film: Dict) -> Dict:
    return dict(film, actors=list(film['actors']))


class FilmRepository(BaseRepository):
    """Thread-safe in-memory store of film records.

    Schema::

        {
          "<uuid4>": {
            "id": "<uuid4>", "title": str, "year": int, "country": str,
            "director": str, "rating": float, "duration": int,
            "age_rating": str, "actors": [str, ...]
          }
        }

    Reads share the lock, writes take it exclusively.  Stored dicts are
    never mutated: :meth:`update` builds a replacement and swaps it in, and
    every method hands callers a copy.

    Listing follows creation order; an update keeps the record's position.
    """

    def __init__(self, id_factory: Callable[[], uuid.UUID] = uuid.uuid4) -> None:
        super().__init__()
        self._new_id = id_factory
        self._data: Dict[str, Dict] = {}

    def __len__(self) -> int:
        with self._reading():
            return len(self._data)

    def create(self, title: str, year: int, country: str, director: str,
               duration: int, age_rating: str) -> Dict:
        """Store a new film with ``rating=0`` and no actors; return a copy.

        Raises:
            IdentifierExhaustedError: every drawn id was already taken.
        """
        with self._writing():
            for _ in range(MAX_ID_ATTEMPTS):
                film_id = str(self._new_id())
                if film_id not in self._data:
                    break
            else:
                raise IdentifierExhaustedError(
                    f"No unused film id after {MAX_ID_ATTEMPTS} attempts"
                )
            film = {
                'id': film_id,
                'title': title,
                'year': year,
                'country': country,
                'director': director,
                'rating': 0.0,
                'duration': duration,
                'age_rating': age_rating,
                'actors': [],
            }
            self._data[film_id] = film
            return _copy(film)

    def get_by_id(self, film_id: str) -> Optional[Dict]:
        """Return the film stored under *film_id*, or ``None``."""
        with self._reading():
            film = self._data.get(film_id)
            return _copy(film) if film is not None else None

    def list(self, limit: Optional[int] = None,
             offset: Optional[int] = None) -> List[Dict]:
        """Return up to *limit* films after skipping *offset* of them.

        ``None`` or non-positive values fall back to ``limit=20`` and
        ``offset=0``.
        """
        if not limit or limit <= 0:
            limit = DEFAULT_LIMIT
        if not offset or offset <= 0:
            offset = 0
        with self._reading():
            films = list(self._data.values())[offset:offset + limit]
            return [_copy(f) for f in films]

    def update(self, film_id: str, title: str, year: int, country: str,
               director: str, rating: float, duration: int, age_rating: str,
               actors: List[str]) -> Optional[Dict]:
        """Replace every mutable field of *film_id*.

        Returns:
            The updated film, or ``None`` if *film_id* does not exist (in
            which case nothing is changed).
        """
        with self._writing():
            if film_id not in self._data:
                return None
            film = {
                'id': film_id,
                'title': title,
                'year': year,
                'country': country,
                'director': director,
                'rating': rating,
                'duration': duration,
                'age_rating': age_rating,
                'actors': list(actors),
            }
            self._data[film_id] = film
            return _copy(film)

    def delete(self, film_id: str) -> bool:
        """Remove *film_id*.  Returns ``True`` if it was present."""
        with self._writing():
            return self._data.pop(film_id, None) is not None
