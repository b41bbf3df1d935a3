"""Business logic for the films API: wire validation and serialisation."""
import logging
import math
import uuid
from typing import Dict, List, Optional

from ..repositories.film_repository import FilmRepository

AGE_RATINGS = ('0+', '6+', '12+', '16+', '18+')

_CREATE_FIELDS = ('title', 'year', 'country', 'director', 'duration', 'ageRating')
_UPDATE_FIELDS = ('title', 'year', 'country', 'director', 'rating', 'duration',
                  'ageRating', 'actors')

logger = logging.getLogger('filmlist.service.films')


class ValidationError(ValueError):
    """Raised when a request body, id or query parameter is malformed."""


class FilmService:
    """Translates wire requests into :class:`FilmRepository` calls.

    Rules
    -----
    * Request bodies must carry every field of the operation; ``update`` is
      a full replacement, so clients merge partial edits themselves.
    * ``create`` ignores any ``rating``/``actors`` supplied by the caller.
    * Ids are UUIDs and are normalised to lowercase canonical form.
    * Absence is reported as ``None``/``False``, never as an exception.
    """

    def __init__(self, repository: FilmRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create(self, payload) -> Dict:
        fields = _validate(payload, _CREATE_FIELDS)
        film = self._repo.create(
            title=fields['title'],
            year=fields['year'],
            country=fields['country'],
            director=fields['director'],
            duration=fields['duration'],
            age_rating=fields['ageRating'],
        )
        logger.info("Created film %s (%s)", film['id'], film['title'])
        return to_wire(film)

    def get(self, raw_id) -> Optional[Dict]:
        film = self._repo.get_by_id(parse_id(raw_id))
        return to_wire(film) if film is not None else None

    def list(self, raw_limit=None, raw_offset=None) -> List[Dict]:
        """Return one page of films.

        Args:
            raw_limit:  Page size as an int or query-string value.
            raw_offset: Number of films to skip, same forms as *raw_limit*.

        Raises:
            ValidationError: a value is present but not an integer.
        """
        limit = _parse_int_param('limit', raw_limit)
        offset = _parse_int_param('offset', raw_offset)
        return [to_wire(f) for f in self._repo.list(limit, offset)]

    def update(self, raw_id, payload) -> Optional[Dict]:
        film_id = parse_id(raw_id)
        fields = _validate(payload, _UPDATE_FIELDS)
        logger.debug("Updating film %s with %s", film_id, fields)
        film = self._repo.update(
            film_id,
            title=fields['title'],
            year=fields['year'],
            country=fields['country'],
            director=fields['director'],
            rating=fields['rating'],
            duration=fields['duration'],
            age_rating=fields['ageRating'],
            actors=fields['actors'],
        )
        if film is None:
            logger.info("Update of film %s: not found", film_id)
            return None
        return to_wire(film)

    def delete(self, raw_id) -> bool:
        film_id = parse_id(raw_id)
        deleted = self._repo.delete(film_id)
        logger.info("Delete film %s: %s", film_id, 'done' if deleted else 'not found')
        return deleted

    def count(self) -> int:
        return len(self._repo)


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------

def to_wire(film: Dict) -> Dict:
    """Return the JSON representation of a stored film."""
    return {
        'id': film['id'],
        'title': film['title'],
        'year': film['year'],
        'country': film['country'],
        'director': film['director'],
        'rating': film['rating'],
        'duration': film['duration'],
        'ageRating': film['age_rating'],
        'actors': list(film['actors']),
    }


def parse_id(raw_id) -> str:
    """Return *raw_id* as a canonical UUID string.

    Raises:
        ValidationError: *raw_id* is not a UUID.
    """
    try:
        return str(uuid.UUID(str(raw_id).strip()))
    except ValueError:
        raise ValidationError(f"Invalid film id: {raw_id!r}") from None


def _parse_int_param(name: str, raw) -> Optional[int]:
    if raw is None or raw == '':
        return None
    if isinstance(raw, bool):
        raise ValidationError(f"'{name}' must be an integer")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"'{name}' must be an integer") from None


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate(payload, required) -> Dict:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    missing = [f for f in required if f not in payload]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

    fields = {f: payload[f] for f in required}
    for name in ('title', 'country', 'director'):
        if not isinstance(fields[name], str):
            raise ValidationError(f"'{name}' must be a string")
    for name in ('year', 'duration'):
        if not _is_int(fields[name]):
            raise ValidationError(f"'{name}' must be an integer")
    if fields['ageRating'] not in AGE_RATINGS:
        raise ValidationError(
            f"'ageRating' must be one of: {', '.join(AGE_RATINGS)}"
        )
    if 'rating' in fields:
        rating = fields['rating']
        if not (_is_int(rating) or isinstance(rating, float)):
            raise ValidationError("'rating' must be a number")
        try:
            rating = float(rating)
        except OverflowError:
            raise ValidationError("'rating' must be a finite number") from None
        if not math.isfinite(rating):
            raise ValidationError("'rating' must be a finite number")
        fields['rating'] = rating
    if 'actors' in fields:
        actors = fields['actors']
        if not isinstance(actors, list) or not all(isinstance(a, str) for a in actors):
            raise ValidationError("'actors' must be a list of strings")
    return fields
