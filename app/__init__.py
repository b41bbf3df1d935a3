"""
FilmList application package.

Layered the same way for every entity:

  app/repositories/  - in-memory storage with reader/writer locking.
  app/services/      - boundary logic: wire validation, id parsing, serialisation.

``film_server.py`` is the integration point: it creates one repository and
one service at import time and its Flask route handlers call the service
only, keeping the HTTP layer apart from storage.
"""
