#!/usr/bin/env python3
"""
Walk through create -> get -> update -> delete against a running server.

    python scripts/smoke_films.py [http://localhost:8001]
"""
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from film_client import FilmsClient

base_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8001"
client = FilmsClient(base_url)

film = client.create_film({
    "title": "The Matrix", "year": 1999, "country": "USA",
    "director": "Lana Wachowski", "duration": 136, "ageRating": "16+",
})
print("CREATED:", film)
print("GET:", client.get_film(film["id"]))

fields = {k: v for k, v in film.items() if k != "id"}
fields.update(rating=8.5, actors=["Keanu Reeves", "Carrie-Anne Moss"])
print("UPDATED:", client.update_film(film["id"], fields))
print("LIST:", len(client.list_films()), "film(s)")
print("DELETE:", client.delete_film(film["id"]))
print("DELETE AGAIN:", client.delete_film(film["id"]))
print("GET AFTER DELETE:", client.get_film(film["id"]))
