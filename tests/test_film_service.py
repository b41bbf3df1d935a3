#!/usr/bin/env python3
"""
Unit tests for the films service layer (wire validation and mapping).

Run with:
    python -m pytest tests/test_film_service.py
"""
import os
import sys
import unittest
import uuid

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.repositories import FilmRepository
from app.services import AGE_RATINGS, FilmService, ValidationError
from app.services.film_service import parse_id


CREATE_BODY = {
    'title': 'The Matrix', 'year': 1999, 'country': 'USA',
    'director': 'Lana Wachowski', 'duration': 136, 'ageRating': '16+',
}


def _update_body(**overrides):
    body = dict(CREATE_BODY, rating=8.5, actors=['Keanu Reeves'])
    body.update(overrides)
    return body


class TestFilmServiceCreate(unittest.TestCase):

    def setUp(self):
        self.repo = FilmRepository()
        self.svc = FilmService(self.repo)

    def test_returns_wire_film(self):
        film = self.svc.create(CREATE_BODY)
        self.assertEqual(film['ageRating'], '16+')
        self.assertNotIn('age_rating', film)
        self.assertEqual(film['rating'], 0.0)
        self.assertEqual(film['actors'], [])

    def test_ignores_rating_and_actors(self):
        film = self.svc.create(dict(CREATE_BODY, rating=9.9, actors=['Neo']))
        self.assertEqual(film['rating'], 0.0)
        self.assertEqual(film['actors'], [])

    def test_stores_age_rating_internally(self):
        film = self.svc.create(CREATE_BODY)
        self.assertEqual(self.repo.get_by_id(film['id'])['age_rating'], '16+')

    def test_every_age_rating_accepted(self):
        for rating in AGE_RATINGS:
            self.assertEqual(self.svc.create(dict(CREATE_BODY, ageRating=rating))['ageRating'], rating)

    def test_rejects_unknown_age_rating(self):
        with self.assertRaises(ValidationError):
            self.svc.create(dict(CREATE_BODY, ageRating='21+'))

    def test_rejects_missing_field(self):
        body = dict(CREATE_BODY)
        del body['director']
        with self.assertRaises(ValidationError) as ctx:
            self.svc.create(body)
        self.assertIn('director', str(ctx.exception))

    def test_rejects_non_object_body(self):
        for body in (None, [], 'film'):
            with self.assertRaises(ValidationError):
                self.svc.create(body)

    def test_rejects_wrong_types(self):
        for field, value in (('title', 1), ('year', '1999'), ('year', True),
                             ('duration', 1.5), ('country', None)):
            with self.assertRaises(ValidationError, msg=field):
                self.svc.create(dict(CREATE_BODY, **{field: value}))

    def test_no_range_validation(self):
        film = self.svc.create(dict(CREATE_BODY, year=-5, duration=0))
        self.assertEqual(film['year'], -5)
        self.assertEqual(film['duration'], 0)

    def test_nothing_stored_on_validation_error(self):
        with self.assertRaises(ValidationError):
            self.svc.create(dict(CREATE_BODY, year='x'))
        self.assertEqual(self.svc.count(), 0)


class TestFilmServiceReadUpdateDelete(unittest.TestCase):

    def setUp(self):
        self.svc = FilmService(FilmRepository())
        self.film = self.svc.create(CREATE_BODY)

    def test_get(self):
        self.assertEqual(self.svc.get(self.film['id']), self.film)

    def test_get_accepts_uppercase_id(self):
        self.assertEqual(self.svc.get(self.film['id'].upper()), self.film)

    def test_get_missing_returns_none(self):
        self.assertIsNone(self.svc.get(str(uuid.uuid4())))

    def test_get_invalid_id_raises(self):
        with self.assertRaises(ValidationError):
            self.svc.get('not-a-uuid')

    def test_update_full_replacement(self):
        updated = self.svc.update(self.film['id'], _update_body(title='Reloaded'))
        self.assertEqual(updated['title'], 'Reloaded')
        self.assertEqual(updated['rating'], 8.5)
        self.assertEqual(updated['actors'], ['Keanu Reeves'])
        self.assertEqual(self.svc.get(self.film['id']), updated)

    def test_update_int_rating_becomes_float(self):
        updated = self.svc.update(self.film['id'], _update_body(rating=7))
        self.assertIsInstance(updated['rating'], float)

    def test_update_requires_every_field(self):
        body = _update_body()
        del body['actors']
        with self.assertRaises(ValidationError):
            self.svc.update(self.film['id'], body)
        self.assertEqual(self.svc.get(self.film['id']), self.film)

    def test_update_rejects_bad_actors(self):
        for actors in ('Neo', ['Neo', 3]):
            with self.assertRaises(ValidationError):
                self.svc.update(self.film['id'], _update_body(actors=actors))

    def test_update_rejects_bad_rating(self):
        with self.assertRaises(ValidationError):
            self.svc.update(self.film['id'], _update_body(rating='high'))

    def test_update_rejects_non_finite_rating(self):
        for rating in (float('nan'), float('inf'), float('-inf')):
            with self.assertRaises(ValidationError, msg=repr(rating)):
                self.svc.update(self.film['id'], _update_body(rating=rating))
        self.assertEqual(self.svc.get(self.film['id']), self.film)

    def test_update_rejects_int_rating_too_large_for_float(self):
        with self.assertRaises(ValidationError):
            self.svc.update(self.film['id'], _update_body(rating=10 ** 400))
        self.assertEqual(self.svc.get(self.film['id']), self.film)

    def test_update_missing_returns_none(self):
        self.assertIsNone(self.svc.update(str(uuid.uuid4()), _update_body()))

    def test_delete(self):
        self.assertTrue(self.svc.delete(self.film['id']))
        self.assertFalse(self.svc.delete(self.film['id']))
        self.assertIsNone(self.svc.get(self.film['id']))


class TestFilmServiceList(unittest.TestCase):

    def setUp(self):
        self.svc = FilmService(FilmRepository())
        for i in range(25):
            self.svc.create(dict(CREATE_BODY, title=f'Film {i}'))

    def test_defaults(self):
        self.assertEqual(len(self.svc.list()), 20)

    def test_query_strings_are_parsed(self):
        films = self.svc.list('5', '22')
        self.assertEqual([f['title'] for f in films], ['Film 22', 'Film 23', 'Film 24'])

    def test_blank_values_use_defaults(self):
        self.assertEqual(len(self.svc.list('', '')), 20)

    def test_non_integer_raises(self):
        with self.assertRaises(ValidationError):
            self.svc.list('ten')
        with self.assertRaises(ValidationError):
            self.svc.list(None, '1.5')


class TestParseId(unittest.TestCase):

    def test_canonicalises(self):
        raw = '  6BA7B810-9DAD-11D1-80B4-00C04FD430C8 '
        self.assertEqual(parse_id(raw), '6ba7b810-9dad-11d1-80b4-00c04fd430c8')

    def test_rejects_garbage(self):
        for raw in ('', '123', 'zzzzzzzz-zzzz-zzzz-zzzz-zzzzzzzzzzzz'):
            with self.assertRaises(ValidationError):
                parse_id(raw)


if __name__ == '__main__':
    unittest.main()
