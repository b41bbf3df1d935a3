#!/usr/bin/env python3
"""
FilmList server - REST API over the in-memory film repository.

Routes are thin: each one hands the request to ``film_service`` and maps the
outcome to a status code.  Errors always come back as
``{"code": <int>, "message": <str>}``.
"""

import argparse
import logging
import os
import sys

from colorama import Fore, init
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

import filmlist
from app.repositories import FilmRepository
from app.services import FilmService, ValidationError
from openapi_spec import build_spec

init(autoreset=True)

log_level = os.getenv('FILMS_LOG_LEVEL', 'INFO')
filmlist.setup_logging(log_level)
server_logger = logging.getLogger('filmlist.server')

app = Flask(__name__)

# Shared by every request thread; the repository does its own locking.
film_service = FilmService(FilmRepository())


def _error(code: int, message: str):
    return jsonify({'code': code, 'message': message}), code


# ===========================================================================================
# Error handlers
# ===========================================================================================

@app.errorhandler(ValidationError)
def handle_validation_error(e):
    return _error(400, str(e))


@app.errorhandler(HTTPException)
def handle_http_error(e):
    return _error(e.code, e.description or e.name)


@app.errorhandler(Exception)
def handle_unexpected_error(e):
    server_logger.exception("Unhandled error on %s %s", request.method, request.path)
    return _error(500, 'Internal server error')


# ===========================================================================================
# Film Endpoints
# ===========================================================================================

@app.route('/films', methods=['GET'])
def api_list_films():
    """List films, paged by ?limit= and ?offset="""
    films = film_service.list(request.args.get('limit'), request.args.get('offset'))
    return jsonify(films)


@app.route('/films', methods=['POST'])
def api_create_film():
    """Create a film"""
    film = film_service.create(request.get_json(silent=True))
    return jsonify(film), 201


@app.route('/films/<film_id>', methods=['GET'])
def api_get_film(film_id):
    """Get a single film"""
    film = film_service.get(film_id)
    if film is None:
        return _error(404, 'film not found')
    return jsonify(film)


@app.route('/films/<film_id>', methods=['PUT'])
def api_update_film(film_id):
    """Replace every mutable field of a film"""
    film = film_service.update(film_id, request.get_json(silent=True))
    if film is None:
        return _error(404, 'film not found')
    return jsonify(film)


@app.route('/films/<film_id>', methods=['DELETE'])
def api_delete_film(film_id):
    """Delete a film"""
    if not film_service.delete(film_id):
        return _error(404, 'film not found')
    return '', 204


# ===========================================================================================
# Meta Endpoints
# ===========================================================================================

@app.route('/api/status')
def api_status():
    """Get application status"""
    return jsonify({'ready': True, 'films': film_service.count()})


@app.route('/openapi.json')
def api_openapi():
    """Serve the OpenAPI document"""
    return jsonify(build_spec(server_url=request.host_url.rstrip('/')))


def _add_file_handler(path: str, level: str) -> None:
    try:
        log_dir = os.path.dirname(path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(path)
        fh.setFormatter(logging.Formatter('[%(asctime)s] %(levelname)s %(name)s: %(message)s'))
        fh.setLevel(getattr(logging, level.upper(), logging.INFO))
        logging.getLogger('filmlist').addHandler(fh)
    except OSError as e:
        server_logger.warning('Could not create log file handler: %s', e)


def main():
    """Main entry point for the server"""
    parser = argparse.ArgumentParser(description='FilmList REST server')
    parser.add_argument('--config', default='config.json', help='Path to config file')
    parser.add_argument('--host', help='Interface to bind (default: 127.0.0.1)')
    parser.add_argument('--port', type=int, help='Port to listen on (default: 8001)')
    parser.add_argument('--log-level', help='DEBUG, INFO, WARNING, ERROR or CRITICAL')
    args = parser.parse_args()

    try:
        config = filmlist.load_config(args.config)
    except filmlist.ConfigError as e:
        print(f"{Fore.RED}Error: {e}")
        sys.exit(1)

    host = args.host or config['host']
    port = args.port or config['port']
    level = args.log_level or config['log_level']
    filmlist.setup_logging(level)
    if config.get('log_file'):
        _add_file_handler(config['log_file'], level)

    print(f"{Fore.GREEN}Starting server on {host}:{port}")
    server_logger.info("Listening on %s:%s", host, port)
    try:
        app.run(host=host, port=port, debug=False, threaded=True)
    except KeyboardInterrupt:
        print(f"\n{Fore.CYAN}Server stopped")


if __name__ == "__main__":
    main()
