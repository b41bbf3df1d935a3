#!/usr/bin/env python3
"""
FilmList CLI - interactive film management against a running FilmList server.
"""

import argparse
import sys
import uuid
from typing import Dict, List, Optional

from colorama import Fore, Style, init

import filmlist
from app.services import AGE_RATINGS
from film_client import FilmsAPIError, FilmsClient, FilmsConnectionError

init(autoreset=True)

_UPDATABLE = ('title', 'year', 'country', 'director', 'rating', 'duration',
              'ageRating', 'actors')
CLEAR_ACTORS = '-'


def merge_film(current: Dict, answers: Dict[str, str]) -> Dict:
    """Build a full update body from *current* and the user's raw *answers*.

    Blank answers keep the current value.  Numbers are parsed and actors are
    split on commas; an actors answer of ``-`` clears the list.

    Raises:
        ValueError: a numeric answer does not parse.
    """
    merged = {k: current[k] for k in _UPDATABLE}
    for key, raw in answers.items():
        raw = raw.strip()
        if not raw:
            continue
        if key in ('year', 'duration'):
            merged[key] = int(raw)
        elif key == 'rating':
            merged[key] = float(raw)
        elif key == 'actors' and raw == CLEAR_ACTORS:
            merged[key] = []
        elif key == 'actors':
            merged[key] = [a.strip() for a in raw.split(',') if a.strip()]
        else:
            merged[key] = raw
    return merged


class FilmConsole:
    """Menu-driven front end for :class:`~film_client.FilmsClient`."""

    def __init__(self, client: FilmsClient) -> None:
        self.client = client

    def display_film(self, film: Dict) -> None:
        actors: List[str] = film.get('actors') or []
        print(f"{Fore.YELLOW}ID: {Fore.WHITE}{film['id']}")
        print(f"{Fore.YELLOW}Title: {Fore.WHITE}{film['title']}")
        print(f"{Fore.YELLOW}Year: {Fore.WHITE}{film['year']}")
        print(f"{Fore.YELLOW}Country: {Fore.WHITE}{film['country']}")
        print(f"{Fore.YELLOW}Director: {Fore.WHITE}{film['director']}")
        print(f"{Fore.YELLOW}Rating: {Fore.WHITE}{film['rating']:.1f}/10")
        print(f"{Fore.YELLOW}Duration: {Fore.WHITE}{film['duration']} minutes")
        print(f"{Fore.YELLOW}Age Rating: {Fore.WHITE}{film['ageRating']}")
        print(f"{Fore.YELLOW}Actors: {Fore.WHITE}{', '.join(actors) if actors else 'None'}")

    def list_films(self) -> None:
        print(f"\n{Fore.CYAN}--- Listing all films ---")
        films = self.client.list_films()
        if not films:
            print(f"{Fore.YELLOW}No films found.")
            return
        print(f"{Fore.GREEN}Found {len(films)} films:")
        for i, film in enumerate(films, start=1):
            print(f"{Fore.WHITE}{i}. {film['title']} ({film['year']}) - {film['director']}")
            print(f"   ID: {film['id']}, Rating: {film['rating']:.1f}, "
                  f"Duration: {film['duration']} min")
            print(f"   Country: {film['country']}, Age Rating: {film['ageRating']}")
            if film.get('actors'):
                print(f"   Actors: {', '.join(film['actors'])}")

    def get_film(self) -> None:
        film_id = self._ask_id("Enter film ID: ")
        if film_id is None:
            return
        film = self.client.get_film(film_id)
        if film is None:
            print(f"{Fore.YELLOW}Film not found")
            return
        self.display_film(film)

    def create_film(self) -> None:
        print(f"\n{Fore.CYAN}--- Creating new film ---")
        try:
            fields = {
                'title': self._ask("Title: "),
                'year': int(self._ask("Year: ")),
                'country': self._ask("Country: "),
                'director': self._ask("Director: "),
                'duration': int(self._ask("Duration (minutes): ")),
                'ageRating': self._ask(f"Age Rating ({', '.join(AGE_RATINGS)}): "),
            }
        except ValueError:
            print(f"{Fore.RED}Year and duration must be whole numbers")
            return
        film = self.client.create_film(fields)
        print(f"\n{Fore.GREEN}Film created successfully!")
        self.display_film(film)

    def update_film(self) -> None:
        film_id = self._ask_id("Enter film ID to update: ")
        if film_id is None:
            return
        current = self.client.get_film(film_id)
        if current is None:
            print(f"{Fore.YELLOW}Film not found")
            return
        print(f"{Fore.CYAN}Current film data:")
        self.display_film(current)

        print(f"\n{Fore.CYAN}--- Updating film (leave blank to keep current value) ---")
        answers = {}
        for key in _UPDATABLE:
            if key == 'actors':
                prompt = f"actors [{', '.join(current[key])}] (comma-separated, {CLEAR_ACTORS} to clear): "
            else:
                prompt = f"{key} [{current[key]}]: "
            answers[key] = self._ask(prompt)
        try:
            fields = merge_film(current, answers)
        except ValueError:
            print(f"{Fore.RED}Year, duration and rating must be numbers")
            return

        film = self.client.update_film(film_id, fields)
        if film is None:
            print(f"{Fore.YELLOW}Film not found")
            return
        print(f"\n{Fore.GREEN}Film updated successfully!")
        self.display_film(film)

    def delete_film(self) -> None:
        film_id = self._ask_id("Enter film ID to delete: ")
        if film_id is None:
            return
        confirm = self._ask(f"Are you sure you want to delete film {film_id}? (y/N): ").lower()
        if confirm not in ('y', 'yes'):
            print(f"{Fore.YELLOW}Deletion cancelled.")
            return
        if self.client.delete_film(film_id):
            print(f"{Fore.GREEN}Film deleted successfully")
        else:
            print(f"{Fore.YELLOW}Film not found")

    def interactive_mode(self) -> None:
        """Run the menu loop until the user exits"""
        actions = {
            '1': self.list_films,
            '2': self.get_film,
            '3': self.create_film,
            '4': self.update_film,
            '5': self.delete_film,
        }
        while True:
            print(f"\n{Fore.CYAN}{Style.BRIGHT}=== Film Management System ===")
            print(f"{Fore.YELLOW}1. {Fore.WHITE}List all films")
            print(f"{Fore.YELLOW}2. {Fore.WHITE}Get film by ID")
            print(f"{Fore.YELLOW}3. {Fore.WHITE}Create new film")
            print(f"{Fore.YELLOW}4. {Fore.WHITE}Update film")
            print(f"{Fore.YELLOW}5. {Fore.WHITE}Delete film")
            print(f"{Fore.YELLOW}6. {Fore.WHITE}Exit")

            choice = self._ask(f"\n{Fore.GREEN}Choose an option: {Fore.WHITE}")
            if choice == '6':
                return
            action = actions.get(choice)
            if action is None:
                print(f"{Fore.RED}Invalid option. Please try again.")
                continue
            try:
                action()
            except (FilmsAPIError, FilmsConnectionError) as e:
                print(f"{Fore.RED}Error: {e}")

    # ------------------------------------------------------------------
    # Prompt helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _ask(prompt: str) -> str:
        return input(prompt).strip()

    def _ask_id(self, prompt: str) -> Optional[str]:
        raw = self._ask(prompt)
        try:
            return str(uuid.UUID(raw))
        except ValueError:
            print(f"{Fore.RED}Invalid ID format: {raw!r}")
            return None


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(description='FilmList interactive client')
    parser.add_argument('--config', '-c', default='config.json',
                        help='Path to config file (default: config.json)')
    parser.add_argument('--url', help='Server URL (default: http://localhost:8001)')
    args = parser.parse_args()

    try:
        config = filmlist.load_config(args.config)
    except filmlist.ConfigError as e:
        print(f"{Fore.RED}Error: {e}")
        sys.exit(1)

    try:
        FilmConsole(FilmsClient(args.url or config['api_url'])).interactive_mode()
    except (KeyboardInterrupt, EOFError):
        print()


if __name__ == "__main__":
    main()
