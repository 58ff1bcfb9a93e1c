"""Interactive pokedex shell: browse areas, catch and inspect pokemon."""

from __future__ import annotations

import argparse
import random
import sys
from dataclasses import dataclass
from typing import Callable, TextIO

from pokedex.api import (
    DEFAULT_CACHE_INTERVAL,
    LOCATION_AREA_URL,
    POKEMON_URL,
    ApiError,
    PokeApiClient,
    Pokemon,
)
from pokedex.cache import Cache

PROMPT = "Pokedex > "
_STAT_LABELS = (
    "hp",
    "attack",
    "defense",
    "special-attack",
    "special-defense",
    "speed",
)


def clean_input(text: str) -> list[str]:
    """Lower-case ``text`` and split it into whitespace-separated words."""
    return text.lower().split()


@dataclass
class Config:
    """Paging state of the location browser."""

    next: str | None = LOCATION_AREA_URL
    prev: str | None = None
    url: str = LOCATION_AREA_URL


@dataclass(frozen=True)
class Command:
    """A named shell command and what it runs."""

    name: str
    description: str
    callback: Callable[[list[str]], None]


class ExitRequested(Exception):
    """Raised by the exit command to end the shell."""


class Repl:
    """Reads commands and runs them against the API client."""

    def __init__(
        self,
        client: PokeApiClient | None = None,
        out: TextIO | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.client = client if client is not None else PokeApiClient()
        self.out = out if out is not None else sys.stdout
        self.rng = rng if rng is not None else random.Random()
        self.config = Config()
        self.pokedex: dict[str, Pokemon] = {}
        self.commands: dict[str, Command] = {
            command.name: command
            for command in (
                Command("exit", "Exit the Pokedex", self.command_exit),
                Command("map", "Display 20 locations", self.command_map),
                Command("mapb", "Display previous 20 locations", self.command_mapb),
                Command("explore", "Show pokemon in the area", self.command_explore),
                Command("catch", "Attempt to catch a pokemon", self.command_catch),
                Command("inspect", "See pokemon stats", self.command_inspect),
                Command("pokedex", "See Pokedex", self.command_pokedex),
            )
        }

    def _print(self, *parts: object) -> None:
        print(*parts, file=self.out)

    def dispatch(self, line: str) -> None:
        """Run the command named by the first word of ``line``.

        Unknown commands show the help text. Empty lines do nothing.
        """
        tokens = clean_input(line)
        if not tokens:
            return
        name, args = tokens[0], tokens[1:]
        command = self.commands.get(name)
        if command is None:
            self.command_help(args)
        else:
            command.callback(args)

    def run(self, stream: TextIO) -> int:
        """Prompt for and run commands until exit or end of input.

        Returns 0 after the exit command and 1 when input runs out.
        """
        while True:
            self.out.write(PROMPT)
            self.out.flush()
            line = stream.readline()
            if not line.endswith("\n"):
                return 1
            try:
                self.dispatch(line)
            except ExitRequested:
                return 0
            except (ApiError, ValueError) as exc:
                self._print(f"Error: {exc}")

    def command_help(self, args: list[str]) -> None:
        """List every command with its description."""
        for command in self.commands.values():
            self._print(f"Command: {command.name}\nDescription: {command.description}\n")

    def command_exit(self, args: list[str]) -> None:
        """Say goodbye and end the shell."""
        self._print("Closing the Pokedex... Goodbye!")
        raise ExitRequested

    def command_map(self, args: list[str]) -> None:
        """Show the next page of location areas."""
        if not self.config.next:
            raise ApiError("no next page of locations")
        page = self.client.locations(self.config.next)
        self.config.prev = self.config.next
        self.config.next = page.next
        for location in page.results:
            self._print(location.name)

    def command_mapb(self, args: list[str]) -> None:
        """Show the previous page of location areas."""
        if not self.config.prev:
            raise ApiError("no previous page of locations")
        page = self.client.locations(self.config.prev)
        self.config.next = page.next
        self.config.prev = page.previous
        for location in page.results:
            self._print(location.name)

    def command_explore(self, args: list[str]) -> None:
        """List the pokemon that can be met in an area."""
        name = _first(args, "explore needs an area name")
        area = self.client.area(self.config.url + name)
        for pokemon in area.pokemon_encounters:
            self._print(pokemon.name)

    def command_catch(self, args: list[str]) -> None:
        """Throw a pokeball; the chance of success falls with base experience."""
        name = _first(args, "catch needs a pokemon name")
        self._print(f"Throwing a Pokeball at {name}...")
        pokemon = self.client.pokemon(POKEMON_URL + name)
        key = pokemon.name.lower()
        if key in self.pokedex:
            self._print(f"You already have a {pokemon.name}")
        elif self.rng.randrange(100) > pokemon.base_experience % 100:
            self._print(f"{pokemon.name} was caught!")
            self.pokedex[key] = pokemon
        else:
            self._print(f"{pokemon.name} escaped")

    def command_inspect(self, args: list[str]) -> None:
        """Show the details of a caught pokemon."""
        name = _first(args, "inspect needs a pokemon name")
        pokemon = self.pokedex.get(name.lower())
        if pokemon is None:
            self._print(f"You haven't caught a {name}")
            return
        self._print(f"Name: {pokemon.name}")
        self._print(f"Height: {pokemon.height}")
        self._print(f"Weight: {pokemon.weight}")
        self._print("Stats:")
        for label, stat in zip(_STAT_LABELS, pokemon.stats):
            self._print(f"-{label}: {stat.base_stat}")
        self._print("Types:")
        for kind in pokemon.types:
            self._print(f"- {kind.name}")

    def command_pokedex(self, args: list[str]) -> None:
        """List every caught pokemon."""
        self._print("Your Pokedex")
        for pokemon in self.pokedex.values():
            self._print(f" - {pokemon.name}")


def _first(args: list[str], message: str) -> str:
    if not args:
        raise ValueError(message)
    return args[0]


def main(argv: list[str] | None = None) -> int:
    """Start the interactive pokedex on standard input."""
    parser = argparse.ArgumentParser(prog="pokedex", description="Interactive pokedex.")
    parser.parse_args(argv)
    with Cache(DEFAULT_CACHE_INTERVAL) as cache:
        repl = Repl(PokeApiClient(cache))
        return repl.run(sys.stdin)


if __name__ == "__main__":
    raise SystemExit(main())