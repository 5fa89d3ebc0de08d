"""Interactive command loop for browsing location areas and pokemon."""

from __future__ import annotations

import random
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TextIO

from pokedex.pokeapi import APIError, PokeAPIClient

PROMPT = "Pokedex > "


def clean_input(text: str) -> list[str]:
    """Lower-case ``text`` and split it into whitespace-separated words."""
    return text.lower().split()


@dataclass
class CommandConfig:
    """Paging state shared between the map commands."""

    next: str | None = None
    previous: str | None = None


@dataclass(frozen=True)
class Command:
    """A named command with its help text and the callable that runs it."""

    name: str
    description: str
    callback: Callable[..., None]


class ExitRequested(Exception):
    """Raised by the exit command to end the loop."""


class Repl:
    """Reads command lines, runs the matching command and writes its output."""

    def __init__(
        self,
        client: PokeAPIClient | None = None,
        out: TextIO | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.client = client if client is not None else PokeAPIClient()
        self.out = out if out is not None else sys.stdout
        self.rng = rng if rng is not None else random.Random()
        self.config = CommandConfig()
        self.commands: dict[str, Command] = {
            command.name: command
            for command in (
                Command("exit", "Exit the Pokedex", self.command_exit),
                Command("help", "Displays a help message", self.command_help),
                Command("map", "Displays world locations", self.command_map),
                Command("mapb", "Displays world locations", self.command_mapb),
                Command("explore", "Explore an area for pokemon", self.command_explore),
                Command("catch", "Attempt to catch a pokemon", self.command_catch),
            )
        }

    def _print(self, *parts: object) -> None:
        print(*parts, file=self.out)

    def command_exit(self, *args: str) -> None:
        self._print("Closing the Pokedex... Goodbye!")
        raise ExitRequested

    def command_help(self, *args: str) -> None:
        self._print("Welcome to the Pokedex!")
        self._print("Usage:")
        self._print()
        for command in self.commands.values():
            self._print(f"{command.name}:\t{command.description}")

    def _show_page(self, url: str | None) -> None:
        page = self.client.location_areas(url)
        self.config.next = page.next
        self.config.previous = page.previous
        for area in page.results:
            self._print(area.name)

    def command_map(self, *args: str) -> None:
        self._show_page(self.config.next)

    def command_mapb(self, *args: str) -> None:
        if not self.config.previous:
            self._print("You're on the first page")
            return
        self._show_page(self.config.previous)

    def command_explore(self, *args: str) -> None:
        if not args:
            raise ValueError("not enough args, expected <location_name>")
        self._print(f"Exploring {args[0]}...")
        details = self.client.location_details(args[0])
        for encounter in details.pokemon_encounters:
            self._print(encounter.pokemon.name)

    def command_catch(self, *args: str) -> None:
        if not args:
            raise ValueError("Did not provide pokemon name")
        name = args[0]
        self._print(f"Throwing a Pokeball at {name}...")
        roll = self.rng.random()
        self._print(f"Randomly generated value = {roll:f} == {roll}")
        stats = self.client.pokemon(name)
        self._print(f"{name} base exp is {stats.base_experience}")

    def dispatch(self, line: str) -> None:
        """Run the command named on ``line``; raise ExitRequested on exit."""
        words = clean_input(line)
        if not words:
            return
        name, *args = words
        command = self.commands.get(name)
        if command is None:
            self._print(f"Unknown command: {name}")
            return
        try:
            command.callback(*args)
        except (ValueError, APIError) as exc:
            self._print(f'command "{command.name}" returned error "{exc}"')

    def run(self, lines: Iterable[str]) -> None:
        """Prompt for and dispatch each line until exit or the input runs out."""
        source = iter(lines)
        while True:
            self.out.write(PROMPT)
            self.out.flush()
            line = next(source, None)
            if line is None:
                self.out.write("\n")
                return
            try:
                self.dispatch(line.rstrip("\r\n"))
            except ExitRequested:
                return


def main(argv: list[str] | None = None) -> int:
    """Start the interactive Pokedex on standard input and output."""
    client = PokeAPIClient()
    try:
        Repl(client, sys.stdout, random.Random()).run(sys.stdin)
    finally:
        client.close()
    return 0