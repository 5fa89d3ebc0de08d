import io
import json
import random

import pytest

from pokedex.cache import Cache
from pokedex.pokeapi import APIError, LOCATION_AREA_ENDPOINT, POKEMON_ENDPOINT, PokeAPIClient
from pokedex.repl import (
    Command,
    CommandConfig,
    ExitRequested,
    PROMPT,
    Repl,
    clean_input,
    main,
)

PAGE2 = LOCATION_AREA_ENDPOINT + "?offset=20&limit=20"

RESPONSES = {
    LOCATION_AREA_ENDPOINT: {
        "count": 3,
        "next": PAGE2,
        "previous": None,
        "results": [
            {"name": "canalave-city-area", "url": LOCATION_AREA_ENDPOINT + "1/"},
            {"name": "eterna-city-area", "url": LOCATION_AREA_ENDPOINT + "2/"},
        ],
    },
    PAGE2: {
        "count": 3,
        "next": None,
        "previous": LOCATION_AREA_ENDPOINT,
        "results": [{"name": "pastoria-city-area", "url": LOCATION_AREA_ENDPOINT + "3/"}],
    },
    LOCATION_AREA_ENDPOINT + "pastoria-city-area/": {
        "id": 3,
        "name": "pastoria-city-area",
        "pokemon_encounters": [
            {"pokemon": {"name": "tentacool", "url": ""}},
            {"pokemon": {"name": "magikarp", "url": ""}},
        ],
    },
    POKEMON_ENDPOINT + "pikachu/": {"base_experience": 112, "abilities": []},
}


def fake_fetch(url):
    if url not in RESPONSES:
        raise APIError("status code (404) > 299")
    return json.dumps(RESPONSES[url]).encode()


@pytest.fixture
def repl():
    cache = Cache(60)
    out = io.StringIO()
    shell = Repl(PokeAPIClient(cache, fake_fetch), out, random.Random(1))
    yield shell
    cache.close()


def output(shell):
    return shell.out.getvalue()


@pytest.mark.parametrize(
    "text, expected",
    [
        ("  hello  world  ", ["hello", "world"]),
        ("My TeST Strings hereE", ["my", "test", "strings", "heree"]),
        ("ANOTHER TEST STRING    IN    HERE", ["another", "test", "string", "in", "here"]),
        (
            "             leading  whitespace and trailing    whitespace test          ",
            ["leading", "whitespace", "and", "trailing", "whitespace", "test"],
        ),
        ("", []),
    ],
)
def test_clean_input(text, expected):
    assert clean_input(text) == expected


def test_command_config_defaults():
    config = CommandConfig()
    assert (config.next, config.previous) == (None, None)


def test_commands_registered(repl):
    assert list(repl.commands) == ["exit", "help", "map", "mapb", "explore", "catch"]
    assert isinstance(repl.commands["map"], Command)
    assert repl.commands["explore"].description == "Explore an area for pokemon"


def test_help_lists_commands(repl):
    repl.command_help()
    lines = output(repl).splitlines()
    assert lines[:3] == ["Welcome to the Pokedex!", "Usage:", ""]
    assert "exit:\tExit the Pokedex" in lines
    assert "catch:\tAttempt to catch a pokemon" in lines


def test_exit_raises(repl):
    with pytest.raises(ExitRequested):
        repl.command_exit()
    assert output(repl) == "Closing the Pokedex... Goodbye!\n"


def test_map_pages_forward_and_back(repl):
    repl.command_map()
    assert output(repl) == "canalave-city-area\neterna-city-area\n"
    assert repl.config.next == PAGE2
    assert repl.config.previous is None

    repl.command_map()
    assert output(repl).endswith("pastoria-city-area\n")
    assert repl.config.previous == LOCATION_AREA_ENDPOINT
    assert repl.config.next is None

    repl.command_mapb()
    assert output(repl).endswith("canalave-city-area\neterna-city-area\n")
    assert repl.config.next == PAGE2


def test_mapb_on_first_page(repl):
    repl.command_mapb()
    assert output(repl) == "You're on the first page\n"


def test_explore_lists_pokemon(repl):
    repl.command_explore("pastoria-city-area")
    assert output(repl) == "Exploring pastoria-city-area...\ntentacool\nmagikarp\n"


def test_explore_needs_argument(repl):
    with pytest.raises(ValueError, match="not enough args"):
        repl.command_explore()


def test_catch_reports_base_experience(repl):
    repl.command_catch("pikachu")
    lines = output(repl).splitlines()
    assert lines[0] == "Throwing a Pokeball at pikachu..."
    assert lines[1].startswith("Randomly generated value = ")
    assert lines[-1] == "pikachu base exp is 112"


def test_catch_needs_argument(repl):
    with pytest.raises(ValueError, match="Did not provide pokemon name"):
        repl.command_catch()


def test_dispatch_unknown_command(repl):
    repl.dispatch("Fly away")
    assert output(repl) == "Unknown command: fly\n"


def test_dispatch_blank_line(repl):
    repl.dispatch("   ")
    assert output(repl) == ""


def test_dispatch_reports_errors(repl):
    repl.dispatch("explore nowhere")
    assert output(repl).endswith(
        'command "explore" returned error "status code (404) > 299"\n'
    )


def test_dispatch_passes_lowercased_args(repl):
    repl.dispatch("EXPLORE Pastoria-City-Area")
    assert "tentacool" in output(repl)


def test_run_stops_at_exit(repl):
    repl.run(["map\n", "exit\n", "help\n"])
    text = output(repl)
    assert text.count(PROMPT) == 2
    assert "canalave-city-area" in text
    assert text.endswith("Closing the Pokedex... Goodbye!\n")
    assert "Welcome" not in text


def test_run_stops_at_end_of_input(repl):
    repl.run(["mapb"])
    assert output(repl) == PROMPT + "You're on the first page\n" + PROMPT + "\n"


def test_main_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("help\nexit\n"))
    assert main([]) == 0
    captured = capsys.readouterr().out
    assert "Welcome to the Pokedex!" in captured
    assert captured.endswith("Closing the Pokedex... Goodbye!\n")