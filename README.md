# pokedex

An interactive command-line Pokedex. It pages through the world's location
areas, lists the Pokemon found in an area and looks up a Pokemon's base
experience when you throw a Pokeball at it, all backed by the public PokeAPI.
Raw responses are kept in an in-memory cache keyed by URL; entries older than
ten seconds are swept away, so moving back and forth between pages soon after
a request does not hit the network again.

It needs only the Python standard library (Python 3.10 or later).

## Installation

```
pip install .
```

## Usage

Start the shell:

```
pokedex
```

You get a `Pokedex > ` prompt. Input is lower-cased and split on whitespace.
The first word is the command and any further words are its arguments. An
empty line just shows the prompt again.

| Command             | What it does                                                        |
|---------------------|---------------------------------------------------------------------|
| `help`              | Shows a welcome line and the list of commands                       |
| `map`               | Shows the next page of location areas (the first page to begin)     |
| `mapb`              | Shows the previous page; on the first page says `You're on the first page` |
| `explore <area>`    | Lists the Pokemon that can be met in an area                        |
| `catch <pokemon>`   | Throws a Pokeball: prints a random roll and the Pokemon's base experience |
| `exit`              | Prints `Closing the Pokedex... Goodbye!` and closes the Pokedex     |

The shell also ends when standard input runs out.

Example session:

```
Pokedex > map
canalave-city-area
eterna-city-area
...
Pokedex > explore canalave-city-area
Exploring canalave-city-area...
tentacool
...
Pokedex > exit
Closing the Pokedex... Goodbye!
```

An unknown command prints `Unknown command: <name>`. When a command fails,
for example because `explore` or `catch` was given no name, or a request
returns a status above 299, the shell prints
`command "<name>" returned error "<message>"` and the prompt comes back.

## What it does not do

- `catch` does not decide whether the catch succeeds and does not keep the
  Pokemon anywhere: it only prints the random roll and the base experience.
- Nothing is stored between sessions; the cache lives only in memory.

## Using it as a library

- `pokedex.cache.Cache(interval)` is a thread-safe cache of byte values keyed
  by string. `add(key, value)` stores a value, `get(key)` returns it or
  `None`, and `reap()` removes entries older than `interval` seconds and
  returns their keys. A background thread calls `reap()` every `interval`
  seconds until `close()` is called. It supports `len()`, `in`, and use as a
  context manager (leaving the block closes it). A non-positive interval
  raises `ValueError`.
- `pokedex.pokeapi.PokeAPIClient(cache=None, fetcher=None)` fetches JSON
  through a `Cache` (its own ten-second cache if none is given) and a fetcher
  callable taking a URL and returning bytes (`pokedex.pokeapi.http_get` by
  default). `location_areas(url=None)` returns a `LocationAreaPage`,
  `location_details(name)` a `LocationDetails` and `pokemon(name)` a
  `PokemonStats`. Failed requests and undecodable responses raise
  `APIError`. `close()` stops the cache only if the client created it.
- `pokedex.repl.Repl(client=None, out=None, rng=None)` runs the commands
  above against any client, output stream and `random.Random`.
  `dispatch(line)` runs one line, `run(lines)` runs an iterable of lines.
  `pokedex.repl.clean_input(text)` turns a line into its lower-cased words.

## Running the tests

```
pip install .[test]
pytest
```