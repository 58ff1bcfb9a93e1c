# pokedex

An interactive command-line Pokedex. Browse location areas, list the
Pokemon found in each one, try to catch them, and inspect the ones you
have caught. Data comes from the public PokeAPI. Raw responses are kept
in an in-memory cache whose entries expire after five seconds, so that
repeated requests within that time skip the network.

There are no third-party dependencies; HTTP requests use the standard
library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

Start the prompt:

```
pokedex
```

You get a `Pokedex > ` prompt. Input is lower-cased and split on
whitespace. Empty lines do nothing; a first word that is not a command
shows the help text.

| Command              | What it does                                      |
|----------------------|---------------------------------------------------|
| `map`                | Show the next page of location areas              |
| `mapb`               | Show the previous page of location areas          |
| `explore <area>`     | List the Pokemon that can be met in an area       |
| `catch <pokemon>`    | Throw a Pokeball and try to catch a Pokemon       |
| `inspect <pokemon>`  | Show height, weight, stats and types of a catch   |
| `pokedex`            | List every Pokemon you have caught                |
| `exit`               | Close the Pokedex                                 |

`mapb` before any `map` reports that there is no previous page.
Pokemon whose base experience (modulo 100) is higher are harder to
catch, and a Pokemon has to be caught before you can inspect it.
Failed requests and missing arguments are reported as `Error: ...` and
the prompt continues.

The session ends with exit status 0 after `exit`, or with status 1 when
the input stream ends.

## Library use

The pieces behind the prompt can be used on their own:

- `pokedex.cache.Cache(interval)` is a thread-safe map of keys to bytes.
  `add(key, val)` stores a value and `get(key)` returns it, or `None`
  if absent. A background thread removes entries older than `interval`
  seconds (a number or a `timedelta`). Use it as a context manager, or
  call `close()`, to stop that thread.
- `pokedex.api.PokeApiClient(cache=None)` fetches resources through a
  `Cache`. `locations(url)`, `area(url)` and `pokemon(url)` return
  `LocationPage`, `Area` and `Pokemon` objects, and raise `ApiError`
  when a request fails, the status is above 299, or the body is not a
  JSON object. Each of these classes, and `NamedResource` and `Stat`,
  has a `from_json(data)` constructor.
- `pokedex.repl.Repl(client=None, out=None, rng=None)` runs the command
  loop: `dispatch(line)` runs one line and `run(stream)` reads lines
  from any text stream. `pokedex.repl.clean_input(text)` splits a line
  into lower-case words.

## Limits

Caught Pokemon are kept in memory only; the Pokedex is empty again at
every start.