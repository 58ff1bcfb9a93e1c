import io

import pytest

from pokedex.api import (
    LOCATION_AREA_URL,
    POKEMON_URL,
    ApiError,
    Area,
    LocationPage,
    NamedResource,
    Pokemon,
    Stat,
)
from pokedex.repl import Config, ExitRequested, Repl, clean_input


class FakeClient:
    def __init__(self, pages=None, areas=None, pokemon=None):
        self.pages = pages or {}
        self.areas = areas or {}
        self.pokemon_by_url = pokemon or {}
        self.calls = []

    def _lookup(self, table, url):
        self.calls.append(url)
        if url not in table:
            raise ApiError("response failed with status: 404")
        return table[url]

    def locations(self, url):
        return self._lookup(self.pages, url)

    def area(self, url):
        return self._lookup(self.areas, url)

    def pokemon(self, url):
        return self._lookup(self.pokemon_by_url, url)


class FixedRng:
    def __init__(self, value):
        self.value = value

    def randrange(self, n):
        return self.value


PAGE2_URL = LOCATION_AREA_URL + "?offset=20&limit=20"


def _pages():
    return {
        LOCATION_AREA_URL: LocationPage(
            count=40,
            next=PAGE2_URL,
            previous=None,
            results=[NamedResource("canalave-city-area"), NamedResource("eterna-city-area")],
        ),
        PAGE2_URL: LocationPage(
            count=40,
            next=None,
            previous=LOCATION_AREA_URL,
            results=[NamedResource("mt-coronet-1f-route-207")],
        ),
    }


def _pidgey():
    labels = ["hp", "attack", "defense", "special-attack", "special-defense", "speed"]
    values = [40, 45, 40, 35, 35, 56]
    return Pokemon(
        id=16,
        name="pidgey",
        base_experience=50,
        height=3,
        weight=18,
        stats=[Stat(base_stat=v, stat=NamedResource(n)) for n, v in zip(labels, values)],
        types=[NamedResource("normal"), NamedResource("flying")],
    )


def _make(rng_value=99, **client_kwargs):
    out = io.StringIO()
    client = FakeClient(**client_kwargs)
    repl = Repl(client, out, FixedRng(rng_value))
    return repl, client, out


@pytest.mark.parametrize(
    "text, expected",
    [
        ("  ", []),
        ("  hello  ", ["hello"]),
        ("  hello  world  ", ["hello", "world"]),
        ("  HellO  World  ", ["hello", "world"]),
    ],
)
def test_clean_input(text, expected):
    assert clean_input(text) == expected


def test_default_config():
    config = Config()
    assert config.next == LOCATION_AREA_URL
    assert config.prev is None
    assert config.url == LOCATION_AREA_URL


def test_unknown_command_shows_help():
    repl, _, out = _make()
    repl.dispatch("fly somewhere")
    text = out.getvalue()
    for name in ("exit", "map", "mapb", "explore", "catch", "inspect", "pokedex"):
        assert f"Command: {name}\n" in text
    assert "Description: Show pokemon in the area\n" in text


def test_empty_line_does_nothing():
    repl, client, out = _make()
    repl.dispatch("   \n")
    assert out.getvalue() == ""
    assert client.calls == []


def test_exit_raises_and_says_goodbye():
    repl, _, out = _make()
    with pytest.raises(ExitRequested):
        repl.dispatch("exit")
    assert out.getvalue() == "Closing the Pokedex... Goodbye!\n"


def test_map_pages_forward():
    repl, client, out = _make(pages=_pages())
    repl.dispatch("map")
    assert out.getvalue() == "canalave-city-area\neterna-city-area\n"
    assert repl.config.next == PAGE2_URL
    assert repl.config.prev == LOCATION_AREA_URL
    repl.dispatch("MAP")
    assert out.getvalue().endswith("mt-coronet-1f-route-207\n")
    assert repl.config.next is None
    assert client.calls == [LOCATION_AREA_URL, PAGE2_URL]


def test_map_past_last_page_raises():
    repl, _, _ = _make(pages=_pages())
    repl.dispatch("map")
    repl.dispatch("map")
    with pytest.raises(ApiError):
        repl.dispatch("map")


def test_mapb_before_map_raises():
    repl, client, _ = _make(pages=_pages())
    with pytest.raises(ApiError):
        repl.dispatch("mapb")
    assert client.calls == []


def test_mapb_after_two_maps():
    repl, client, out = _make(pages=_pages())
    repl.dispatch("map")
    repl.dispatch("map")
    out.truncate(0)
    out.seek(0)
    repl.dispatch("mapb")
    assert out.getvalue() == "mt-coronet-1f-route-207\n"
    assert client.calls[-1] == PAGE2_URL
    assert repl.config.prev == LOCATION_AREA_URL
    assert repl.config.next is None


def test_explore_lists_encounters():
    area = Area(
        name="pastoria-city-area",
        pokemon_encounters=[NamedResource("tentacool"), NamedResource("magikarp")],
    )
    url = LOCATION_AREA_URL + "pastoria-city-area"
    repl, client, out = _make(areas={url: area})
    repl.dispatch("explore Pastoria-City-Area")
    assert out.getvalue() == "tentacool\nmagikarp\n"
    assert client.calls == [url]


def test_explore_without_area_raises():
    repl, _, _ = _make()
    with pytest.raises(ValueError):
        repl.dispatch("explore")


def test_catch_success():
    repl, client, out = _make(rng_value=99, pokemon={POKEMON_URL + "pidgey": _pidgey()})
    repl.dispatch("catch pidgey")
    assert out.getvalue() == "Throwing a Pokeball at pidgey...\npidgey was caught!\n"
    assert list(repl.pokedex) == ["pidgey"]
    assert client.calls == [POKEMON_URL + "pidgey"]


def test_catch_escape():
    repl, _, out = _make(rng_value=0, pokemon={POKEMON_URL + "pidgey": _pidgey()})
    repl.dispatch("catch pidgey")
    assert out.getvalue().endswith("pidgey escaped\n")
    assert repl.pokedex == {}


def test_catch_equal_roll_escapes():
    repl, _, _ = _make(rng_value=50, pokemon={POKEMON_URL + "pidgey": _pidgey()})
    repl.dispatch("catch pidgey")
    assert "pidgey" not in repl.pokedex


def test_catch_already_caught():
    repl, _, out = _make(rng_value=99, pokemon={POKEMON_URL + "pidgey": _pidgey()})
    repl.dispatch("catch pidgey")
    repl.dispatch("catch pidgey")
    assert out.getvalue().endswith("You already have a pidgey\n")
    assert len(repl.pokedex) == 1


def test_catch_unknown_pokemon_raises():
    repl, _, out = _make()
    with pytest.raises(ApiError):
        repl.dispatch("catch missingno")
    assert out.getvalue() == "Throwing a Pokeball at missingno...\n"


def test_inspect_caught_pokemon():
    repl, _, out = _make(rng_value=99, pokemon={POKEMON_URL + "pidgey": _pidgey()})
    repl.dispatch("catch pidgey")
    out.truncate(0)
    out.seek(0)
    repl.dispatch("inspect PIDGEY")
    assert out.getvalue() == (
        "Name: pidgey\n"
        "Height: 3\n"
        "Weight: 18\n"
        "Stats:\n"
        "-hp: 40\n"
        "-attack: 45\n"
        "-defense: 40\n"
        "-special-attack: 35\n"
        "-special-defense: 35\n"
        "-speed: 56\n"
        "Types:\n"
        "- normal\n"
        "- flying\n"
    )


def test_inspect_not_caught():
    repl, _, out = _make()
    repl.dispatch("inspect pidgey")
    assert out.getvalue() == "You haven't caught a pidgey\n"


def test_pokedex_lists_caught():
    repl, _, out = _make(rng_value=99, pokemon={POKEMON_URL + "pidgey": _pidgey()})
    repl.dispatch("pokedex")
    assert out.getvalue() == "Your Pokedex\n"
    repl.dispatch("catch pidgey")
    out.truncate(0)
    out.seek(0)
    repl.dispatch("pokedex")
    assert out.getvalue() == "Your Pokedex\n - pidgey\n"


def test_run_exit_returns_zero():
    repl, _, out = _make(pages=_pages())
    code = repl.run(io.StringIO("map\nexit\nmap\n"))
    assert code == 0
    assert out.getvalue() == (
        "Pokedex > canalave-city-area\neterna-city-area\n"
        "Pokedex > Closing the Pokedex... Goodbye!\n"
    )


def test_run_end_of_input_returns_one():
    repl, _, out = _make()
    assert repl.run(io.StringIO("")) == 1
    assert out.getvalue() == "Pokedex > "


def test_run_partial_last_line_is_dropped():
    repl, client, _ = _make(pages=_pages())
    assert repl.run(io.StringIO("map")) == 1
    assert client.calls == []


def test_run_reports_errors_and_continues():
    repl, _, out = _make()
    code = repl.run(io.StringIO("explore nowhere\nexit\n"))
    assert code == 0
    assert "Error: response failed with status: 404\n" in out.getvalue()
    assert out.getvalue().endswith("Goodbye!\n")