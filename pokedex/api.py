"""Client for the PokeAPI location, area and pokemon endpoints."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import urlopen

from pokedex.cache import Cache

BASE_URL = "https://pokeapi.co/api/v2/"
LOCATION_AREA_URL = BASE_URL + "location-area/"
POKEMON_URL = BASE_URL + "pokemon/"
DEFAULT_CACHE_INTERVAL = 5.0
DEFAULT_TIMEOUT = 10.0


class ApiError(Exception):
    """Raised when a resource cannot be fetched or decoded."""


def _int(value: Any) -> int:
    return value if isinstance(value, int) and not isinstance(value, bool) else 0


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class NamedResource:
    """A name together with the URL of the resource it names."""

    name: str = ""
    url: str = ""

    @classmethod
    def from_json(cls, data: Any) -> NamedResource:
        data = _dict(data)
        return cls(name=_str(data.get("name")), url=_str(data.get("url")))


@dataclass(frozen=True)
class LocationPage:
    """One page of location areas, with links to its neighbours."""

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: list[NamedResource] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> LocationPage:
        data = _dict(data)
        return cls(
            count=_int(data.get("count")),
            next=data.get("next") or None,
            previous=data.get("previous") or None,
            results=[NamedResource.from_json(r) for r in _list(data.get("results"))],
        )


@dataclass(frozen=True)
class Area:
    """A location area and the pokemon that can be met there."""

    id: int = 0
    name: str = ""
    game_index: int = 0
    location: NamedResource = field(default_factory=NamedResource)
    pokemon_encounters: list[NamedResource] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> Area:
        data = _dict(data)
        return cls(
            id=_int(data.get("id")),
            name=_str(data.get("name")),
            game_index=_int(data.get("game_index")),
            location=NamedResource.from_json(data.get("location")),
            pokemon_encounters=[
                NamedResource.from_json(_dict(e).get("pokemon"))
                for e in _list(data.get("pokemon_encounters"))
            ],
        )


@dataclass(frozen=True)
class Stat:
    """One base stat of a pokemon."""

    base_stat: int = 0
    effort: int = 0
    stat: NamedResource = field(default_factory=NamedResource)

    @property
    def name(self) -> str:
        return self.stat.name

    @classmethod
    def from_json(cls, data: Any) -> Stat:
        data = _dict(data)
        return cls(
            base_stat=_int(data.get("base_stat")),
            effort=_int(data.get("effort")),
            stat=NamedResource.from_json(data.get("stat")),
        )


@dataclass(frozen=True)
class Pokemon:
    """The parts of a pokemon record that the pokedex uses."""

    id: int = 0
    name: str = ""
    base_experience: int = 0
    height: int = 0
    weight: int = 0
    order: int = 0
    is_default: bool = False
    abilities: list[NamedResource] = field(default_factory=list)
    stats: list[Stat] = field(default_factory=list)
    types: list[NamedResource] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> Pokemon:
        data = _dict(data)
        return cls(
            id=_int(data.get("id")),
            name=_str(data.get("name")),
            base_experience=_int(data.get("base_experience")),
            height=_int(data.get("height")),
            weight=_int(data.get("weight")),
            order=_int(data.get("order")),
            is_default=data.get("is_default") is True,
            abilities=[
                NamedResource.from_json(_dict(a).get("ability"))
                for a in _list(data.get("abilities"))
            ],
            stats=[Stat.from_json(s) for s in _list(data.get("stats"))],
            types=[
                NamedResource.from_json(_dict(t).get("type"))
                for t in _list(data.get("types"))
            ],
        )


class PokeApiClient:
    """Fetches API resources, keeping raw response bodies in a cache."""

    timeout: float = DEFAULT_TIMEOUT

    def __init__(self, cache: Cache | None = None) -> None:
        self.cache = cache if cache is not None else Cache(DEFAULT_CACHE_INTERVAL)

    def locations(self, url: str) -> LocationPage:
        """Fetch one page of location areas."""
        return LocationPage.from_json(self._get_json(url))

    def area(self, url: str) -> Area:
        """Fetch a single location area."""
        return Area.from_json(self._get_json(url))

    def pokemon(self, url: str) -> Pokemon:
        """Fetch a single pokemon."""
        return Pokemon.from_json(self._get_json(url))

    def _get_json(self, url: str) -> dict:
        body = self.cache.get(url)
        if body is not None:
            return self._decode(body)
        body = self._download(url)
        data = self._decode(body)
        self.cache.add(url, body)
        return data

    def _download(self, url: str) -> bytes:
        if not url:
            raise ApiError("no url to fetch")
        try:
            with urlopen(url, timeout=self.timeout) as response:
                status = response.status
                body = response.read()
        except HTTPError as exc:
            raise ApiError(f"response failed with status: {exc.code}") from exc
        except (URLError, OSError, ValueError) as exc:
            raise ApiError(f"request to {url} failed: {exc}") from exc
        if status > 299:
            raise ApiError(f"response failed with status: {status}")
        return body

    @staticmethod
    def _decode(body: bytes) -> dict:
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise ApiError(f"invalid JSON in response: {exc}") from exc
        if not isinstance(data, dict):
            raise ApiError("response is not a JSON object")
        return data