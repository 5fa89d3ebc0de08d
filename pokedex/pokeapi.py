"""Client for the PokeAPI location-area and pokemon endpoints, with response caching."""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pokedex.cache import Cache

logger = logging.getLogger(__name__)

POKEAPI_BASE_URL = "https://pokeapi.co/api/v2/"
LOCATION_AREA_ENDPOINT = "https://pokeapi.co/api/v2/location-area/"
POKEMON_ENDPOINT = "https://pokeapi.co/api/v2/pokemon/"
CACHE_REAP_INTERVAL = 10.0


class APIError(Exception):
    """Raised when a request fails or a response cannot be decoded."""


@dataclass(frozen=True)
class NamedResource:
    """A name together with the URL of the resource it refers to."""

    name: str = ""
    url: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> NamedResource:
        data = data or {}
        return cls(name=data.get("name") or "", url=data.get("url") or "")


@dataclass(frozen=True)
class LocationAreaPage:
    """One page of the location-area listing."""

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: tuple[NamedResource, ...] = ()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> LocationAreaPage:
        return cls(
            count=data.get("count") or 0,
            next=data.get("next") or None,
            previous=data.get("previous") or None,
            results=tuple(NamedResource.from_json(r) for r in data.get("results") or ()),
        )


@dataclass(frozen=True)
class PokemonEncounter:
    """A pokemon that can be met in a location area."""

    pokemon: NamedResource = field(default_factory=NamedResource)
    version_details: tuple[dict[str, Any], ...] = ()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> PokemonEncounter:
        return cls(
            pokemon=NamedResource.from_json(data.get("pokemon")),
            version_details=tuple(data.get("version_details") or ()),
        )


@dataclass(frozen=True)
class LocationDetails:
    """Details of a single location area."""

    id: int = 0
    name: str = ""
    game_index: int = 0
    location: NamedResource = field(default_factory=NamedResource)
    names: tuple[dict[str, Any], ...] = ()
    encounter_method_rates: tuple[dict[str, Any], ...] = ()
    pokemon_encounters: tuple[PokemonEncounter, ...] = ()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> LocationDetails:
        return cls(
            id=data.get("id") or 0,
            name=data.get("name") or "",
            game_index=data.get("game_index") or 0,
            location=NamedResource.from_json(data.get("location")),
            names=tuple(data.get("names") or ()),
            encounter_method_rates=tuple(data.get("encounter_method_rates") or ()),
            pokemon_encounters=tuple(
                PokemonEncounter.from_json(e) for e in data.get("pokemon_encounters") or ()
            ),
        )


@dataclass(frozen=True)
class PokemonStats:
    """The parts of a pokemon record used for catching."""

    base_experience: int = 0
    abilities: tuple[NamedResource, ...] = ()

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> PokemonStats:
        return cls(
            base_experience=data.get("base_experience") or 0,
            abilities=tuple(
                NamedResource.from_json(a.get("ability")) for a in data.get("abilities") or ()
            ),
        )


def http_get(url: str) -> bytes:
    """Fetch ``url`` and return the body; raise APIError on failure or a status above 299."""
    try:
        with urllib.request.urlopen(url) as response:
            status = response.status
            if status > 299:
                raise APIError(f"status code ({status}) > 299")
            if status != 200:
                logger.warning("status code (%d) != 200", status)
            return response.read()
    except urllib.error.HTTPError as exc:
        raise APIError(f"status code ({exc.code}) > 299") from exc
    except urllib.error.URLError as exc:
        raise APIError(f"http req failed: {exc.reason}") from exc


class PokeAPIClient:
    """Fetches and decodes PokeAPI resources, caching raw responses by URL."""

    def __init__(
        self,
        cache: Cache | None = None,
        fetcher: Callable[[str], bytes] | None = None,
    ) -> None:
        self._owns_cache = cache is None
        self._cache = cache if cache is not None else Cache(CACHE_REAP_INTERVAL)
        self._fetch_raw = fetcher if fetcher is not None else http_get

    @property
    def cache(self) -> Cache:
        return self._cache

    def _get_json(self, url: str) -> dict[str, Any]:
        body = self._cache.get(url)
        if body is None:
            body = self._fetch_raw(url)
            self._cache.add(url, body)
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise APIError(f"failed to unmarshal data from {url}: {exc}") from exc
        if not isinstance(data, dict):
            raise APIError(f"failed to unmarshal data from {url}: expected an object")
        return data

    def location_areas(self, url: str | None = None) -> LocationAreaPage:
        """Return the location-area page at ``url``, or the first page if none is given."""
        return LocationAreaPage.from_json(self._get_json(url or LOCATION_AREA_ENDPOINT))

    def location_details(self, name: str) -> LocationDetails:
        """Return the details of the location area called ``name``."""
        return LocationDetails.from_json(self._get_json(f"{LOCATION_AREA_ENDPOINT}{name}/"))

    def pokemon(self, name: str) -> PokemonStats:
        """Return the stats of the pokemon called ``name``."""
        return PokemonStats.from_json(self._get_json(f"{POKEMON_ENDPOINT}{name}/"))

    def close(self) -> None:
        """Release the cache if this client created it."""
        if self._owns_cache:
            self._cache.close()