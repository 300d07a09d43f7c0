import os
import httpx
import logging
from app.clients import queries
from app.models import (
    AbilityRecord,
    CreatureRecord,
    DexRecord,
    EntityKind,
    EvolutionEdge,
    EvolutionMethod,
    GenderRatio,
    ItemRecord,
    MoveRecord,
)

logger = logging.getLogger(__name__)

# kind -> (GraphQL document, root field, variable name)
_OPERATIONS = {
    EntityKind.POKEMON: (queries.GET_FUZZY_POKEMON, "getFuzzyPokemon", "pokemon"),
    EntityKind.MOVE: (queries.GET_FUZZY_MOVE, "getFuzzyMove", "move"),
    EntityKind.ITEM: (queries.GET_FUZZY_ITEM, "getFuzzyItem", "item"),
    EntityKind.ABILITY: (queries.GET_FUZZY_ABILITY, "getFuzzyAbility", "ability"),
}


class NoMatchError(Exception):
    """The one failure the client raises, whatever went wrong underneath.

    Transport errors, bad statuses, GraphQL errors, malformed payloads and
    empty result lists are all reported the same way so that callers never
    branch on httpx specifics.
    """

    def __init__(self, kind: EntityKind, query: str, detail: str = ""):
        self.kind = kind
        self.query = query
        self.detail = detail
        message = f"No {kind.value.lower()} matched '{query}'"
        if detail:
            message += f": {detail}"
        super().__init__(message)


def parse_evolution_edge(species: str, evolution_level) -> EvolutionEdge:
    """Classifies the service's free-form evolutionLevel field."""
    if evolution_level is None:
        return EvolutionEdge(species=species, method=EvolutionMethod.SPECIAL, condition="Unknown")

    condition = str(evolution_level).strip()
    if condition.isdigit():
        return EvolutionEdge(species=species, method=EvolutionMethod.LEVEL, condition=condition)
    if condition.lower().startswith("use "):
        return EvolutionEdge(species=species, method=EvolutionMethod.ITEM, condition=condition[4:].strip())
    return EvolutionEdge(species=species, method=EvolutionMethod.SPECIAL, condition=condition)


def flatten_preevolutions(pokemon: dict) -> list[EvolutionEdge]:
    """Walks down the nested preevolutions, closest ancestor first.

    The service stores the evolution condition on the evolved form, so each
    ancestor is paired with the evolutionLevel of the form one step above it.
    """
    edges = []
    pending = [(prevo, pokemon) for prevo in pokemon.get("preevolutions") or []]
    while pending:
        next_pending = []
        for prevo, child in pending:
            edges.append(parse_evolution_edge(prevo["species"], child.get("evolutionLevel")))
            next_pending.extend((ancestor, prevo) for ancestor in prevo.get("preevolutions") or [])
        pending = next_pending
    return edges


def flatten_evolutions(pokemon: dict) -> list[EvolutionEdge]:
    """Walks the nested evolutions one stage at a time, in service order."""
    edges = []
    stage = pokemon.get("evolutions") or []
    while stage:
        next_stage = []
        for evo in stage:
            edges.append(parse_evolution_edge(evo["species"], evo.get("evolutionLevel")))
            next_stage.extend(evo.get("evolutions") or [])
        stage = next_stage
    return edges


def _parse_percentage(value) -> float:
    return float(str(value).strip().rstrip("%"))


def parse_gender(gender: dict | None) -> GenderRatio | None:
    # The service reports genderless species as 0% / 0%
    if not gender:
        return None
    ratio = GenderRatio(male=_parse_percentage(gender["male"]), female=_parse_percentage(gender["female"]))
    if ratio.male == 0 and ratio.female == 0:
        return None
    return ratio


def parse_creature(data: dict) -> CreatureRecord:
    return CreatureRecord(
        species=data["species"],
        num=data["num"],
        flavor_texts=[entry["flavor"] for entry in data.get("flavorTexts") or []],
        types=[entry["name"] for entry in data["types"]],
        height=data["height"],
        weight=data["weight"],
        gender=parse_gender(data.get("gender")),
        preevolutions=flatten_preevolutions(data),
        evolutions=flatten_evolutions(data),
    )


class DexClient:
    DEFAULT_API_URL = "https://graphqlpokemon.favware.tech/v8"
    DEFAULT_USER_AGENT = "Favware/Dexa <Alexa API service>"

    def __init__(self, api_url: str = None, user_agent: str = None):
        # Use environment variables if not provided
        if api_url is None:
            api_url = os.getenv("DEX_API_URL", self.DEFAULT_API_URL)
        if user_agent is None:
            user_agent = os.getenv("DEX_USER_AGENT", self.DEFAULT_USER_AGENT)
        self.api_url = api_url
        self.client = httpx.AsyncClient(timeout=5.0, headers={"User-Agent": user_agent})

    async def _fetch_best_candidate(self, kind: EntityKind, query: str) -> dict:
        """Sends one fuzzy query and returns the top-ranked raw candidate."""
        document, field, variable = _OPERATIONS[kind]
        logger.info(f"Fuzzy {kind.value.lower()} query for: {query!r}")

        try:
            response = await self.client.post(
                self.api_url,
                json={"query": document, "variables": {variable: query}},
            )
            response.raise_for_status()
            payload = response.json()

        except httpx.HTTPStatusError as e:
            detail = f"data service failed with status {e.response.status_code}"
            logger.error(f"Dex query error: {detail}")
            raise NoMatchError(kind, query, detail)

        except httpx.RequestError as e:
            logger.error(f"Dex query network error: {str(e)}")
            raise NoMatchError(kind, query, f"network error: {str(e)}")

        except ValueError:
            logger.error("Dex query returned a body that is not JSON.")
            raise NoMatchError(kind, query, "unexpected response format")

        if not isinstance(payload, dict) or payload.get("errors"):
            logger.error(f"Dex query returned errors: {payload!r}")
            raise NoMatchError(kind, query, "data service reported errors")

        candidates = (payload.get("data") or {}).get(field) or []
        if not candidates:
            raise NoMatchError(kind, query, "no candidates returned")
        return candidates[0]

    async def _fetch_record(self, kind: EntityKind, query: str, parse) -> DexRecord:
        data = await self._fetch_best_candidate(kind, query)
        try:
            return parse(data)
        except (KeyError, TypeError, ValueError) as e:
            # pydantic's ValidationError is a ValueError
            logger.error(f"Dex {kind.value.lower()} payload could not be parsed: {str(e)}")
            raise NoMatchError(kind, query, "unexpected record shape")

    async def get_pokemon(self, query: str) -> CreatureRecord:
        return await self._fetch_record(EntityKind.POKEMON, query, parse_creature)

    async def get_move(self, query: str) -> MoveRecord:
        return await self._fetch_record(EntityKind.MOVE, query, MoveRecord.model_validate)

    async def get_item(self, query: str) -> ItemRecord:
        return await self._fetch_record(EntityKind.ITEM, query, ItemRecord.model_validate)

    async def get_ability(self, query: str) -> AbilityRecord:
        return await self._fetch_record(EntityKind.ABILITY, query, AbilityRecord.model_validate)

    async def fetch(self, kind: EntityKind, query: str) -> DexRecord:
        """Fetches the best match for any entity kind."""
        fetchers = {
            EntityKind.POKEMON: self.get_pokemon,
            EntityKind.MOVE: self.get_move,
            EntityKind.ITEM: self.get_item,
            EntityKind.ABILITY: self.get_ability,
        }
        return await fetchers[kind](query)

    async def close(self):
        """Close the HTTP connection pool (call on app shutdown)."""
        await self.client.aclose()
