"""
Turns one resolved record into the sentence spoken back to the user.

Every composer builds an ordered list of clauses where optional clauses are
None, then hands the list to join_clauses. Nothing here performs I/O, so the
same record always yields the same Composition.
"""
import re
from typing import Iterable, Optional

from app.models import (
    AbilityRecord,
    Composition,
    CreatureRecord,
    DexRecord,
    EvolutionEdge,
    EvolutionMethod,
    GenderRatio,
    ItemRecord,
    MoveRecord,
)
from app.utils.text import format_number, to_title_case

_ELECTRIC_OR_ICE = re.compile(r"(electric|ice)", re.IGNORECASE)
# "2x" / "1.5x" multipliers are read out as "2 times" / "1.5 times"
_MULTIPLIER = re.compile(r"([0-9](\.[0-9])?)x")

MOVE_TARGETS = {
    "normal": "one adjacent Pokémon",
    "any": "any single Pokémon on the field",
    "adjacentally": "one adjacent ally",
    "adjacentallyorself": "either the user or one adjacent ally",
    "adjacentfoe": "one adjacent foe",
    "alladjacent": "all adjacent Pokémon",
    "alladjacentfoes": "all adjacent foes",
    "all": "the entire field",
    "allies": "the user and all of its allies",
    "allyside": "the user's side of the field",
    "allyteam": "every Pokémon on the user's team",
    "foeside": "the opposing side of the field",
    "randomnormal": "one random adjacent foe",
    "scripted": "the Pokémon that last damaged the user",
    "self": "the user",
}


def join_clauses(clauses: Iterable[Optional[str]]) -> str:
    """Drops omitted (None) clauses and joins the rest with a single space."""
    return " ".join(clause for clause in clauses if clause is not None)


def render_evolution_edge(edge: EvolutionEdge) -> str:
    name = to_title_case(edge.species)
    if edge.method == EvolutionMethod.LEVEL:
        return f"{name} (Level: {edge.condition})"
    if edge.method == EvolutionMethod.ITEM:
        return f"{name} (Special Condition: use {edge.condition})"
    return f"{name} (Special Condition: {edge.condition})"


def render_gender(gender: GenderRatio | None) -> str:
    if gender is None:
        return "It is genderless."
    return f"It has a gender ratio of {format_number(gender.male)}% male and {format_number(gender.female)}% female."


def render_move_target(target: str) -> str:
    key = re.sub(r"[\s_-]", "", target).lower()
    return MOVE_TARGETS.get(key, target.lower())


def render_base_power(base_power, category: str) -> str:
    if category.lower() == "status":
        return "does not deal direct damage"
    return f"has a base power of {base_power}"


def render_accuracy(priority: int, accuracy) -> str:
    if accuracy is True:
        return f"Under normal conditions this move will have a priority of {priority} and it will always hit."
    return f"Under normal conditions this move will have a priority of {priority} and an accuracy of {accuracy}%."


def compose_creature(record: CreatureRecord) -> Composition:
    name = to_title_case(record.species)
    prevos = [render_evolution_edge(edge) for edge in record.preevolutions]
    evos = [render_evolution_edge(edge) for edge in record.evolutions]

    prevo_clause = None
    if prevos:
        verb = "s are" if len(prevos) >= 2 else " is"
        prevo_clause = f"Its pre-evolution{verb} {' and '.join(prevos)}."

    speech = join_clauses([
        f"{name}, number {record.num}, {record.flavor_texts[0]}",
        f"It is {' '.join(record.types)} type.",
        prevo_clause,
        f"It evolves into {' and '.join(evos)}." if evos else None,
        f"{name} is typically {format_number(record.height)} meters tall and weighs about {format_number(record.weight)} kilograms.",
        render_gender(record.gender),
    ])
    return Composition(speech=speech, title=f"Dex Pokémon Data for {name}")


def compose_move(record: MoveRecord) -> Composition:
    name = to_title_case(record.name)
    article = "an" if _ELECTRIC_OR_ICE.search(record.type) else "a"

    speech = join_clauses([
        f"{name}, {record.desc or record.short_desc}",
        f"{name} is {article} {record.type} type move.",
        f"{name} {render_base_power(record.base_power, record.category)} and it has {record.pp} pp.",
        render_accuracy(record.priority, record.accuracy),
        f"In battles with multiple Pokémon on each side it will have an effect on {render_move_target(record.target)}.",
        f"This move is a Z Move and requires the Z-Crystal {record.z_crystal}." if record.z_crystal else None,
        f"This move is a G MAX move and can only be used by G Max {record.gmax_species}." if record.gmax_species else None,
        None if record.legacy_only else f"{name} is available in the generation 8 games.",
    ])
    return Composition(speech=speech, title=f"Dex Move Data for {name}")


def compose_item(record: ItemRecord) -> Composition:
    name = to_title_case(record.name)
    availability = "not " if record.legacy_only else ""

    speech = join_clauses([
        f"{name}, {record.desc}",
        f"It was introduced in generation {record.generation_introduced}.",
        f"{name} is {availability}available in Generation 8.",
    ])
    # Applied to the whole utterance, not only the description
    speech = _MULTIPLIER.sub(r"\1 times", speech)
    return Composition(speech=speech, title=f"Dex Item Data for {name}")


def compose_ability(record: AbilityRecord) -> Composition:
    name = to_title_case(record.name)
    speech = join_clauses([f"{name}, {record.desc or record.short_desc}"])
    return Composition(speech=speech, title=f"Dex Ability Data for {name}")


COMPOSERS = {
    CreatureRecord: compose_creature,
    MoveRecord: compose_move,
    ItemRecord: compose_item,
    AbilityRecord: compose_ability,
}


def compose(record: DexRecord) -> Composition:
    """Dispatches to the composer for the record's kind."""
    try:
        composer = COMPOSERS[type(record)]
    except KeyError:
        raise TypeError(f"No composer for {type(record).__name__}")
    return composer(record)
