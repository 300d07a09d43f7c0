import pytest
from app.models import (
    AbilityRecord,
    CreatureRecord,
    EvolutionEdge,
    EvolutionMethod,
    GenderRatio,
    ItemRecord,
    MoveRecord,
)
from app.services.response_composer import (
    compose,
    compose_ability,
    compose_creature,
    compose_item,
    compose_move,
    join_clauses,
    render_move_target,
)

# Sample records as the client would hand them over
DRAGONITE = CreatureRecord(
    species="dragonite",
    num=149,
    flavor_texts=["It can fly in spite of its big and bulky physique. It circles the globe in just 16 hours."],
    types=["Dragon", "Flying"],
    height=2.2,
    weight=210,
    gender=GenderRatio(male=50, female=50),
    preevolutions=[
        EvolutionEdge(species="dragonair", method=EvolutionMethod.LEVEL, condition="55"),
        EvolutionEdge(species="dratini", method=EvolutionMethod.LEVEL, condition="30"),
    ],
)

EEVEE_EVOLUTIONS = [
    ("vaporeon", EvolutionMethod.ITEM, "Water Stone"),
    ("jolteon", EvolutionMethod.ITEM, "Thunder Stone"),
    ("flareon", EvolutionMethod.ITEM, "Fire Stone"),
    ("espeon", EvolutionMethod.SPECIAL, "Level up during Daytime with happiness of at least 220"),
    ("umbreon", EvolutionMethod.SPECIAL, "Level up during Nighttime with happiness of at least 220"),
    ("leafeon", EvolutionMethod.ITEM, "Leaf Stone"),
    ("glaceon", EvolutionMethod.ITEM, "Ice Stone"),
    ("sylveon", EvolutionMethod.SPECIAL, "Level up while having high Affection and knowing a Fairy type move"),
]

EEVEE = CreatureRecord(
    species="eevee",
    num=133,
    flavor_texts=["Its genetic code is irregular. It may mutate if it is exposed to radiation from element stones."],
    types=["Normal"],
    height=0.3,
    weight=6.5,
    gender=GenderRatio(male=87.5, female=12.5),
    evolutions=[
        EvolutionEdge(species=species, method=method, condition=condition)
        for species, method, condition in EEVEE_EVOLUTIONS
    ],
)

METAGROSS_MEGA = CreatureRecord(
    species="metagross-mega",
    num=376,
    flavor_texts=["When it knows it can't win, it digs the claws on its legs into its opponent and starts the countdown to a big explosion."],
    types=["Steel", "Psychic"],
    height=2.5,
    weight=942.9,
    gender=None,
)

THUNDERBOLT = MoveRecord(
    name="thunderbolt",
    desc=None,
    short_desc="10% chance to paralyze the target.",
    type="Electric",
    category="Special",
    base_power="90",
    pp=15,
    priority=0,
    accuracy=100,
    target="Normal",
)

CHOICE_SCARF = ItemRecord(
    name="choice scarf",
    desc="Holder's Spe is 1.5x, but it can only select the first move it executes.",
    generation_introduced=4,
)


# --- CLAUSE JOINING ---

def test_join_clauses_drops_omitted_clauses_without_whitespace_artifacts():
    assert join_clauses(["One.", None, "Two.", None, None, "Three."]) == "One. Two. Three."
    assert join_clauses([None, None]) == ""


# --- CREATURE RULES ---

def test_creature_with_two_preevolutions_matches_full_utterance():
    """Dragonite: two pre-evolutions, no evolutions, 50/50 gender."""
    result = compose_creature(DRAGONITE)

    assert result.speech == (
        "Dragonite, number 149, It can fly in spite of its big and bulky physique. It circles the globe in just 16 hours. "
        "It is Dragon Flying type. "
        "Its pre-evolutions are Dragonair (Level: 55) and Dratini (Level: 30). "
        "Dragonite is typically 2.2 meters tall and weighs about 210 kilograms. "
        "It has a gender ratio of 50% male and 50% female."
    )
    assert result.title == "Dex Pokémon Data for Dragonite"


def test_creature_with_one_preevolution_uses_singular_wording():
    dragonair = DRAGONITE.model_copy(update={
        "species": "dragonair",
        "preevolutions": [EvolutionEdge(species="dratini", method=EvolutionMethod.LEVEL, condition="30")],
        "evolutions": [EvolutionEdge(species="dragonite", method=EvolutionMethod.LEVEL, condition="55")],
    })

    result = compose_creature(dragonair)

    assert "Its pre-evolution is Dratini (Level: 30)." in result.speech
    assert "pre-evolutions are" not in result.speech
    assert "It evolves into Dragonite (Level: 55)." in result.speech


def test_creature_without_preevolutions_has_no_preevolution_clause():
    result = compose_creature(EEVEE)

    assert "pre-evolution" not in result.speech


def test_creature_with_eight_evolutions_lists_them_in_one_clause():
    result = compose_creature(EEVEE)

    assert (
        "It evolves into "
        "Vaporeon (Special Condition: use Water Stone) and "
        "Jolteon (Special Condition: use Thunder Stone) and "
        "Flareon (Special Condition: use Fire Stone) and "
        "Espeon (Special Condition: Level up during Daytime with happiness of at least 220) and "
        "Umbreon (Special Condition: Level up during Nighttime with happiness of at least 220) and "
        "Leafeon (Special Condition: use Leaf Stone) and "
        "Glaceon (Special Condition: use Ice Stone) and "
        "Sylveon (Special Condition: Level up while having high Affection and knowing a Fairy type move)."
    ) in result.speech
    assert result.speech.count("It evolves into") == 1
    assert result.speech.endswith(
        "Eevee is typically 0.3 meters tall and weighs about 6.5 kilograms. "
        "It has a gender ratio of 87.5% male and 12.5% female."
    )


def test_genderless_creature_never_mentions_percentages():
    result = compose_creature(METAGROSS_MEGA)

    assert result.speech.endswith("It is genderless.")
    assert "%" not in result.speech
    # Hyphenated forms keep their suffix lower-cased
    assert result.speech.startswith("Metagross-mega, number 376, ")
    assert "weighs about 942.9 kilograms" in result.speech


def test_composing_twice_is_byte_identical():
    assert compose(DRAGONITE) == compose(DRAGONITE)
    assert compose(THUNDERBOLT).speech == compose(THUNDERBOLT).speech


# --- MOVE RULES ---

def test_move_full_utterance_for_current_generation_move():
    result = compose_move(THUNDERBOLT)

    assert result.speech == (
        "Thunderbolt, 10% chance to paralyze the target. "
        "Thunderbolt is an Electric type move. "
        "Thunderbolt has a base power of 90 and it has 15 pp. "
        "Under normal conditions this move will have a priority of 0 and an accuracy of 100%. "
        "In battles with multiple Pokémon on each side it will have an effect on one adjacent Pokémon. "
        "Thunderbolt is available in the generation 8 games."
    )
    assert result.title == "Dex Move Data for Thunderbolt"


@pytest.mark.parametrize("move_type, article", [
    ("Electric", "an"),
    ("Ice", "an"),
    ("Fire", "a"),
    ("Water", "a"),
    ("Psychic", "a"),
])
def test_move_article_depends_on_type(move_type, article):
    result = compose_move(THUNDERBOLT.model_copy(update={"type": move_type}))

    assert f"is {article} {move_type} type move." in result.speech


def test_status_move_prefers_long_description_and_skips_base_power():
    swords_dance = THUNDERBOLT.model_copy(update={
        "name": "swords dance",
        "desc": "Raises the user's Attack by 2 stages.",
        "short_desc": "Raises the user's Attack by 2.",
        "type": "Normal",
        "category": "Status",
        "base_power": 0,
        "accuracy": True,
        "target": "Self",
    })

    result = compose_move(swords_dance)

    assert result.speech.startswith("Swords Dance, Raises the user's Attack by 2 stages.")
    assert "Swords Dance does not deal direct damage and it has 15 pp." in result.speech
    assert "priority of 0 and it will always hit." in result.speech
    assert "it will have an effect on the user." in result.speech


def test_z_and_gmax_clauses_only_when_set():
    plain = compose_move(THUNDERBOLT).speech
    assert "Z Move" not in plain
    assert "G MAX" not in plain

    z_move = compose_move(THUNDERBOLT.model_copy(update={"name": "catastropika", "z_crystal": "Pikanium Z"}))
    assert "This move is a Z Move and requires the Z-Crystal Pikanium Z." in z_move.speech

    gmax_move = compose_move(THUNDERBOLT.model_copy(update={"name": "g-max volt crash", "gmax_species": "Pikachu"}))
    assert "This move is a G MAX move and can only be used by G Max Pikachu." in gmax_move.speech


def test_legacy_move_omits_availability_clause():
    result = compose_move(THUNDERBOLT.model_copy(update={"is_nonstandard": "Past"}))

    assert "available in the generation 8 games" not in result.speech
    assert result.speech.endswith("one adjacent Pokémon.")


@pytest.mark.parametrize("target, phrase", [
    ("Normal", "one adjacent Pokémon"),
    ("All Adjacent Foes", "all adjacent foes"),
    ("allAdjacentFoes", "all adjacent foes"),
    ("Foe Side", "the opposing side of the field"),
    ("Self", "the user"),
    ("Something New", "something new"),
])
def test_move_target_phrases(target, phrase):
    assert render_move_target(target) == phrase


# --- ITEM RULES ---

def test_item_rewrites_multipliers_in_the_joined_utterance():
    result = compose_item(CHOICE_SCARF)

    assert result.speech == (
        "Choice Scarf, Holder's Spe is 1.5 times, but it can only select the first move it executes. "
        "It was introduced in generation 4. "
        "Choice Scarf is available in Generation 8."
    )
    assert "1.5x" not in result.speech


def test_item_multiplier_without_decimal():
    life_orb = CHOICE_SCARF.model_copy(update={"name": "metronome", "desc": "Damage of moves used on consecutive turns is increased. Max 2x after 5 turns."})

    result = compose_item(life_orb)

    assert "Max 2 times after 5 turns." in result.speech


def test_legacy_item_says_not_available():
    result = compose_item(CHOICE_SCARF.model_copy(update={"is_nonstandard": "Past"}))

    assert result.speech.endswith("Choice Scarf is not available in Generation 8.")
    assert result.title == "Dex Item Data for Choice Scarf"


# --- ABILITY RULES ---

def test_ability_falls_back_to_short_description():
    levitate = AbilityRecord(name="levitate", desc=None, short_desc="This Pokemon is immune to Ground-type attacks.")

    result = compose_ability(levitate)

    assert result.speech == "Levitate, This Pokemon is immune to Ground-type attacks."
    assert result.title == "Dex Ability Data for Levitate"


def test_compose_rejects_unknown_record_types():
    with pytest.raises(TypeError):
        compose("not a record")
