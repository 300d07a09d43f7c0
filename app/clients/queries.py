"""GraphQL documents sent to the Pokémon data service."""

# Two nesting levels cover every evolution line in the games
GET_FUZZY_POKEMON = """
fragment EvolutionFields on Pokemon {
  species
  evolutionLevel
}

query getFuzzyPokemon($pokemon: String!) {
  getFuzzyPokemon(pokemon: $pokemon, take: 1) {
    num
    species
    evolutionLevel
    types { name }
    flavorTexts { flavor }
    height
    weight
    gender { male female }
    preevolutions {
      ...EvolutionFields
      preevolutions { ...EvolutionFields }
    }
    evolutions {
      ...EvolutionFields
      evolutions { ...EvolutionFields }
    }
  }
}
"""

GET_FUZZY_MOVE = """
query getFuzzyMove($move: String!) {
  getFuzzyMove(move: $move, take: 1) {
    name
    shortDesc
    desc
    type
    basePower
    pp
    category
    accuracy
    priority
    target
    isZ
    isGMax
    isNonstandard
  }
}
"""

GET_FUZZY_ITEM = """
query getFuzzyItem($item: String!) {
  getFuzzyItem(item: $item, take: 1) {
    name
    desc
    generationIntroduced
    isNonstandard
  }
}
"""

GET_FUZZY_ABILITY = """
query getFuzzyAbility($ability: String!) {
  getFuzzyAbility(ability: $ability, take: 1) {
    name
    desc
    shortDesc
  }
}
"""
