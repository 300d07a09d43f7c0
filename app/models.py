from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class EntityKind(str, Enum):
    # Values double as the slot names the voice platform sends
    POKEMON = "POKEMON"
    MOVE = "MOVE"
    ITEM = "ITEM"
    ABILITY = "ABILITY"


# --- Records resolved from the GraphQL Pokémon service (Internal Contract) ---

class EvolutionMethod(str, Enum):
    LEVEL = "level"
    ITEM = "item"
    SPECIAL = "special"


class EvolutionEdge(BaseModel):
    species: str
    method: EvolutionMethod
    # Level number, item name or free text depending on the method
    condition: str


class GenderRatio(BaseModel):
    male: float
    female: float


class CreatureRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    species: str
    num: int
    flavor_texts: list[str]
    types: list[str] = Field(min_length=1)
    height: float
    weight: float
    # None is the genderless marker
    gender: GenderRatio | None
    preevolutions: list[EvolutionEdge] = []
    evolutions: list[EvolutionEdge] = []


class MoveRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    desc: str | None = None
    short_desc: str = Field(alias="shortDesc")
    type: str
    category: str
    base_power: Union[int, str] = Field(alias="basePower")
    pp: int
    priority: int
    # True means the move skips the accuracy check entirely
    accuracy: Union[bool, int]
    target: str
    z_crystal: str | None = Field(default=None, alias="isZ")
    gmax_species: str | None = Field(default=None, alias="isGMax")
    is_nonstandard: str | None = Field(default=None, alias="isNonstandard")

    @property
    def legacy_only(self) -> bool:
        return self.is_nonstandard == "Past"


class ItemRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    desc: str
    generation_introduced: int = Field(alias="generationIntroduced")
    is_nonstandard: str | None = Field(default=None, alias="isNonstandard")

    @property
    def legacy_only(self) -> bool:
        return self.is_nonstandard == "Past"


class AbilityRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    desc: str | None = None
    short_desc: str = Field(alias="shortDesc")


DexRecord = Union[CreatureRecord, MoveRecord, ItemRecord, AbilityRecord]


# --- Composer and controller outputs ---

class Composition(BaseModel):
    speech: str
    title: str


class Card(BaseModel):
    type: Literal["Simple"] = "Simple"
    title: str
    content: str


class SkillResponse(BaseModel):
    speech: str = ""
    card: Card | None = None
    reprompt: str | None = None
    should_end_session: bool = False


# --- Voice platform envelope (Public Endpoint) ---

class Slot(BaseModel):
    name: str
    value: str | None = None


class Intent(BaseModel):
    name: str
    slots: dict[str, Slot] = {}

    def slot_value(self, slot_name: str) -> str | None:
        slot = self.slots.get(slot_name)
        return slot.value if slot else None


class AlexaRequest(BaseModel):
    type: str
    intent: Intent | None = None


class AlexaRequestEnvelope(BaseModel):
    version: str = "1.0"
    session: Optional[dict] = None
    request: AlexaRequest


class OutputSpeech(BaseModel):
    type: Literal["SSML"] = "SSML"
    ssml: str

    @classmethod
    def from_text(cls, text: str) -> "OutputSpeech":
        return cls(ssml=f"<speak>{text}</speak>")


class Reprompt(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    output_speech: OutputSpeech = Field(alias="outputSpeech")


class AlexaResponseBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    output_speech: OutputSpeech | None = Field(default=None, alias="outputSpeech")
    card: Card | None = None
    reprompt: Reprompt | None = None
    should_end_session: bool = Field(alias="shouldEndSession")


class AlexaResponseEnvelope(BaseModel):
    version: str = "1.0"
    response: AlexaResponseBody

    @classmethod
    def from_skill_response(cls, skill_response: SkillResponse) -> "AlexaResponseEnvelope":
        """Maps the controller's platform-neutral reply onto the envelope."""
        reprompt = None
        if skill_response.reprompt:
            reprompt = Reprompt(output_speech=OutputSpeech.from_text(skill_response.reprompt))

        return cls(
            response=AlexaResponseBody(
                output_speech=OutputSpeech.from_text(skill_response.speech) if skill_response.speech else None,
                card=skill_response.card,
                reprompt=reprompt,
                should_end_session=skill_response.should_end_session,
            )
        )
