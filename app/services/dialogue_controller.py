import logging
from app.clients.dex_client import DexClient
from app.models import AlexaRequestEnvelope, Card, EntityKind, Intent, SkillResponse
from app.services.response_composer import compose
from app.utils.text import remove_diacritics

logger = logging.getLogger(__name__)

HELP_INTENT = "AMAZON.HelpIntent"
CANCEL_INTENT = "AMAZON.CancelIntent"
STOP_INTENT = "AMAZON.StopIntent"

ENTITY_INTENTS = {
    "DexIntent": EntityKind.POKEMON,
    "MoveIntent": EntityKind.MOVE,
    "ItemIntent": EntityKind.ITEM,
    "AbilityIntent": EntityKind.ABILITY,
}

DEFAULT_REPROMPT = "I did not quite catch that, could you repeat it?"

LAUNCH_PROMPT = " ".join([
    "Welcome to Dexa, your one stop place for PokéDex information.",
    'You can start browsing right away by giving me a command, or respond with "help" to learn all my commands.',
    'If you want to stop Dexa, then respond with "Alexa Stop".',
])

HELP_PROMPT = "\n".join([
    "Dexa provides many sources of information, Pokémon, Items, Abilities and Moves. Respectively these can be invoked with.",
    "1: Ask Dexa Browser pokémon data.",
    "2: Ask Dexa Browser item data.",
    "3: Ask Dexa Browser ability data.",
    "4: Ask Dexa Browser move data.",
    "",
    'You can always stop or cancel anything I am saying by saying "Alexa Stop" or "Alexa Cancel".',
    "If you want to start browsing you can request something now.",
])

CANCEL_PROMPT = "No problem. Request cancelled."
STOP_PROMPT = "Don't you worry, I'll be back"

SYSTEM_FAILURE_PROMPT = (
    "Something went awfully wrong browsing my dataset. "
    'Please use "Alexa ask Dexa Browser for help" if you are unsure how to use Dexa'
)

# kind -> (noun with article, hint spoken after the apology)
APOLOGIES = {
    EntityKind.POKEMON: ("a Pokémon", "Are you sure you spelled that correctly?"),
    EntityKind.MOVE: ("a Move", "I only support moves that are used inside battles."),
    EntityKind.ITEM: ("an Item", "Is that really an item that can be used in battle?"),
    EntityKind.ABILITY: ("an Ability", "Are you sure you spelled that correctly?"),
}

RETRY_INVITATION = 'Maybe try again, or respond with "Alexa Cancel" if you want to stop.'


class UnknownIntentError(Exception):
    def __init__(self, name: str | None):
        self.name = name
        super().__init__(f"No handler for intent {name!r}")


def clean_slot_value(intent: Intent, kind: EntityKind) -> str:
    return remove_diacritics(intent.slot_value(kind.value) or "")


class DialogueController:
    # Service requires the query client via Dependency Injection
    def __init__(self, dex_client: DexClient):
        self._dex_client = dex_client

    async def handle(self, envelope: AlexaRequestEnvelope) -> SkillResponse:
        """Routes one platform request to its handler.

        Launch and session-end requests never fail. Everything that happens
        while handling an intent goes through the top-level error handler, so
        the caller always gets a speakable response back.
        """
        request = envelope.request

        if request.type == "LaunchRequest":
            return self.launch()
        if request.type == "SessionEndedRequest":
            return SkillResponse(should_end_session=True)

        try:
            if request.type != "IntentRequest" or request.intent is None:
                raise UnknownIntentError(request.intent.name if request.intent else None)
            return await self.handle_intent(request.intent)
        except Exception as e:
            logger.exception(f"Failed to handle {request.type}: {str(e)}")
            return self.error_response(request.intent)

    async def handle_intent(self, intent: Intent) -> SkillResponse:
        kind = ENTITY_INTENTS.get(intent.name)
        if kind is not None:
            return await self.entity_query(kind, clean_slot_value(intent, kind))
        if intent.name == HELP_INTENT:
            return self.help()
        if intent.name == CANCEL_INTENT:
            return SkillResponse(speech=CANCEL_PROMPT, should_end_session=True)
        if intent.name == STOP_INTENT:
            return SkillResponse(speech=STOP_PROMPT, should_end_session=True)
        raise UnknownIntentError(intent.name)

    async def entity_query(self, kind: EntityKind, query: str) -> SkillResponse:
        """Fetches the best match for the query and speaks its composition."""
        record = await self._dex_client.fetch(kind, query)
        composition = compose(record)

        return SkillResponse(
            speech=composition.speech,
            card=Card(title=composition.title, content=composition.speech),
            should_end_session=False,
        )

    def launch(self) -> SkillResponse:
        return SkillResponse(speech=LAUNCH_PROMPT, reprompt=DEFAULT_REPROMPT, should_end_session=False)

    def help(self) -> SkillResponse:
        return SkillResponse(speech=HELP_PROMPT, reprompt=DEFAULT_REPROMPT, should_end_session=False)

    def error_response(self, intent: Intent | None) -> SkillResponse:
        """Picks the apology for whichever intent was active when handling failed."""
        kind = ENTITY_INTENTS.get(intent.name) if intent else None
        if kind is None:
            return SkillResponse(speech=SYSTEM_FAILURE_PROMPT, should_end_session=False)

        noun, hint = APOLOGIES[kind]
        value = clean_slot_value(intent, kind)
        prompt = " ".join([
            f"I couldn't find {noun} for {value}." if value else "I am sorry but I could not resolve that query.",
            hint,
            RETRY_INVITATION,
        ])
        return SkillResponse(speech=prompt, reprompt=prompt, should_end_session=False)
