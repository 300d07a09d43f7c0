import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends
from app.services import DialogueController
from app.dependencies import close_dex_client, get_dialogue_controller
from app.models import AlexaRequestEnvelope, AlexaResponseEnvelope

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Release the shared HTTP connection pool on shutdown
    await close_dex_client()


app = FastAPI(
    title="Dexa",
    description="Voice skill answering Pokémon, move, item and ability questions.",
    lifespan=lifespan,
)


@app.post(
    "/dexa",
    response_model=AlexaResponseEnvelope,
    response_model_exclude_none=True,
    summary="Handles one voice platform request",
)
async def handle_voice_request(
    envelope: AlexaRequestEnvelope,
    controller: DialogueController = Depends(get_dialogue_controller),
):
    """Answers launch, intent and session-end requests with a spoken response."""
    # Failures are turned into spoken apologies by the controller, so this always answers 200
    skill_response = await controller.handle(envelope)
    return AlexaResponseEnvelope.from_skill_response(skill_response)
