from app.clients import DexClient
from app.services import DialogueController
from fastapi import Depends

_dex_client = None

def get_dex_client() -> DexClient:
    global _dex_client
    if _dex_client is None:
        _dex_client = DexClient()
    return _dex_client

async def close_dex_client():
    global _dex_client
    if _dex_client is not None:
        await _dex_client.close()
        _dex_client = None

def get_dialogue_controller(
    dex_client: DexClient = Depends(get_dex_client),
) -> DialogueController:
    return DialogueController(dex_client=dex_client)
