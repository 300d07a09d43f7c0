"""Composition and dialogue logic sitting between the client and the endpoint."""
from .dialogue_controller import DialogueController, UnknownIntentError
from .response_composer import compose

__all__ = [
    'DialogueController',
    'UnknownIntentError',
    'compose'
]
