"""Client modules for external API communication."""
from .dex_client import DexClient, NoMatchError

__all__ = [
    'DexClient',
    'NoMatchError'
]
