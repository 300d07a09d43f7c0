"""Pure string helpers shared by the composer and the dialogue controller."""
from .text import format_number, remove_diacritics, to_title_case

__all__ = [
    'format_number',
    'remove_diacritics',
    'to_title_case',
]
