import re
import unicodedata

# A word starts at the first letter and runs to the next whitespace
_WORD_PATTERN = re.compile(r"[A-Za-zÀ-ÖØ-öø-ÿ]\S*")


def to_title_case(text: str) -> str:
    """Upper-cases the first letter of every word and lower-cases the rest.

    Hyphenated suffixes belong to the same word, so "charizard-gmax" becomes
    "Charizard-gmax" rather than "Charizard-Gmax".
    """
    return _WORD_PATTERN.sub(lambda match: match.group(0)[0].upper() + match.group(0)[1:].lower(), text)


def remove_diacritics(text: str) -> str:
    """Strips combining accents ("Flabébé" -> "Flabebe")."""
    decomposed = unicodedata.normalize("NFD", text)
    return unicodedata.normalize("NFC", "".join(c for c in decomposed if not unicodedata.combining(c)))


def format_number(value: float) -> str:
    # Whole numbers are spoken without a trailing ".0"
    if float(value).is_integer():
        return str(int(value))
    return str(value)
