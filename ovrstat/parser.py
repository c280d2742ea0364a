# ovrstat/parser.py

import re
import unicodedata
from typing import Dict, Optional, Union

StatValue = Union[int, float, str]

# Characters removed outright before word splitting
DROPPED_CHARS = ("'", "’")

# Characters that separate words in display labels
SEPARATOR_CHARS = ("-", ".", ":", "/", "_")

PLURAL_RE = re.compile(r"\{count, plural, one \{.*?\} other \{(.*?)\}\}")
CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
NON_ALNUM_RE = re.compile(r"[^0-9A-Za-z]+")

INT_RE = re.compile(r"^[+-]?[0-9]+$")
FLOAT_RE = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")


def strip_plural_template(label: str) -> str:
    """Replace `{count, plural, one {x} other {y}}` templates with their `y` branch."""
    if "} other {" not in label:
        return label
    return PLURAL_RE.sub(lambda match: match.group(1), label)


def strip_diacritics(text: str) -> str:
    """Fold accented letters to their base letter ('Lúcio' -> 'Lucio')."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def clean_json_key(label: str) -> str:
    """
    Convert a display label into a camelCase key.

    Examples:
        'Damage - Done' -> 'damageDone'
        'Soldier: 76' -> 'soldier76'
        'McCree' -> 'mcCree'
        '{count, plural, one {Kill} other {Kills}}' -> 'kills'

    Already-normalized keys pass through unchanged, so the function is
    idempotent.
    """
    if not label or not label.strip():
        return ""

    text = strip_plural_template(label)
    for ch in DROPPED_CHARS:
        text = text.replace(ch, "")
    for ch in SEPARATOR_CHARS:
        text = text.replace(ch, " ")
    text = strip_diacritics(text)
    text = NON_ALNUM_RE.sub(" ", text)
    text = CAMEL_BOUNDARY_RE.sub(" ", text)

    words = text.lower().split()
    if not words:
        return ""
    joined = "".join(word[:1].upper() + word[1:] for word in words)
    return joined[:1].lower() + joined[1:]


def transform_key(key: str, renames: Optional[Dict[str, str]] = None) -> str:
    """Apply a source-specific rename to a normalized stat key, if one exists."""
    if not renames:
        return key
    return renames.get(key, key)


def clean_value(text: str) -> str:
    """Strip thousands separators and surrounding whitespace from a display value."""
    return (text or "").replace(",", "").strip()


def strip_percent(text: str) -> str:
    return (text or "").replace("%", "").strip()


def parse_type(value: str) -> StatValue:
    """
    Coerce a display string to the narrowest of int, float or str.

    Never raises: anything that is not plainly numeric comes back verbatim.
    """
    if INT_RE.match(value):
        return int(value)
    if FLOAT_RE.match(value):
        return float(value)
    return value


def parse_int(text: str, default: int = 0) -> int:
    """Parse a display integer, tolerating separators and a percent sign."""
    clean = strip_percent(clean_value(text))
    if INT_RE.match(clean):
        return int(clean)
    if FLOAT_RE.match(clean):
        return int(float(clean))
    return default


def parse_float(text: str, default: float = 0.0) -> float:
    clean = strip_percent(clean_value(text))
    if FLOAT_RE.match(clean):
        return float(clean)
    return default
