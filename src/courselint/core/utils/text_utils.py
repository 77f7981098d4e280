import logging
import re
import unicodedata

logger = logging.getLogger(__name__)

KEBAB_SLUG_REGEX = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

_EMOJI_JOINERS = frozenset({"\u200d", "\ufe0e", "\ufe0f", "\u20e3"})


def is_kebab_slug(slug: str) -> bool:
    return bool(KEBAB_SLUG_REGEX.match(slug))


def is_emoji_token(token: str) -> bool:
    if not token:
        return False
    for char in token:
        if char in _EMOJI_JOINERS:
            continue
        if ord(char) < 128 or char.isalnum():
            return False
        if unicodedata.category(char) not in ("So", "Sk", "Sm", "Mn", "Cf", "Cn"):
            return False
    return True


def split_emoji(text: str) -> tuple[str, str]:
    """Split a leading emoji off a title.

    Returns `(emoji, rest)`; `emoji` is empty when the text doesn't start
    with one.
    """
    stripped = text.strip()
    parts = stripped.split(maxsplit=1)
    if parts and is_emoji_token(parts[0]):
        return parts[0], parts[1].strip() if len(parts) > 1 else ""
    return "", stripped


def normalize_heading(text: str) -> str:
    """Heading text without emoji, markup, or case, for comparisons."""
    _, rest = split_emoji(text)
    rest = re.sub(r"[*_`]", "", rest)
    rest = re.sub(r"\s+", " ", rest)
    return rest.strip().rstrip(":").strip().lower()


def slug_to_title(slug: str) -> str:
    return " ".join(word.capitalize() for word in re.split(r"[-_]+", slug) if word)
