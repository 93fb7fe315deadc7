"""
Text and identifier utilities

Normalizes channel names into stable XMLTV channel IDs and cleans provider
text before it is written to the listings document.
"""
import logging
import re
import unicodedata

from unidecode import unidecode

from vodafone_epg.errors import EncodingError


logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_DROPPED_PUNCTUATION = re.compile(r'[&!"]')

# Control, format, unassigned (including U+FFFE/U+FFFF) and line/paragraph
# separator characters. Surrogates are kept so the strict encode rejects them.
_NON_PRINTABLE_CATEGORIES = frozenset({"Cc", "Cf", "Cn", "Zl", "Zp"})


def transliterate(text: str) -> str:
    """
    Map text to its closest ASCII equivalent.

    Diacritics are stripped and non-Latin scripts are romanized ('Россия'
    becomes 'Rossiia'). Characters without any Latin form are dropped.
    Never raises.

    Args:
        text: Arbitrary Unicode text

    Returns:
        ASCII-only string
    """
    return unidecode(text, errors="ignore")


def derive_channel_id(name: str, suffix: str) -> str:
    """
    Build a stable XMLTV channel ID from a channel display name.

    The name is transliterated first so that romanized output is lowercased
    and stripped of whitespace like the rest of the name.
    The suffix is appended on every call, so passing an ID that already ends
    with the suffix produces a doubled suffix.

    Args:
        name: Channel display name (e.g. 'Canal ABC')
        suffix: Domain suffix (e.g. '.tv.vodafone.pt')

    Returns:
        Channel ID (e.g. 'canalabc.tv.vodafone.pt')
    """
    channel_id = transliterate(name).lower()
    channel_id = _WHITESPACE.sub("", channel_id)
    channel_id = _DROPPED_PUNCTUATION.sub("", channel_id)
    channel_id = channel_id.replace("+", "-plus")
    return f"{channel_id}{suffix}"


def strip_non_printable(text: str) -> str:
    """Remove control and other non-printable characters"""
    return "".join(
        c for c in text
        if unicodedata.category(c) not in _NON_PRINTABLE_CATEGORIES
    )


def encode_text(text: str) -> bytes:
    """
    Drop non-printable characters and strictly encode as UTF-8.

    Args:
        text: Provider text

    Returns:
        UTF-8 encoded bytes

    Raises:
        EncodingError: If the text holds characters UTF-8 cannot represent
    """
    cleaned = strip_non_printable(text)
    try:
        return cleaned.encode("utf-8", errors="strict")
    except UnicodeEncodeError as e:
        logger.error(f"Cannot encode text as UTF-8: {cleaned!r}")
        raise EncodingError(f"Text cannot be encoded as UTF-8: {e}") from e


def sanitize_text(value: object) -> str:
    """
    Clean a provider value for XML output.

    Non-string values (numbers from the JSON payload) are converted with str()
    first. The strict UTF-8 check of encode_text() is always applied.

    Raises:
        EncodingError: If the text holds characters UTF-8 cannot represent
    """
    return encode_text(str(value)).decode("utf-8")
