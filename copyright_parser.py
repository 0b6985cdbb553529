"""
Caption parsing for Bing image-of-the-day entries.

Bing captions carry the photo title followed by the attribution, e.g.
"Humpback whales, Maui, Hawaii (© Flip Nicklin/Minden Pictures)". Some
locales use full-width parentheses ("（©" ... "）").
"""

SYMBOL = "©"
FULLWIDTH_MARKER = "（©"
ASCII_MARKER = "(©"


class CopyrightParseError(ValueError):
    pass


def _split_once(caption: str, marker: str, closing: str):
    """Split on marker when it occurs exactly once; None otherwise."""
    parts = caption.split(marker)
    if len(parts) != 2:
        return None
    title = parts[0].strip()
    rest = parts[1].strip()
    if closing and rest.endswith(closing):
        rest = rest[: -len(closing)].strip()
    attribution = f"{SYMBOL} {rest}".strip()
    return title, attribution


def parse_copyright(caption: str):
    """
    Return (title, attribution) for a raw caption.
    A caption with no attribution marker is returned verbatim as the title.
    Raises CopyrightParseError for an empty caption.
    """
    if caption is None:
        caption = ""
    # ja-JP sometimes ships "（ ©"
    normalized = caption.replace("（ ©", FULLWIDTH_MARKER)

    for marker, closing in ((FULLWIDTH_MARKER, "）"), (ASCII_MARKER, ")"), (SYMBOL, ")")):
        result = _split_once(normalized, marker, closing)
        if result is not None:
            return result

    if caption:
        return caption, ""
    raise CopyrightParseError("empty caption")
