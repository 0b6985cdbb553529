"""
Bing market catalog.
English markets are authoritative for titles and are always visited first.
"""

EN_MARKETS = (
    "en-GB",
    "en-US",
    "en-CA",
    "en-AU",
    "en-NZ",
)

NON_EN_MARKETS = (
    "fr-FR",
    "de-DE",
    "es-ES",
    "zh-CN",
    "ja-JP",
)

ALL_MARKETS = EN_MARKETS + NON_EN_MARKETS


def is_english_market(market: str) -> bool:
    return market in EN_MARKETS


def is_non_english_market(market: str) -> bool:
    return market in NON_EN_MARKETS


def ordered_markets(only=None):
    """
    Return the discovery order: English group first, then non-English.
    only: optional iterable of market codes to restrict to; catalog order is kept.
    """
    if not only:
        return list(ALL_MARKETS)
    wanted = set(only)
    unknown = wanted.difference(ALL_MARKETS)
    if unknown:
        raise ValueError(f"Unknown market(s): {', '.join(sorted(unknown))}")
    return [m for m in ALL_MARKETS if m in wanted]
