"""
Enrichment helpers for new wallpapers: tags from Vision labels, ranked tag
slugs, and dominant colors as hex strings.
"""

from typing import Dict, Iterable, List, Tuple

MAX_COLORS = 4


def apply_labels(tags: Dict[str, float], labels: Iterable[Tuple[str, float]]) -> Dict[str, float]:
    for description, score in labels:
        tags[description.lower()] = score
    return tags


def rank_tags(tags: Dict[str, float]) -> List[str]:
    """
    Tag names by descending score, spaces replaced with hyphens.
    Equal scores keep their insertion order.
    """
    ranked = sorted(tags.items(), key=lambda kv: kv[1], reverse=True)
    return [name.replace(" ", "-") for name, _ in ranked]


def _channel(v) -> int:
    return max(0, min(255, int(round(float(v)))))


def rgb_to_hex(r, g, b) -> str:
    return "#{:02X}{:02X}{:02X}".format(_channel(r), _channel(g), _channel(b))


def extract_colors(rgb_list, limit=MAX_COLORS) -> List[str]:
    return [rgb_to_hex(r, g, b) for r, g, b in list(rgb_list)[:limit]]
