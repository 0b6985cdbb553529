"""
Wallpaper record model and candidate construction from Bing image entries.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from copyright_parser import parse_copyright

# Prefixes Bing has used in front of the image name in "urlbase"
URLBASE_PREFIXES = ("/az/hprichbg/rb/", "/th?id=OHR.")


class CandidateError(ValueError):
    pass


@dataclass
class WallpaperImage:
    id: str
    title: str = ""
    copyright: str = ""
    date: int = 0
    market: str = ""
    url_base: str = ""
    full_desc: str = ""
    filename: str = ""
    tags: Dict[str, float] = field(default_factory=dict)
    tags_ordered: List[str] = field(default_factory=list)
    colors: List[str] = field(default_factory=list)

    def copy(self, **changes) -> "WallpaperImage":
        """Copy with independent tag/color containers."""
        clone = replace(
            self,
            tags=dict(self.tags),
            tags_ordered=list(self.tags_ordered),
            colors=list(self.colors),
        )
        return replace(clone, **changes) if changes else clone

    def to_document(self) -> dict:
        """
        Firestore document for a merge write.
        Empty values are left out so they never blank a stored field.
        """
        doc = {
            "id": self.id,
            "title": self.title,
            "copyright": self.copyright,
            "date": self.date,
            "filename": self.filename,
            "market": self.market,
            "fullDesc": self.full_desc,
            "urlBase": self.url_base,
            "tags": dict(self.tags),
            "tagsOrdered": list(self.tags_ordered),
            "colors": list(self.colors),
        }
        return {k: v for k, v in doc.items() if v or k == "id"}

    @classmethod
    def from_document(cls, doc: dict, doc_id: Optional[str] = None) -> "WallpaperImage":
        """Build from a stored document; legacy documents may lack fields."""
        doc = doc or {}
        return cls(
            id=doc.get("id") or doc_id or "",
            title=doc.get("title") or "",
            copyright=doc.get("copyright") or "",
            date=int(doc.get("date") or 0),
            market=doc.get("market") or "",
            url_base=doc.get("urlBase") or "",
            full_desc=doc.get("fullDesc") or "",
            filename=doc.get("filename") or "",
            tags=dict(doc.get("tags") or {}),
            tags_ordered=list(doc.get("tagsOrdered") or []),
            colors=list(doc.get("colors") or []),
        )


def filename_from_urlbase(urlbase: str) -> str:
    name = urlbase or ""
    for prefix in URLBASE_PREFIXES:
        name = name.replace(prefix, "", 1)
    return name


def image_id_from_urlbase(urlbase: str) -> str:
    """
    Stable image id shared by every market showing the same photo.
    Example: "/th?id=OHR.MauiWhale_EN-US1928366389" -> "MauiWhale"
    """
    return filename_from_urlbase(urlbase).split("_")[0]


def image_url(url_base: str, resolution: str = "1920x1080") -> str:
    return f"{url_base}_{resolution}.jpg"


def build_candidate(raw: dict, market: str, base_url: str) -> WallpaperImage:
    """Convert one Bing image entry discovered under market into a WallpaperImage."""
    urlbase = raw.get("urlbase") or ""
    if not urlbase:
        raise CandidateError(f"missing urlbase [{market}]")

    start_date = str(raw.get("startdate") or "").strip()
    if not (start_date.isascii() and start_date.isdigit()):
        raise CandidateError(f"invalid startdate {start_date!r} for {urlbase} [{market}]")

    caption = raw.get("copyright") or ""
    title, attribution = parse_copyright(caption)

    return WallpaperImage(
        id=image_id_from_urlbase(urlbase),
        title=title,
        copyright=attribution,
        date=int(start_date),
        market=market,
        url_base=base_url + urlbase,
        full_desc=caption,
        filename=filename_from_urlbase(urlbase),
    )
