"""
Main processing workflow for the wallpaper updater.
Discovers wallpapers across markets, reconciles them with Firestore and
enriches new ones with a translated title, Vision labels and dominant colors.
"""

from dataclasses import dataclass, field
from typing import Dict, List

import pandas as pd

from candidate import WallpaperImage, build_candidate, image_url
from config import BING_URL, IMAGE_RESOLUTION
from enrichment import apply_labels, rank_tags, extract_colors
from http_client import fetch_image_bytes
from markets import ordered_markets, is_non_english_market
from reconcile import Action, decide
from vision_api import labels_from_response, dominant_colors_from_response


class UpdateCancelled(RuntimeError):
    pass


@dataclass
class UpdateResult:
    updated: List[str] = field(default_factory=list)
    # one row per discovered wallpaper: id, market, date, action, title
    outcomes: List[dict] = field(default_factory=list)

    def count(self, action: Action) -> int:
        return sum(1 for row in self.outcomes if row["action"] == action.value)


class WallpaperUpdater:
    """
    One instance per process; update() runs one invocation.
    Collaborators:
        image_source.list(market) -> [raw image dict]
        store.get(id) -> WallpaperImage | None, store.upsert(WallpaperImage)
        translator.translate(text) -> str
        annotator.annotate(bytes, context=None) -> Vision response dict
    """

    def __init__(self, image_source, store, translator, annotator,
                 fetch_image=fetch_image_bytes, base_url=BING_URL,
                 resolution=IMAGE_RESOLUTION, markets=None):
        self.image_source = image_source
        self.store = store
        self.translator = translator
        self.annotator = annotator
        self.fetch_image = fetch_image
        self.base_url = base_url
        self.resolution = resolution
        self.markets = ordered_markets(markets)

    def discover(self, markets=None, cancel_event=None) -> Dict[str, WallpaperImage]:
        """First-seen wins: markets earlier in the list take precedence for an id."""
        images: Dict[str, WallpaperImage] = {}
        for market in (markets if markets is not None else self.markets):
            _check_cancelled(cancel_event)
            for raw in self.image_source.list(market):
                if not raw.get("wp"):
                    continue
                image = build_candidate(raw, market, self.base_url)
                if image.id not in images:
                    images[image.id] = image
        return images

    def update(self, cancel_event=None) -> UpdateResult:
        print("updating images")
        result = UpdateResult()

        images = self.discover(cancel_event=cancel_event)
        print(f"{len(images)} images found")

        try:
            for image in images.values():
                self._reconcile(image, result, cancel_event)
        except Exception:
            # writes already made stay in Firestore
            print(f"{len(result.updated)} images updated before failure: {', '.join(result.updated)}")
            raise

        print(f"{len(result.updated)} images updated: {', '.join(result.updated)}")
        print(", ".join(f"{result.count(a)} {a.value}" for a in Action))
        return result

    def _reconcile(self, image: WallpaperImage, result: UpdateResult, cancel_event=None):
        _check_cancelled(cancel_event)
        existing = self.store.get(image.id)
        decision = decide(existing, image)

        if decision.action is Action.CREATE:
            print(f"{image.id} new wallpaper found")
            self.enrich(decision.record, cancel_event=cancel_event)
        elif decision.action is Action.FULL_REPLACE:
            print(f"{image.id} upgrading {existing.market} -> {image.market}")
        elif decision.action is Action.PATCH:
            print(f"{image.id} adding missing urlBase")

        if decision.needs_write:
            _check_cancelled(cancel_event)
            self.store.upsert(decision.record)
            result.updated.append(image.id)

        record = decision.record or existing
        result.outcomes.append({
            "id": image.id,
            "market": record.market,
            "date": record.date,
            "action": decision.action.value,
            "title": record.title,
        })

    def enrich(self, image: WallpaperImage, cancel_event=None) -> WallpaperImage:
        """Translate the title (non-English markets), then add tags and colors."""
        if is_non_english_market(image.market):
            _check_cancelled(cancel_event)
            translated = self.translator.translate(image.title)
            if translated:
                image.title = translated
            else:
                print(f"Warning: empty translation for {image.id}, keeping original title")

        _check_cancelled(cancel_event)
        content = self.fetch_image(image_url(image.url_base, self.resolution))
        _check_cancelled(cancel_event)
        anno = self.annotator.annotate(content, context=image.id)

        apply_labels(image.tags, labels_from_response(anno))
        image.tags_ordered = rank_tags(image.tags)
        image.colors = extract_colors(dominant_colors_from_response(anno))
        return image


def _check_cancelled(cancel_event):
    if cancel_event is not None and cancel_event.is_set():
        raise UpdateCancelled("update cancelled")


REPORT_COLUMNS = ["id", "market", "date", "action", "title"]


def write_run_report(result: UpdateResult, out_csv: str) -> pd.DataFrame:
    df = pd.DataFrame(result.outcomes, columns=REPORT_COLUMNS)
    df.to_csv(out_csv, index=False)
    print(f"Wrote {len(df)} rows to {out_csv}")
    return df
