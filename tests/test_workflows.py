"""
Tests for WallpaperUpdater.

Runs the whole discovery -> reconcile -> enrich -> persist flow against
in-memory collaborators.
"""

import threading

import pandas as pd
import pytest

from bing_api import DiscoveryError
from copyright_parser import CopyrightParseError
from reconcile import Action
from vision_api import AnnotationError
from workflows import UpdateCancelled, WallpaperUpdater, write_run_report
from tests.fakes import (
    BING,
    FakeAnnotator,
    FakeFetcher,
    FakeImageSource,
    FakeStore,
    FakeTranslator,
    bing_entry,
)


def make_updater(source, store, translator=None, annotator=None, fetcher=None, markets=None):
    return WallpaperUpdater(
        image_source=source,
        store=store,
        translator=translator or FakeTranslator(),
        annotator=annotator or FakeAnnotator(),
        fetch_image=fetcher or FakeFetcher(),
        base_url=BING,
        resolution="1920x1080",
        markets=markets,
    )


class TestDiscovery:
    def test_markets_visited_english_first(self):
        source = FakeImageSource()
        make_updater(source, FakeStore()).discover()
        assert source.calls[:5] == ["en-GB", "en-US", "en-CA", "en-AU", "en-NZ"]
        assert source.calls[5:] == ["fr-FR", "de-DE", "es-ES", "zh-CN", "ja-JP"]

    def test_first_seen_market_wins(self):
        source = FakeImageSource({
            "en-US": [bing_entry("Lake", "EN-US", caption="Lake in spring (© A)")],
            "fr-FR": [bing_entry("Lake", "FR-FR", caption="Lac au printemps (© A)")],
        })
        images = make_updater(source, FakeStore()).discover()
        assert list(images) == ["Lake"]
        assert images["Lake"].market == "en-US"
        assert images["Lake"].title == "Lake in spring"

    def test_non_wallpaper_images_are_ignored(self):
        source = FakeImageSource({"en-GB": [bing_entry("Lake"), bing_entry("Promo", wp=False)]})
        assert list(make_updater(source, FakeStore()).discover()) == ["Lake"]

    def test_restricted_markets_keep_catalog_order(self):
        source = FakeImageSource()
        make_updater(source, FakeStore(), markets=["ja-JP", "en-US"]).discover()
        assert source.calls == ["en-US", "ja-JP"]

    def test_unknown_market_rejected(self):
        with pytest.raises(ValueError):
            make_updater(FakeImageSource(), FakeStore(), markets=["xx-XX"])

    def test_source_failure_aborts(self):
        source = FakeImageSource({"en-GB": [bing_entry("Lake")]}, fail_on="de-DE")
        with pytest.raises(DiscoveryError):
            make_updater(source, FakeStore()).discover()


class TestUpdate:
    def test_new_english_image_is_enriched_and_stored(self, translator, annotator, fetcher):
        source = FakeImageSource({"en-GB": [bing_entry("Lake", "EN-GB", caption="Lake (© A)")]})
        store = FakeStore()

        result = make_updater(source, store, translator, annotator, fetcher).update()

        assert result.updated == ["Lake"]
        assert translator.calls == []
        assert fetcher.urls == [f"{BING}/th?id=OHR.Lake_EN-GB2054662773_1920x1080.jpg"]
        doc = store.docs["Lake"]
        assert doc["title"] == "Lake"
        assert doc["copyright"] == "© A"
        assert doc["tags"] == {"sky": 0.75, "cloud": 0.5}
        assert doc["tagsOrdered"] == ["sky", "cloud"]
        assert doc["colors"] == ["#FF8000"]
        assert doc["urlBase"] == f"{BING}/th?id=OHR.Lake_EN-GB2054662773"

    def test_new_non_english_image_title_is_translated(self):
        translator = FakeTranslator({"Lac au printemps": "Lake in spring"})
        source = FakeImageSource({"fr-FR": [bing_entry("Lake", "FR-FR", caption="Lac au printemps (© A)")]})
        store = FakeStore()

        make_updater(source, store, translator=translator).update()

        assert translator.calls == ["Lac au printemps"]
        assert store.docs["Lake"]["title"] == "Lake in spring"
        assert store.docs["Lake"]["fullDesc"] == "Lac au printemps (© A)"

    def test_empty_translation_keeps_original_title(self):
        translator = FakeTranslator(default="")
        source = FakeImageSource({"de-DE": [bing_entry("Lake", "DE-DE", caption="Bergsee (© A)")]})
        store = FakeStore()

        make_updater(source, store, translator=translator).update()
        assert store.docs["Lake"]["title"] == "Bergsee"

    def test_upgrade_replaces_non_english_record_and_keeps_date(self, translator, annotator):
        store = FakeStore({"Lake": {"id": "Lake", "title": "Lac", "date": 20200101, "market": "fr-FR",
                                    "urlBase": f"{BING}/th?id=OHR.Lake_FR-FR1", "tags": {"lake": 0.5}}})
        source = FakeImageSource({"en-US": [bing_entry("Lake", "EN-US", caption="Lake (© A)", date="20240301")]})

        result = make_updater(source, store, translator, annotator).update()

        assert result.updated == ["Lake"]
        assert result.count(Action.FULL_REPLACE) == 1
        doc = store.docs["Lake"]
        assert doc["market"] == "en-US"
        assert doc["title"] == "Lake"
        assert doc["date"] == 20200101
        assert doc["tags"] == {"lake": 0.5}
        assert translator.calls == []
        assert annotator.calls == []

    def test_missing_url_base_is_patched(self, annotator):
        store = FakeStore({"Lake": {"id": "Lake", "title": "Old", "date": 20150101, "market": "en-GB",
                                    "colors": ["#000000"]}})
        source = FakeImageSource({"en-US": [bing_entry("Lake", "EN-US", caption="New (© A)", date="20240301")]})

        result = make_updater(source, store, annotator=annotator).update()

        assert result.updated == ["Lake"]
        doc = store.docs["Lake"]
        assert doc["urlBase"] == f"{BING}/th?id=OHR.Lake_EN-US2054662773"
        assert doc["title"] == "Old"
        assert doc["market"] == "en-GB"
        assert doc["date"] == 20150101
        assert doc["colors"] == ["#000000"]
        assert annotator.calls == []

    def test_second_run_is_a_no_op(self):
        source = FakeImageSource({
            "en-GB": [bing_entry("Lake", "EN-GB")],
            "zh-CN": [bing_entry("Wall", "ZH-CN", caption="长城（© B）")],
        })
        store = FakeStore()
        updater = make_updater(source, store)

        first = updater.update()
        assert sorted(first.updated) == ["Lake", "Wall"]
        writes = list(store.writes)

        second = updater.update()
        assert second.updated == []
        assert store.writes == writes
        assert second.count(Action.SKIP) == 2

    def test_annotation_failure_aborts_and_keeps_prior_writes(self):
        annotator = FakeAnnotator()
        source = FakeImageSource({"en-GB": [bing_entry("First"), bing_entry("Second")]})
        store = FakeStore()
        updater = make_updater(source, store, annotator=annotator)

        def fail_second(content, context=None):
            if context == "Second":
                raise AnnotationError("Vision error 3: Bad image data.")
            return annotator.response

        annotator.annotate = fail_second
        with pytest.raises(AnnotationError):
            updater.update()
        assert store.writes == ["First"]

    def test_translation_failure_aborts_and_keeps_prior_writes(self):
        translator = FakeTranslator(error=RuntimeError("translate: quota exceeded"))
        source = FakeImageSource({
            "en-GB": [bing_entry("Lake", "EN-GB")],
            "fr-FR": [bing_entry("Tower", "FR-FR", caption="Tour Eiffel (© A)")],
        })
        store = FakeStore()

        with pytest.raises(RuntimeError, match="quota"):
            make_updater(source, store, translator=translator).update()
        assert translator.calls == ["Tour Eiffel"]
        assert store.writes == ["Lake"]
        assert "Tower" not in store.docs

    def test_image_fetch_failure_aborts(self):
        source = FakeImageSource({"en-GB": [bing_entry("Lake")]})
        store = FakeStore()
        with pytest.raises(IOError):
            make_updater(source, store, fetcher=FakeFetcher(error=IOError("404"))).update()
        assert store.writes == []

    def test_unparseable_caption_aborts_before_writes(self):
        source = FakeImageSource({"en-GB": [bing_entry("Lake"), bing_entry("Blank", caption="")]})
        store = FakeStore()
        with pytest.raises(CopyrightParseError):
            make_updater(source, store).update()
        assert store.writes == []

    def test_store_failure_aborts(self):
        source = FakeImageSource({"en-GB": [bing_entry("Lake")]})
        with pytest.raises(RuntimeError, match="firestore"):
            make_updater(source, FakeStore(fail_get=True)).update()

    def test_cancelled_run_stops_before_network_calls(self):
        source = FakeImageSource({"en-GB": [bing_entry("Lake")]})
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(UpdateCancelled):
            make_updater(source, FakeStore()).update(cancel_event=cancel)
        assert source.calls == []

    def test_summary_is_printed(self, capsys):
        source = FakeImageSource({"en-GB": [bing_entry("Lake")]})
        make_updater(source, FakeStore()).update()
        out = capsys.readouterr().out
        assert "1 images found" in out
        assert "Lake new wallpaper found" in out
        assert "1 images updated: Lake" in out
        assert "1 create, 0 skip, 0 patch, 0 full_replace" in out


def test_write_run_report(tmp_path):
    source = FakeImageSource({"en-GB": [bing_entry("Lake", caption="Lake (© A)")]})
    result = make_updater(source, FakeStore()).update()

    out_csv = tmp_path / "report.csv"
    write_run_report(result, str(out_csv))

    df = pd.read_csv(out_csv)
    assert list(df.columns) == ["id", "market", "date", "action", "title"]
    assert df.iloc[0]["id"] == "Lake"
    assert df.iloc[0]["action"] == "create"
    assert df.iloc[0]["date"] == 20230220
