#!/usr/bin/env python3
"""
Bing wallpaper updater.

Pipeline:
  1) List the current Bing wallpapers for every market (English markets first).
  2) Deduplicate by image id; the first market to show a photo wins.
  3) For each wallpaper, look up Firestore:
       - new: translate the title (non-English markets), annotate with Vision
         (labels + dominant colors) and store it
       - stored from a non-English market, now seen in an English one: replace
         it, keeping the original date
       - stored without urlBase: patch urlBase only
       - otherwise skip
  4) Print the updated ids and optionally write a CSV run report.

Requires: PROJECT_ID and Google application default credentials
(GOOGLE_APPLICATION_CREDENTIALS or the runtime service account).
"""

import argparse
import os

from google.auth.exceptions import DefaultCredentialsError
from google.cloud import firestore, vision
from google.cloud import translate_v3 as translate

import config
from config import PROJECT_ID, WALLPAPER_COLLECTION, HTTP_TIMEOUT, REPORT_CSV, check_required_envs
from bing_api import BingImageSource
from firestore_store import WallpaperStore, DryRunStore
from translate_api import Translator
from vision_api import VisionAnnotator
from workflows import WallpaperUpdater, write_run_report


def create_updater(project_id=PROJECT_ID, dry_run=False, markets=None):
    """Build the Google clients once and wire them into a WallpaperUpdater."""
    try:
        firestore_client = firestore.Client(project=project_id)
        vision_client = vision.ImageAnnotatorClient()
        translate_client = translate.TranslationServiceClient()
    except DefaultCredentialsError as e:
        creds_path = os.environ.get("GOOGLE_APPLICATION_CREDENTIALS", "not set")
        raise SystemExit(
            f"Google authentication failed. Check GOOGLE_APPLICATION_CREDENTIALS={creds_path}\n"
            f"Error: {e}"
        )

    store = WallpaperStore(firestore_client, collection=WALLPAPER_COLLECTION, timeout=HTTP_TIMEOUT)
    if dry_run:
        store = DryRunStore(store)

    return WallpaperUpdater(
        image_source=BingImageSource(timeout=HTTP_TIMEOUT),
        store=store,
        translator=Translator(translate_client, project_id, timeout=HTTP_TIMEOUT),
        annotator=VisionAnnotator(vision_client, timeout=HTTP_TIMEOUT),
        markets=markets,
    )


def main(dry_run=False, markets=None, report_csv=None):
    check_required_envs()
    updater = create_updater(project_id=config.PROJECT_ID, dry_run=dry_run, markets=markets)
    if dry_run:
        print("DRY RUN: Firestore will not be modified")
    try:
        result = updater.update()
    except Exception as e:
        raise SystemExit(f"Update failed: {type(e).__name__}: {e}")

    if report_csv:
        write_run_report(result, report_csv)
    return result


def cli():
    parser = argparse.ArgumentParser(description='Harvest Bing wallpapers into Firestore')
    parser.add_argument('--dry-run', action='store_true',
                        help='Read Firestore and call Translate/Vision, but do not write any documents.')
    parser.add_argument('--market', action='append', default=None,
                        help='Only discover this market (repeatable, e.g. --market en-US --market fr-FR).')
    parser.add_argument('--report-csv', type=str, default=REPORT_CSV or None,
                        help='Write a CSV with one row per discovered wallpaper. Overrides REPORT_CSV env var.')
    args = parser.parse_args()

    try:
        main(dry_run=args.dry_run, markets=args.market, report_csv=args.report_csv)
    except ValueError as e:
        raise SystemExit(str(e))


if __name__ == "__main__":
    cli()
