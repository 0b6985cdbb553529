"""
Firestore persistence for wallpaper records.
Writes always use merge semantics so partial records never erase stored fields.
"""

from candidate import WallpaperImage
from config import WALLPAPER_COLLECTION


class WallpaperStore:
    def __init__(self, firestore_client, collection=WALLPAPER_COLLECTION, timeout=None):
        self.client = firestore_client
        self.collection = collection
        self.timeout = timeout

    def _doc(self, image_id: str):
        return self.client.collection(self.collection).document(image_id)

    def get(self, image_id: str):
        """Return the stored WallpaperImage, or None when no document exists."""
        snap = self._doc(image_id).get(retry=None, timeout=self.timeout)
        if not snap.exists:
            return None
        return WallpaperImage.from_document(snap.to_dict(), doc_id=image_id)

    def upsert(self, image: WallpaperImage):
        return self._doc(image.id).set(image.to_document(), merge=True, retry=None, timeout=self.timeout)


class DryRunStore:
    """Reads through to a real store; prints writes instead of performing them."""

    def __init__(self, store):
        self.store = store
        self.writes = []

    def get(self, image_id: str):
        return self.store.get(image_id)

    def upsert(self, image: WallpaperImage):
        self.writes.append(image.id)
        print(f"DRY RUN: would write {image.id} ({image.market}, {image.date})")
