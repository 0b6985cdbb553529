"""
Google Cloud Translation client module.
"""

from config import TRANSLATE_TARGET


class TranslationError(RuntimeError):
    pass


class Translator:
    """Wraps a google.cloud.translate_v3.TranslationServiceClient."""

    def __init__(self, translate_client, project_id, target=TRANSLATE_TARGET, timeout=None):
        self.client = translate_client
        self.parent = f"projects/{project_id}/locations/global"
        self.target = target
        self.timeout = timeout

    def translate(self, text: str) -> str:
        """
        Translate plain text into the target language.
        An empty translation is returned as "" and left for the caller to handle.
        """
        resp = self.client.translate_text(
            request={
                "parent": self.parent,
                "contents": [text],
                "mime_type": "text/plain",
                "target_language_code": self.target,
            },
            retry=None,
            timeout=self.timeout,
        )
        if not resp.translations:
            raise TranslationError(f"translate returned empty response to text: {text}")
        return (resp.translations[0].translated_text or "").strip()
