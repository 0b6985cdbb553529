"""
Google Cloud Vision API client module.
Handles label and dominant-color annotation for a single in-memory image.
"""

from google.cloud import vision
from google.protobuf.json_format import MessageToDict
from config import LABEL_MAX_RESULTS, COLOR_MAX_RESULTS


class AnnotationError(RuntimeError):
    pass


def response_to_dict(r):
    try:
        return MessageToDict(r._pb)
    except AttributeError:
        # Fallback if _pb doesn't exist (API change)
        return MessageToDict(r)


class VisionAnnotator:
    """Wraps a vision.ImageAnnotatorClient."""

    def __init__(self, vision_client, label_max=LABEL_MAX_RESULTS, color_max=COLOR_MAX_RESULTS, timeout=None):
        self.client = vision_client
        self.features = [
            vision.Feature(type_=vision.Feature.Type.LABEL_DETECTION, max_results=label_max),
            vision.Feature(type_=vision.Feature.Type.IMAGE_PROPERTIES, max_results=color_max),
        ]
        self.timeout = timeout

    def annotate(self, content: bytes, context=None) -> dict:
        """
        Annotate image bytes and return the response as a dict
        (camelCase keys: labelAnnotations, imagePropertiesAnnotation).
        Raises AnnotationError when Vision returns nothing or reports an error.
        """
        request = vision.AnnotateImageRequest(
            image=vision.Image(content=content),
            features=self.features,
        )
        resp = self.client.batch_annotate_images(requests=[request], retry=None, timeout=self.timeout)
        context_str = f" [{context}]" if context else ""
        if not resp.responses:
            raise AnnotationError(f"Vision returned no responses{context_str}")

        d = response_to_dict(resp.responses[0])
        err = d.get("error")
        if err:
            raise AnnotationError(
                f"Vision error {err.get('code', '?')}: {err.get('message', '')}{context_str}"
            )
        return d


def labels_from_response(d: dict):
    """[(description, score), ...] in Vision's order."""
    return [
        (a.get("description", ""), float(a.get("score", 0.0)))
        for a in d.get("labelAnnotations", [])
        if a.get("description")
    ]


def dominant_colors_from_response(d: dict):
    """[(r, g, b), ...] in Vision's order. Zero channels are omitted by MessageToDict."""
    colors = (((d.get("imagePropertiesAnnotation") or {}).get("dominantColors") or {}).get("colors")) or []
    out = []
    for c in colors:
        rgb = c.get("color") or {}
        out.append((rgb.get("red", 0), rgb.get("green", 0), rgb.get("blue", 0)))
    return out
