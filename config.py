"""
Configuration module for the wallpaper updater.
Handles environment variable loading and configuration setup.
"""

import os

# --- Auto-load .env early (never overwrite real env) ---
try:
    from dotenv import load_dotenv, find_dotenv
except ModuleNotFoundError:
    raise SystemExit(
        "Missing dependency: python-dotenv. Install it with:\n"
        "  pip install python-dotenv"
    )

# Load order: .env.local (highest), .env (fallback). Do NOT override existing env.
load_dotenv(".env.local", override=False)
load_dotenv(find_dotenv(filename=".env", usecwd=True), override=False)

REQUIRED_ENVS = ["PROJECT_ID"]


def check_required_envs():
    """Fail fast on required vars. Called by the CLI, not at import time."""
    missing = [k for k in REQUIRED_ENVS if not os.getenv(k)]
    if missing:
        raise SystemExit(
            "Missing required environment variables: "
            + ", ".join(missing)
            + "\nSet them in your shell or in .env/.env.local"
        )


# Expand GOOGLE_APPLICATION_CREDENTIALS path (handles $HOME, ~, etc.)
creds_env = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
if creds_env:
    creds_expanded = os.path.expanduser(os.path.expandvars(creds_env))
    os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = creds_expanded

# ========= CONFIG =========
PROJECT_ID           = os.getenv("PROJECT_ID", "").strip()
WALLPAPER_COLLECTION = os.getenv("WALLPAPER_COLLECTION", "BingWallpapers").strip()
BING_URL             = os.getenv("BING_URL", "https://www.bing.com").strip().rstrip("/")
BING_IMAGE_COUNT     = int(os.getenv("BING_IMAGE_COUNT", "8"))                # Bing serves at most 8 per call
HTTP_TIMEOUT         = float(os.getenv("HTTP_TIMEOUT", "15"))                 # seconds, shared by every client
# Vision feature caps
LABEL_MAX_RESULTS    = int(os.getenv("LABEL_MAX_RESULTS", "50"))
COLOR_MAX_RESULTS    = int(os.getenv("COLOR_MAX_RESULTS", "4"))
# Image fetched for annotation: <urlBase>_<resolution>.jpg
IMAGE_RESOLUTION     = os.getenv("IMAGE_RESOLUTION", "1920x1080").strip()
TRANSLATE_TARGET     = os.getenv("TRANSLATE_TARGET", "en").strip()
REPORT_CSV           = os.getenv("REPORT_CSV", "").strip()
# ======================================

# ---- Optional UA identity ----
APP_NAME    = os.getenv("APP_NAME", "wallpaper-updater")
APP_VERSION = os.getenv("APP_VERSION", "1.0")
APP_CONTACT = os.getenv("APP_CONTACT", "").strip()
APP_URL     = os.getenv("APP_URL", "").strip()
