# brandkit/config.py
import os
from pathlib import Path

# ---------- Paths ----------
PACKAGE_DIR = Path(__file__).resolve().parent
DATA_DIR = PACKAGE_DIR / "data"

# ---------- External icon set ----------
# URL (http/https) or local JSON file; loaded lazily, once per process
ICONSET_SOURCE = os.environ.get("BRANDKIT_ICONSET_SOURCE", str(DATA_DIR / "iconsax.json"))
ICONSET_NAMESPACE = os.environ.get("BRANDKIT_ICONSET_NAMESPACE", "iconsax")
ICONSET_TIMEOUT = float(os.environ.get("BRANDKIT_ICONSET_TIMEOUT", "5"))
# after a failed fetch, the source is left alone for this long
ICONSET_RETRY_SECONDS = float(os.environ.get("BRANDKIT_ICONSET_RETRY_SECONDS", "30"))

# ---------- Runtime icons ----------
# raw-markup subset registered ahead of the built-ins at startup
RUNTIME_ICONS_SOURCE = os.environ.get("BRANDKIT_RUNTIME_ICONS_SOURCE", str(DATA_DIR / "lucide.json"))
RUNTIME_ICONS_NAMESPACE = "lucide"

# ---------- Rendering ----------
DEFAULT_SIZE = int(os.environ.get("BRANDKIT_DEFAULT_SIZE", "256"))
MAX_SIZE = 4096

# ---------- Server ----------
HOST = os.environ.get("BRANDKIT_HOST", "127.0.0.1")
PORT = int(os.environ.get("BRANDKIT_PORT", "8000"))

# ---------- Logging ----------
LOG_LEVEL = os.environ.get("BRANDKIT_LOG_LEVEL", "INFO").upper()
