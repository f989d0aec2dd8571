"""
Application configuration settings
Do not modify the identity values once the application has been distributed to users.
This file centralises brand, paths, editor constants and runtime defaults.
"""

from __future__ import annotations
import os
import platform
from pathlib import Path

DEV_MODE = False
# Seed layout used when DEV_MODE is on (handy for eyeballing the compiler output)
DEV_LAYERS = [
    {"type": "video", "name": "Video 1", "x": 20, "y": 20, "width": 540, "height": 540},
    {"type": "video", "name": "Video 2", "x": 520, "y": 20, "width": 540, "height": 540},
    {"type": "text", "name": "Title", "text": "Sample Text", "x": 50, "y": 600},
]

# ───────────────────────────────────────────────────────────────────────────────
# Core identity
# ───────────────────────────────────────────────────────────────────────────────
APP_NAME = "Stackr"
APP_VERSION = "0.1.0"
COMPANY_NAME = "Digi Monsters"

# Reverse-DNS App ID (used in About/QSettings/diagnostics)
APP_ID = "uk.digimonsters.stackr"

# Organization identifiers (for QSettings, folders, About box)
ORG_NAME = "Digi Monsters"       # human readable
ORG_DIRNAME = "DigiMonsters"     # filesystem safe (no spaces)
ORG_DOMAIN = "digimonsters.uk"

TAGLINE = "Lay out a frame, get an ffmpeg command."

BUILD_COMMIT = os.getenv("STACKR_BUILD_COMMIT", "")[:7]
BUILD_CHANNEL = os.getenv("STACKR_BUILD_CHANNEL", "dev")  # dev/beta/stable


def version_string() -> str:
    """Human-friendly version string for About dialogs and logs."""
    meta = f"+{BUILD_COMMIT}" if BUILD_COMMIT else ""
    chan = f" ({BUILD_CHANNEL})" if BUILD_CHANNEL and BUILD_CHANNEL != "stable" else ""
    return f"{APP_VERSION}{meta}{chan}"


# ───────────────────────────────────────────────────────────────────────────────
# Editor constants
# ───────────────────────────────────────────────────────────────────────────────
DEFAULT_CANVAS_WIDTH = 504
DEFAULT_CANVAS_HEIGHT = 846

MIN_SIZE = 50          # floor for video layer width/height
HANDLE_SIZE = 10       # side of a resize handle square

DEFAULT_GRID_SIZE = 20
MIN_GRID_SIZE = 5

DEFAULT_FONT_SIZE = 48
MIN_FONT_SIZE = 12

DUPLICATE_OFFSET = 30
# Fixed footprint used to keep duplicates on-canvas (not the measured size)
DUPLICATE_BOUND = 100

FONT_FAMILIES = (
    "Arial",
    "Helvetica",
    "Times New Roman",
    "Courier New",
    "Georgia",
    "Verdana",
    "Impact",
    "Comic Sans MS",
    "Trebuchet MS",
    "Palatino",
)
FONT_DIR = "/System/Library/Fonts"

IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp"}

# ───────────────────────────────────────────────────────────────────────────────
# Exports
# ───────────────────────────────────────────────────────────────────────────────
EXPORT_FILENAME = "ffmpeg_command.sh"
COPIED_RESET_MS = 2000


# ───────────────────────────────────────────────────────────────────────────────
# User data locations (settings, logs)
# ───────────────────────────────────────────────────────────────────────────────
def _appdata_base() -> Path:
    system = platform.system()
    if system == "Windows":
        base = os.getenv("APPDATA") or (Path.home() / "AppData" / "Roaming")
    elif system == "Darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
    return Path(base) / ORG_DIRNAME / APP_NAME


APPDATA_DIR = _appdata_base()
LOG_DIR = APPDATA_DIR / "logs"
SETTINGS_FILE = APPDATA_DIR / "settings.ini"


def ensure_app_dirs() -> None:
    """Create required folders if they don't exist."""
    for p in (APPDATA_DIR, LOG_DIR):
        p.mkdir(parents=True, exist_ok=True)


# ───────────────────────────────────────────────────────────────────────────────
# QSettings bootstrap (call once during startup)
# ───────────────────────────────────────────────────────────────────────────────
def apply_qsettings_org() -> None:
    """
    Apply org/app metadata for QSettings. Call early in startup,
    before constructing your first QSettings instance.
    """
    try:
        from PySide6.QtCore import QCoreApplication
    except ImportError:
        # Safe to import this module in non-Qt contexts (e.g., tests)
        return
    QCoreApplication.setOrganizationName(ORG_NAME)
    QCoreApplication.setOrganizationDomain(ORG_DOMAIN)
    QCoreApplication.setApplicationName(APP_NAME)


# ───────────────────────────────────────────────────────────────────────────────
# Defaults / UI hints (read by settings wrapper; safe to change before shipping)
# ───────────────────────────────────────────────────────────────────────────────
DEFAULTS = {
    "canvas": {
        "show_grid": False,
        "snap_to_grid": False,
        "grid_size": DEFAULT_GRID_SIZE,
        "template_opacity": 0.6,
    },
    "video": {
        "width": 340,
        "height": 340,
        "x": 20,
        "y": 20,
    },
    "text": {
        "text": "Sample Text",
        "font_size": DEFAULT_FONT_SIZE,
        "font_family": "Arial",
        "color": "#ffffff",
        "x": 50,
        "y": 50,
        "row_spacing": 80,
    },
    "paths": {
        "logs_dir": str(LOG_DIR),
    },
}


def banner() -> str:
    return (
        f"{APP_NAME} {version_string()}  •  {APP_ID}\n"
        f"Vendor: {COMPANY_NAME}  •  {TAGLINE}\n"
        f"Data: {APPDATA_DIR}"
    )


if __name__ == "__main__":
    ensure_app_dirs()
    print(banner())
