"""Global configuration constants for the project.

Defines paths, resource locations and the fixed lookup tables used across
the rendering pipeline and the offline validator.
"""

from __future__ import annotations

from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
PACKAGE_DIR: Path = PROJECT_ROOT / "egyptnet"
LOG_DIR: Path = PROJECT_ROOT / "logs"
SITE_DIR: Path = PROJECT_ROOT / "site"
TEMPLATES_DIR: Path = PROJECT_ROOT / "templates"
DEFAULT_OUTPUT_DIR: Path = PROJECT_ROOT / "output"

# Resource files, relative to the data root
HOME_RESOURCE: str = "data/home.json"
TIMELINE_RESOURCE: str = "data/timeline.json"
GROWTH_RESOURCE: str = "data/growth.json"
ISPS_RESOURCE: str = "data/isps.json"
PENETRATION_RESOURCE: str = "data/penetration.json"

# Page shells, relative to the shell directory, keyed by body[data-page]
PAGE_SHELLS: dict[str, str] = {
    "home": "index.html",
    "growth": "growth.html",
    "timeline": "timeline.html",
    "today": "today.html",
}

# Canonical ISP field -> synonyms in priority order
ISP_FIELD_SYNONYMS: dict[str, tuple[str, ...]] = {
    "name": ("name", "provider", "title"),
    "logo": ("logo", "logoUrl", "icon"),
    "avg": ("avg", "speed", "mbps", "bandwidth"),
    "price": ("price", "cost", "monthly"),
}

# Timeline rendering and sanity ranges (inclusive)
TIMELINE_YEAR_RANGE: tuple[int, int] = (2000, 2025)
TIMELINE_PLAUSIBLE_YEARS: tuple[int, int] = (1980, 2100)
MINI_TIMELINE_LIMIT: int = 6
CONNECTION_SHARE_RANGE: tuple[int, int] = (0, 100)

# Header ticker
TICKER_SELECTOR: str = ".nav-ticker"
TICKER_TEMPLATE: str = "≈{value}% of Egyptians are online ({year}, demo)"
TICKER_FALLBACK_TEXT: str = "≈58% of Egyptians are online (2025, demo)"

# Templating defaults
ERROR_TEMPLATE: str = "error.html"
DIAGNOSTIC_HOSTS: tuple[str, ...] = ("main.container", "body")
VALIDATION_ERROR_TITLE_FORMAT: str = "Validation error — {label}"

# Network
NO_CACHE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}

# CLI defaults and logging
LOG_FILENAME_RENDER_SITE: str = "render_site.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
