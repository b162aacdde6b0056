"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Provides fixtures for a throwaway site (data root + shells) and a
  renderer over the project's real templates.
"""

import json
import os
import signal
import sys

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests
from pathlib import Path

import pytest

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from egyptnet.config import TEMPLATES_DIR  # noqa: E402
from egyptnet.pipeline.data.loader import ResourceLoader  # noqa: E402
from egyptnet.pipeline.pages.sections import PageContext  # noqa: E402
from egyptnet.pipeline.rendering.document import PageDocument  # noqa: E402
from egyptnet.pipeline.rendering.templating import configure  # noqa: E402

_TEST_TIMEOUT = int(os.environ.get("PYTEST_TEST_TIMEOUT", "10"))


def _timeout_handler(signum, frame):
    """Test Timeout handler."""
    raise TimeoutError(f"Test exceeded {_TEST_TIMEOUT} seconds timeout")


def pytest_runtest_setup(item):
    """Test Pytest runtest setup."""
    try:
        signal.signal(signal.SIGALRM, _timeout_handler)
        signal.alarm(_TEST_TIMEOUT)
    except (AttributeError, ValueError):
        pass


def pytest_runtest_teardown(item, nextitem):
    """Test Pytest runtest teardown."""
    try:
        signal.alarm(0)
    except (AttributeError, ValueError):
        pass


HOME_SHELL = """<!DOCTYPE html>
<html><body data-page="home">
<p class="nav-ticker"></p>
<main class="container">
<div id="home-snapshots"></div>
<ul id="mini-tl"></ul>
<div id="isp-grid"></div>
<div id="facts-grid"></div>
</main>
</body></html>
"""

GROWTH_SHELL = """<html><body data-page="growth">
<p class="nav-ticker"></p>
<main class="container">
<div id="growth-stats"></div>
<div id="growth-facts"></div>
<div id="penetration-chart"></div>
<div id="types-chart"></div>
<div id="speeds-chart"></div>
</main>
</body></html>
"""

TIMELINE_SHELL = """<html><body data-page="timeline">
<p class="nav-ticker"></p>
<main class="container"><div id="tl-masonry"></div></main>
</body></html>
"""

TODAY_SHELL = """<html><body data-page="today">
<p class="nav-ticker"></p>
<main class="container"><p>Static</p></main>
</body></html>
"""

SAMPLE_DATA = {
    "home.json": {
        "snapshots": [
            {"value": "≈58%", "label": "People online (2025)", "caption": "demo"},
            {"value": "Mobile", "label": "Most-used access"},
        ],
        "facts": [
            {"title": "Dial-up to fiber", "text": "From dial-up to fiber."},
            {"title": "App habits", "text": "Apps first."},
        ],
    },
    "isps.json": [
        {"name": "Vodafone", "speed": "15 Mbps", "price": "360 EGP", "logo": "v.png"},
        {"provider": "Orange", "mbps": "20 Mbps", "cost": "350 EGP"},
    ],
    "timeline.json": [
        {"year": 2030, "title": "Future", "text": "Later"},
        {"year": 2025, "title": "Most online", "text": "Majority online"},
        {"year": 1999, "title": "Early", "text": "Before"},
        {"year": 2000, "title": "Dial-up", "text": "Common"},
    ],
    "growth.json": {
        "stats": [{"label": "People online", "value": "58%"}],
        "types": [{"name": "Mobile", "share": 70}, {"name": "Fixed", "share": 30}],
        "speeds": [{"name": "Mobile", "mbps": 35}, {"name": "Fixed", "mbps": 55}],
        "facts": [{"title": "Payments", "text": "E-payments"}],
    },
    "penetration.json": {
        "series": [{"year": 2020, "value": 45}, {"year": 2025, "value": 58}]
    },
}


def write_data(root: Path, name: str, value) -> Path:
    """Write ``value`` to ``root/data/name`` (JSON unless it is already a string)."""
    target = root / "data" / name
    target.parent.mkdir(parents=True, exist_ok=True)
    body = value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)
    target.write_text(body, encoding="utf-8")
    return target


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """A data root holding a valid copy of every resource and every shell."""
    root = tmp_path / "site"
    for name, value in SAMPLE_DATA.items():
        write_data(root, name, value)
    for name, shell in (
        ("index.html", HOME_SHELL),
        ("growth.html", GROWTH_SHELL),
        ("timeline.html", TIMELINE_SHELL),
        ("today.html", TODAY_SHELL),
    ):
        (root / name).write_text(shell, encoding="utf-8")
    return root


@pytest.fixture
def renderer():
    return configure(TEMPLATES_DIR)


@pytest.fixture
def make_page(site_root: Path, renderer):
    """Build a `PageContext` for a shell over the ``site_root`` data."""

    def factory(shell: str = HOME_SHELL, root: Path | None = None) -> PageContext:
        return PageContext(PageDocument(shell), ResourceLoader(root or site_root), renderer)

    return factory


@pytest.fixture
def shells() -> dict[str, str]:
    return {
        "home": HOME_SHELL,
        "growth": GROWTH_SHELL,
        "timeline": TIMELINE_SHELL,
        "today": TODAY_SHELL,
    }


@pytest.fixture
def data_writer():
    return write_data
