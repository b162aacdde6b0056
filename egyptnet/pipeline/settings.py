"""Runtime settings loader for the site renderer.

This module provides `SiteSettings`, which resolves where data, templates
and page shells live and where rendered pages go. Values come from explicit
keyword overrides (the CLI), then environment variables, then an optional
``.env`` file at the project root, then the defaults in `egyptnet.config`.

Environment variables
---------------------
SITE_DATA_ROOT
    Directory or ``http(s)://`` base URL holding ``data/*.json``.
SITE_TEMPLATE_ROOT
    Directory or base URL holding the Jinja2 templates.
SITE_SHELL_DIR
    Directory holding the page shells (``index.html``...).
SITE_OUTPUT_DIR
    Directory the rendered pages are written to.
SITE_VALIDATE
    Run the offline validator with every page render (``1``/``true``).
LOG_LEVEL
    Logging level for the CLI.

Examples
--------
>>> from egyptnet.pipeline.settings import SiteSettings
>>> settings = SiteSettings()
>>> settings.validate in (True, False)
True
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

import egyptnet.config as _project_config
from egyptnet.config import DEFAULT_OUTPUT_DIR, SITE_DIR, TEMPLATES_DIR
from egyptnet.exceptions import ConfigurationError
from egyptnet.pipeline.data.loader import is_url
from egyptnet.pipeline.validation.offline import env_flag


def _root(value: str | Path) -> str | Path:
    return value if is_url(value) else Path(value)


class SiteSettings:
    r"""Resolved settings for one renderer run.

    Parameters
    ----------
    data_root, template_root : str | Path | None, optional
        Overrides for the data and template roots.
    shell_dir, output_dir : str | Path | None, optional
        Overrides for the shell and output directories.
    validate : bool | None, optional
        Override for the offline validation switch.
    log_level : str | None, optional
        Override for the logging level.

    Raises
    ------
    ConfigurationError
        If a local data, template or shell directory does not exist.
    """

    def __init__(
        self,
        *,
        data_root: str | Path | None = None,
        template_root: str | Path | None = None,
        shell_dir: str | Path | None = None,
        output_dir: str | Path | None = None,
        validate: bool | None = None,
        log_level: str | None = None,
    ) -> None:
        # Resolve the project root through the module so tests can
        # monkeypatch ``egyptnet.config.PROJECT_ROOT``.
        env_path = Path(_project_config.PROJECT_ROOT) / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=True)
        self.data_root = _root(data_root or os.getenv("SITE_DATA_ROOT") or SITE_DIR)
        self.template_root = _root(
            template_root or os.getenv("SITE_TEMPLATE_ROOT") or TEMPLATES_DIR
        )
        self.shell_dir = Path(shell_dir or os.getenv("SITE_SHELL_DIR") or SITE_DIR)
        self.output_dir = Path(output_dir or os.getenv("SITE_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR)
        self.validate = (
            validate if validate is not None else env_flag(os.getenv("SITE_VALIDATE"))
        )
        self.log_level = log_level or os.getenv("LOG_LEVEL", "INFO")
        self.check()

    def check(self) -> None:
        """Fail early on local directories that do not exist."""
        for name, root in (
            ("data root", self.data_root),
            ("template root", self.template_root),
            ("shell directory", self.shell_dir),
        ):
            if isinstance(root, Path) and not root.is_dir():
                raise ConfigurationError(
                    f"The {name} {root} is not a directory", context={name: str(root)}
                )
