"""Render the Egypt Online site pages.

Reads the page shells (``index.html``, ``growth.html``, ``timeline.html``,
``today.html``), fills every section from the JSON resources under the data
root and writes the finished pages to the output directory. Sections whose
data is missing or malformed get an error card; the other sections of the
page still render.

With ``--validate`` the offline validator also runs against every resource,
prepends diagnostic cards to the rendered pages and prints a summary table.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from egyptnet.config import LOG_DIR, LOG_FILENAME_RENDER_SITE, LOG_FORMAT, PAGE_SHELLS
from egyptnet.exceptions import ConfigurationError
from egyptnet.pipeline.pages.runner import run_from_config
from egyptnet.pipeline.settings import SiteSettings
from egyptnet.pipeline.validation.offline import env_flag

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO", enable_file: bool = True) -> None:
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if enable_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(
                0,
                logging.FileHandler(LOG_DIR / LOG_FILENAME_RENDER_SITE, mode="a"),
            )
        except OSError:
            pass
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render the Egypt Online pages from their JSON data."
    )
    parser.add_argument("--data-root", type=str, default=None, help="Directory or base URL of data/*.json")
    parser.add_argument("--templates", type=str, default=None, help="Directory or base URL of the templates")
    parser.add_argument("--shells", type=Path, default=None, help="Directory of the page shells")
    parser.add_argument("--output", type=Path, default=None, help="Directory for rendered pages")
    parser.add_argument(
        "--page",
        action="append",
        choices=sorted(PAGE_SHELLS),
        default=None,
        help="Render only this page (repeatable)",
    )
    parser.add_argument(
        "--validate",
        nargs="?",
        const="1",
        default=None,
        metavar="VALUE",
        help="Run the offline validator; 0, false, no or off turn it off",
    )
    parser.add_argument("--log-level", type=str, default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for site rendering.

    Parameters
    ----------
    argv : list[str] | None, optional
        Arguments without the program name; ``sys.argv[1:]`` when omitted.

    Returns
    -------
    int
        ``0`` when the pages were rendered, ``1`` otherwise.
    """
    args = build_parser().parse_args(argv)
    validate = None if args.validate is None else env_flag(args.validate)
    enable_file = not bool(os.environ.get("DISABLE_FILE_LOGS"))
    try:
        settings = SiteSettings(
            data_root=args.data_root,
            template_root=args.templates,
            shell_dir=args.shells,
            output_dir=args.output,
            validate=validate,
            log_level=args.log_level,
        )
    except ConfigurationError as err:
        setup_logging(args.log_level or os.getenv("LOG_LEVEL", "INFO"), enable_file=enable_file)
        logger.error("%s", err)
        return 1
    setup_logging(settings.log_level, enable_file=enable_file)
    return 0 if run_from_config(settings, args.page) else 1


if __name__ == "__main__":
    sys.exit(main())
