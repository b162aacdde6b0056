"""Egypt Online site package.

This module is the root of the ``egyptnet`` package, which renders the
informational pages of the "Egypt online" site (home, growth, timeline,
today) from static JSON documents into static HTML shells.

The package keeps a layered architecture: the launcher
(``program_render_site.py``), the page layer (per-page section renderers
and their failure boundaries) and the data layer (loading, normalization
and shape validation of JSON resources). Each layer is usable on its own
from tests and scripts.

Package Structure
-----------------
- `pipeline/data/`:
    Resource loading (local directory or HTTP), synonym normalization and
    structural schema validation.
- `pipeline/rendering/`:
    Template rendering with a raw-source fallback, the page document that
    sections mount into, and the chart sink.
- `pipeline/pages/`:
    Section boundaries, per-page renderers, header ticker and the page runner.
- `pipeline/validation/`:
    Offline validation pass over every known resource.
- `config.py`: Configuration constants (paths, tables, limits) as UPPER_SNAKE_CASE.
- `exceptions.py`: Project-specific exception classes.

Examples
--------
Basic import pattern:

>>> import egyptnet
>>> # See egyptnet.program_render_site for the entrypoint.

"""
