"""Reading Scheme source files for `load`, `read-all` and `read-contents`."""

from __future__ import annotations

import logging

from schemer import SExpression
from schemer.config import resolve_file
from schemer.errors import SchemerDefaultError
from schemer.reader.parser import parse_all

logger = logging.getLogger(__name__)


def read_source(filename: str) -> str:
    """Return the text of `filename`, resolved against the working directory and SCHEMER_LOAD_PATH."""
    path = resolve_file(filename)
    try:
        return path.read_text(encoding='utf-8')
    except OSError as e:
        raise SchemerDefaultError(f"Cannot read file {filename}: {e.strerror or e}") from e


def read_forms(filename: str) -> list[SExpression]:
    """Parse every top-level form of `filename`, without desugaring or evaluating them."""
    forms = parse_all(read_source(filename))
    logger.debug("Read %d form(s) from %s", len(forms), filename)
    return forms
