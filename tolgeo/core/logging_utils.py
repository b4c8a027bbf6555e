"""Logger setup for the solvers and the intersection search.

Messages from ``tolgeo.newton``, ``tolgeo.intersection`` and friends all end
up on one stdout handler attached to the ``tolgeo`` logger, which does not
propagate, so applications keep control of their own root logger.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_FORMAT = logging.Formatter('[%(name)s] %(levelname)s: %(message)s')


def _ensure_tolgeo_root() -> logging.Logger:
    """Attach the stdout handler to the `tolgeo` logger once and return it."""
    root = logging.getLogger('tolgeo')
    # The package __init__ only installs a NullHandler; swap it for a real one
    for h in list(root.handlers):
        if isinstance(h, logging.NullHandler):
            root.removeHandler(h)
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(_FORMAT)
        root.addHandler(handler)
    root.propagate = False
    return root


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else default


def configure_logging(level: Union[str, int] = 'INFO', mute_external: bool = True) -> None:
    """Set the verbosity of every `tolgeo.*` logger.

    At DEBUG the search reports dropped seeds and per-call summaries;
    `mute_external` keeps matplotlib's font scanning out of that output.
    """
    root = _ensure_tolgeo_root()
    lvl = _to_level(level)
    root.setLevel(lvl)
    # matplotlib is chatty at DEBUG (font cache scans)
    if mute_external and lvl <= logging.DEBUG:
        for noisy in ('matplotlib', 'matplotlib.font_manager'):
            logging.getLogger(noisy).setLevel(logging.INFO)


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Logger for one tolgeo area, e.g. `get_logger("tolgeo.newton")`.

    Without `level` the logger follows whatever configure_logging() set on
    `tolgeo`.
    """
    _ensure_tolgeo_root()
    log = logging.getLogger(name)
    if level is not None:
        log.setLevel(_to_level(level))
    else:
        log.setLevel(logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging']
