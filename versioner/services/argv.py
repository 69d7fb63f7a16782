from __future__ import annotations

import sys
from collections.abc import Sequence

__all__ = ["parse_argv"]

_RENAMED_KEYS = {"package-name": "packageName"}


def parse_argv(argv: Sequence[str] | None = None) -> dict[str, str]:
    """Collect ``--key=value`` tokens into a flat mapping.

    Tokens that do not start with ``--`` or carry no ``=`` are ignored. The
    value is everything after the first ``=``. No validation happens here.
    """
    args = sys.argv if argv is None else argv
    out: dict[str, str] = {}
    for item in args:
        if not item.startswith("--"):
            continue
        key, sep, value = item[2:].partition("=")
        if not sep or not key:
            continue
        out[_RENAMED_KEYS.get(key, key)] = value
    return out
