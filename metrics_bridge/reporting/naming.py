"""Construction of emitted metric names."""
from __future__ import annotations


def prepare_name(name: str, *suffixes: str, prefix: str = "", add_suffix: bool = True) -> str:
    """Build the emitted metric name.

    ``prefix`` is joined with a dot in front of ``name``; the suffixes are
    appended only when ``add_suffix`` is set and at least one is given.
    """

    if prefix:
        name = f"{prefix}.{name}"
    if add_suffix and suffixes:
        name = f"{name}.{'.'.join(suffixes)}"
    return name
