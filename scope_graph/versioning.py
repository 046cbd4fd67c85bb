"""Semantic-version helpers on top of ``semantic_version``."""

from __future__ import annotations

from semantic_version import NpmSpec, Version


def max_satisfying(versions: list[str], range_: str = "*") -> str | None:
    """Return the greatest label in ``versions`` matching an npm-style range.

    A leading ``v`` or ``=`` on a label is tolerated. Labels that are not
    valid semantic versions are ignored, and ``None`` is returned when
    nothing matches.
    """
    spec = NpmSpec(range_)
    parsed: dict[Version, str] = {}
    for label in versions:
        try:
            parsed[Version(label.lstrip("v="))] = label
        except ValueError:
            continue

    best = spec.select(parsed)
    if best is None:
        return None
    return parsed[best]
