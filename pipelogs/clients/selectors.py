"""Equality-based label selectors (``key=value,key2=value2``)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pipelogs.models.labels import LABEL_LEGACY_REPOSITORY, LABEL_REPOSITORY


def build_label_selector(filters: Iterable[str]) -> str:
    return ",".join(f for f in filters if f)


def activity_label_selector(filters: Iterable[str]) -> str:
    """Selector for activities: the first ``repo=`` term becomes ``repository=``."""
    return build_label_selector(filters).replace(
        f"{LABEL_LEGACY_REPOSITORY}=", f"{LABEL_REPOSITORY}=", 1
    )


def parse_label_selector(selector: str) -> dict[str, str]:
    """Parse a selector into ``{key: value}``.

    Raises
    ------
    ValueError
        If a term is not of the form ``key=value``.
    """
    terms: dict[str, str] = {}
    for raw in selector.split(","):
        term = raw.strip()
        if not term:
            continue
        key, sep, value = term.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"invalid label selector term {term!r}")
        terms[key.strip()] = value.strip()
    return terms


def selector_matches(labels: Mapping[str, str], selector: str) -> bool:
    return all(
        labels.get(key) == value
        for key, value in parse_label_selector(selector).items()
    )
