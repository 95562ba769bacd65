"""Tri-state column sorting for allocation tables.

Clicking the same column cycles ascending -> descending -> unsorted. Keys may
be dotted paths into nested attributes or dict entries. ``None`` values always
sort last, whatever the direction.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias, TypeVar
from urllib.parse import urlencode

SortDirection: TypeAlias = Literal["asc", "desc"]

ASC: SortDirection = "asc"
DESC: SortDirection = "desc"

T = TypeVar("T")

INDICATORS = {None: "⇅", ASC: "↑", DESC: "↓"}


@dataclass(frozen=True)
class SortConfig:
    key: str | None = None
    direction: SortDirection | None = None

    @property
    def is_active(self) -> bool:
        return self.key is not None and self.direction is not None

    @classmethod
    def from_params(
        cls, key: str | None, direction: str | None, allowed: Iterable[str]
    ) -> SortConfig:
        """Build a config from query parameters, ignoring unknown values."""
        if not key or key not in set(allowed) or direction not in (ASC, DESC):
            return cls()
        return cls(key=key, direction=direction)  # type: ignore[arg-type]


def next_sort(current: SortConfig, key: str) -> SortConfig:
    if current.key != key or current.direction is None:
        return SortConfig(key=key, direction=ASC)
    if current.direction == ASC:
        return SortConfig(key=key, direction=DESC)
    return SortConfig()


def resolve_path(item: Any, path: str) -> Any:
    """Follow a dotted path through attributes or mapping keys."""
    value = item
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def sort_rows(
    rows: Iterable[T], config: SortConfig, paths: Mapping[str, str] | None = None
) -> list[T]:
    """Return rows sorted per ``config``; input order when the config is inactive.

    ``paths`` optionally maps public sort keys to dotted attribute paths.
    """
    rows = list(rows)
    if not config.is_active:
        return rows

    path = (paths or {}).get(config.key, config.key)  # type: ignore[arg-type]
    present = [r for r in rows if resolve_path(r, path) is not None]
    missing = [r for r in rows if resolve_path(r, path) is None]

    present.sort(key=lambda r: _sort_value(resolve_path(r, path)), reverse=config.direction == DESC)
    return present + missing


def _sort_value(value: Any) -> Any:
    return value.casefold() if isinstance(value, str) else value


def sort_indicator(config: SortConfig, key: str) -> str:
    if config.key != key:
        return INDICATORS[None]
    return INDICATORS[config.direction]


@dataclass(frozen=True)
class SortHeader:
    key: str
    label: str
    indicator: str
    query: str
    is_active: bool


def build_sort_headers(
    columns: Sequence[tuple[str, str]],
    config: SortConfig,
    key_param: str,
    dir_param: str,
    preserved: Mapping[str, str] | None = None,
) -> list[SortHeader]:
    """Header links whose query string applies the next sort state.

    ``preserved`` carries the other table's parameters so both sorts survive.
    """
    headers = []
    for key, label in columns:
        following = next_sort(config, key)
        params = {k: v for k, v in (preserved or {}).items() if v}
        if following.is_active:
            params[key_param] = following.key  # type: ignore[assignment]
            params[dir_param] = following.direction  # type: ignore[assignment]
        headers.append(
            SortHeader(
                key=key,
                label=label,
                indicator=sort_indicator(config, key),
                query=urlencode(params),
                is_active=config.key == key,
            )
        )
    return headers
