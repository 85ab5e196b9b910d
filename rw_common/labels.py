"""Equality-based label selectors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class LabelSelector:
    """Conjunction of ``key=value`` and ``key!=value`` requirements."""

    equals: tuple[tuple[str, str], ...] = ()
    not_equals: tuple[tuple[str, str], ...] = ()

    @classmethod
    def parse(cls, text: str | None) -> "LabelSelector":
        """Parse a comma-separated selector such as ``app=web,tier!=db``.

        Blank tokens are skipped; tokens without an operator or key raise
        ValueError.
        """
        equals: list[tuple[str, str]] = []
        not_equals: list[tuple[str, str]] = []
        if not text:
            return cls()
        for token in text.split(","):
            token = token.strip()
            if not token:
                continue
            if "!=" in token:
                key, value = token.split("!=", 1)
                bucket = not_equals
            elif "==" in token:
                key, value = token.split("==", 1)
                bucket = equals
            elif "=" in token:
                key, value = token.split("=", 1)
                bucket = equals
            else:
                raise ValueError(f"invalid label requirement: {token!r}")
            key = key.strip()
            if not key:
                raise ValueError(f"missing label key in {token!r}")
            bucket.append((key, value.strip()))
        return cls(equals=tuple(equals), not_equals=tuple(not_equals))

    @property
    def empty(self) -> bool:
        return not self.equals and not self.not_equals

    def matches(self, labels: Mapping[str, str]) -> bool:
        for key, value in self.equals:
            if labels.get(key) != value:
                return False
        for key, value in self.not_equals:
            if labels.get(key) == value:
                return False
        return True

    def __str__(self) -> str:
        parts = [f"{k}={v}" for k, v in self.equals]
        parts.extend(f"{k}!={v}" for k, v in self.not_equals)
        return ",".join(parts)
