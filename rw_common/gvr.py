"""Resource kind identifiers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class ResourceKind:
    """Group/version/resource triple naming one category of resources."""

    group: str = ""
    version: str = ""
    resource: str = ""

    @classmethod
    def parse(cls, text: str) -> "ResourceKind":
        """Parse ``group/version/resource``, ``version/resource`` or ``resource``."""
        tokens = [token.strip() for token in text.strip().split("/")]
        if not tokens or not tokens[-1] or len(tokens) > 3:
            raise ValueError(f"invalid resource kind: {text!r}")
        if len(tokens) == 3:
            return cls(group=tokens[0], version=tokens[1], resource=tokens[2])
        if len(tokens) == 2:
            return cls(version=tokens[0], resource=tokens[1])
        return cls(resource=tokens[0])

    def __str__(self) -> str:
        return "/".join(part for part in (self.group, self.version, self.resource) if part)
