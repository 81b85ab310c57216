"""NIP-32 provenance labels."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Label:
    """A label namespace ("L") and value ("l") pair."""

    namespace: str
    value: str
