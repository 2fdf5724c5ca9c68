"""Snippet data model and its JSON object shape."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Snippet:
    """A stored title/description pair. Identity is list position."""

    title: str
    description: str

    def to_json(self) -> dict[str, str]:
        return {"title": self.title, "description": self.description}

    @classmethod
    def from_json(cls, raw: object) -> Snippet | None:
        """Decode one persisted object, or ``None`` when the shape is wrong.

        Extra keys are ignored; both fields must be strings.
        """
        if not isinstance(raw, dict):
            return None
        title = raw.get("title")
        description = raw.get("description")
        if not isinstance(title, str) or not isinstance(description, str):
            return None
        return cls(title=title, description=description)
