"""Embedded mod manifest data models."""

from dataclasses import dataclass, field


def _get(data: dict, key: str):
    """Look up a key case-insensitively."""
    if key in data:
        return data[key]
    lowered = key.lower()
    for k, v in data.items():
        if isinstance(k, str) and k.lower() == lowered:
            return v
    return None


def _str_or_none(value) -> str | None:
    return value if isinstance(value, str) else None


@dataclass
class ModAuthor:
    """An author entry from a mod manifest."""

    name: str | None = None
    url: str | None = None

    @classmethod
    def from_json(cls, data: dict) -> "ModAuthor":
        return cls(
            name=_str_or_none(_get(data, "Name")),
            url=_str_or_none(_get(data, "Url")),
        )


@dataclass
class ModManifest:
    """Represents the manifest.json found inside a mod archive.

    Every field is optional. Values of the wrong JSON type are ignored.
    """

    name: str | None = None
    version: str | None = None
    description: str | None = None
    authors: list[ModAuthor] = field(default_factory=list)
    website: str | None = None
    group: str | None = None

    @classmethod
    def from_json(cls, data: dict) -> "ModManifest":
        """Create ModManifest from a parsed JSON object."""
        if not isinstance(data, dict):
            raise ValueError("Manifest must be a JSON object")

        authors_data = _get(data, "Authors") or []
        if not isinstance(authors_data, list):
            authors_data = []

        return cls(
            name=_str_or_none(_get(data, "Name")),
            version=_str_or_none(_get(data, "Version")),
            description=_str_or_none(_get(data, "Description")),
            authors=[
                ModAuthor.from_json(a) for a in authors_data if isinstance(a, dict)
            ],
            website=_str_or_none(_get(data, "Website")),
            group=_str_or_none(_get(data, "Group")),
        )

    @property
    def author_names(self) -> list[str]:
        """Author names with blank entries removed."""
        return [a.name for a in self.authors if a.name and a.name.strip()]
