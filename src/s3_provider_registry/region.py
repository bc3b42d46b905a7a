"""Region value object."""

from dataclasses import dataclass
from typing import Any, Dict

from . import sanitize

AUTOMATIC_REGION = "auto"


@dataclass(frozen=True)
class Region:
    """A deployment location offered by a provider.

    Use :meth:`create` to build a region from raw data; it applies the same
    sanitizing the registry applies when parsing providers documents.

    Attributes:
        continent: Normalized continent identifier (``[a-z0-9_-]`` only)
        label: Human-readable, HTML-escaped label
        code: HTML-escaped region identifier, unique within its provider
    """

    continent: str
    label: str
    code: str

    @classmethod
    def create(cls, continent: Any, label: Any, code: Any) -> "Region":
        """Build a sanitized region from raw values."""
        return cls(
            continent=sanitize.key(continent),
            label=sanitize.escape(label),
            code=sanitize.escape(code),
        )

    def is_automatic(self) -> bool:
        """Check whether this is the automatic (``auto``) region."""
        return self.code.lower() == AUTOMATIC_REGION

    @property
    def display_label(self) -> str:
        """Label used in option lists, e.g. ``"EU (Ireland) (eu-west-1)"``."""
        return f"{self.label} ({self.code})"

    def to_dict(self) -> Dict[str, str]:
        """Return the raw ``{label, region}`` record for this region."""
        return {"label": sanitize.unescape(self.label), "region": sanitize.unescape(self.code)}
