from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Locale:
    """Language plus optional region, e.g. Locale("en", "GB")."""

    lang: str = "en"
    region: Optional[str] = None

    def __post_init__(self):
        if not self.lang:
            raise ValueError("Locale language must not be empty")
        object.__setattr__(self, "lang", self.lang.lower())
        if self.region is not None:
            object.__setattr__(self, "region", self.region.upper())

    @classmethod
    def parse(cls, tag: str) -> "Locale":
        """Parse "en", "en_US" or "en-US"."""
        parts = tag.replace("-", "_").split("_", 1)
        return cls(lang=parts[0], region=parts[1] if len(parts) > 1 else None)

    def __str__(self):
        return f"{self.lang}_{self.region}" if self.region else self.lang
