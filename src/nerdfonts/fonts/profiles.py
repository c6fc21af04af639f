"""Curated installation profiles."""

from types import MappingProxyType

from nerdfonts.core.exceptions import InvalidSelectionError

PROFILES = MappingProxyType(
    {
        "coding": ("FiraCode", "JetBrainsMono", "Hack", "CascadiaCode"),
        "terminal": ("Meslo", "UbuntuMono", "DejaVuSansMono"),
        "all-mono": (
            "FiraCode",
            "JetBrainsMono",
            "Hack",
            "CascadiaCode",
            "Meslo",
            "UbuntuMono",
            "DejaVuSansMono",
        ),
    }
)

PROFILE_DESCRIPTIONS = MappingProxyType(
    {
        "coding": "Popular coding fonts",
        "terminal": "Terminal-optimized fonts",
        "all-mono": "All monospace fonts",
    }
)


def get_profile(name: str) -> tuple[str, ...]:
    """Return the ordered fonts of profile ``name``."""
    try:
        return PROFILES[name]
    except KeyError:
        raise InvalidSelectionError(name, "Invalid profile") from None


def list_profiles() -> list[str]:
    return list(PROFILES)
