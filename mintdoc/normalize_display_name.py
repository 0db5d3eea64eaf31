"""Utility for normalizing item display names."""


def normalize_display_name(display_name: str) -> str:
    """Replace the extractor's ``(constructor)`` spelling with ``constructor``."""
    if not display_name:
        return display_name
    return display_name.replace("(constructor)", "constructor")
