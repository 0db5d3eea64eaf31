"""Logic for validating and normalizing path segments derived from item names."""

import re

from mintdoc.errors import ErrorCode, ValidationError

DEFAULT_MAX_SEGMENT_LENGTH = 200

RESERVED_NAMES = frozenset(
    {
        "CON",
        "PRN",
        "AUX",
        "NUL",
        "COM1",
        "COM2",
        "COM3",
        "COM4",
        "COM5",
        "COM6",
        "COM7",
        "COM8",
        "COM9",
        "LPT1",
        "LPT2",
        "LPT3",
        "LPT4",
        "LPT5",
        "LPT6",
        "LPT7",
        "LPT8",
        "LPT9",
    }
)

CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")
BAD_FILENAME_CHARS_RE = re.compile(r"[^A-Za-z0-9_.-]")


class Sanitizer:
    """Rejects dangerous names and makes accepted ones filename-safe."""

    def __init__(self, max_segment_length: int = DEFAULT_MAX_SEGMENT_LENGTH) -> None:
        """Initialize the sanitizer with the segment length cap."""
        self.max_segment_length = max_segment_length

    def danger_reason(self, name: str) -> str | None:
        """Return why ``name`` is unsafe as a path segment, or ``None``."""
        if not name or not name.strip():
            return "empty name"
        if ".." in name:
            return "parent-directory sequence"
        if "~" in name:
            return "home-directory shortcut"
        if "//" in name or "\\\\" in name:
            return "doubled separator"
        if name.startswith(("/", "\\")):
            return "leading path separator"
        if CONTROL_CHARS_RE.search(name):
            return "control character"
        if "<" in name or ">" in name:
            return "angle bracket"
        if name.upper() in RESERVED_NAMES:
            return "reserved device name"
        return None

    def validate(self, name: str, *, resource: str | None = None) -> str:
        """Raise :class:`ValidationError` if ``name`` is unsafe, else return it."""
        reason = self.danger_reason(name)
        if reason:
            msg = f'Dangerous path segment "{name}": {reason}'
            raise ValidationError(
                msg,
                ErrorCode.INVALID_FILENAME,
                resource=resource or name,
                operation="validate_segment",
                data={"segment": name, "reason": reason},
            )
        return name

    def normalize(self, name: str, *, resource: str | None = None) -> str:
        """Validate ``name`` and replace filename-hostile characters, keeping case."""
        self.validate(name, resource=resource)
        safe = BAD_FILENAME_CHARS_RE.sub("_", name)

        # Windows cleanup
        safe = safe.rstrip(". ")

        if not safe or safe.upper() in RESERVED_NAMES:
            msg = f'Path segment "{name}" has no usable characters'
            raise ValidationError(
                msg,
                ErrorCode.INVALID_FILENAME,
                resource=resource or name,
                operation="normalize_segment",
            )
        if len(safe) > self.max_segment_length:
            msg = (
                f'Path segment "{safe[:40]}..." exceeds '
                f"{self.max_segment_length} characters"
            )
            raise ValidationError(
                msg,
                ErrorCode.INVALID_FILENAME,
                resource=resource or name,
                operation="normalize_segment",
                data={"length": len(safe), "max": self.max_segment_length},
            )
        return safe
