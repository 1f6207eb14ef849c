class ResourceError(Exception):
    """Base exception for resource snapshot errors."""


class ResourceParseError(ResourceError):
    """Raised when snapshot text is malformed or structurally invalid."""


class ResourceDecodeError(ResourceError):
    """Raised when a parsed snapshot holds content that cannot be reconstructed."""


class ColorDecodeError(ResourceDecodeError):
    """Raised when a palette entry is not a six digit hexadecimal string."""


class GridDecodeError(ResourceDecodeError):
    """Raised when a compressed grid does not fit its declared width/height."""


class UnknownVariantError(ResourceDecodeError):
    """Raised when an enumeration index (e.g. noise type) is out of range."""


class ResourceFileError(ResourceError):
    """Raised when a resource archive is missing or cannot be read."""


class TableSizeError(ResourceDecodeError):
    """Raised when a waveform table does not have the engine's table length."""
