"""
Exceptions raised by the style derivation engine.

Only caller contract violations are raised. Style variations the engine
does not recognise are left alone instead of failing.
"""


class StyleDerivationError(ValueError):
    """Base class for contract violations detected before derivation."""


class LayerContractError(StyleDerivationError):
    """Raised when a layer definition lacks a usable ``id`` or ``type``."""

    def __init__(self, message: str, layer_id: str | None = None):
        super().__init__(message)
        self.layer_id = layer_id


class PaletteError(StyleDerivationError):
    """Raised when a palette is missing a required color slot."""

    def __init__(self, message: str, slot: str | None = None):
        super().__init__(message)
        self.slot = slot


class ConfigError(StyleDerivationError):
    """Raised when a visibility setting is out of range."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field
