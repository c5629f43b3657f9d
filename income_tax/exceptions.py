"""
Exception types raised by the income tax engine.

The computation functions are total over sanitized numeric input and
return zero sentinels instead of raising. Errors are only raised for
inputs that cannot be interpreted at all.
"""


class TaxComputationError(ValueError):
    """Base class for all errors raised by the income tax engine."""


class UnknownAssetTypeError(TaxComputationError):
    """Raised in strict mode when a capital gain references an unknown asset type."""

    def __init__(self, asset_type: str):
        self.asset_type = asset_type
        super().__init__(f"Unknown asset type: {asset_type!r}")


class ProfileParseError(TaxComputationError):
    """Raised when a taxpayer profile cannot be parsed."""
