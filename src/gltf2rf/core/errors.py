"""
Conversion Errors

Failures that abort the conversion of a single skin or animation.
"""


class ConversionError(Exception):
    """Base class for errors raised while converting a glTF scene."""


class CapacityExceeded(ConversionError):
    """Skin has more joints than the target format can store."""


class DataMismatch(ConversionError):
    """Parallel sequences in the source data disagree in length or layout."""


class UnsupportedTransform(ConversionError):
    """Bind pose uses a transform the target format cannot represent."""


class FormatError(ConversionError):
    """Input file is not a valid RF mesh file or bone chunk."""
