"""Error types raised while loading UFF models.

Every error is fatal to the model load that raised it. Nothing is retried and
no partial model is returned.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "DecodeError",
    "InvalidValueIdentifier",
    "UFFError",
    "UnsupportedAttributeValue",
    "UnsupportedDataType",
    "UnsupportedShapeFormat",
    "UnsupportedValuesFormat",
]


class UFFError(ValueError):
    """Base class for errors raised while loading a UFF model."""


class DecodeError(UFFError):
    """The byte or text stream does not parse as a uff.MetaGraph."""


class UnsupportedAttributeValue(UFFError):
    """A node field carries a value variant that cannot be normalized."""


class UnsupportedDataType(UFFError):
    """A tensor descriptor uses a data type code outside the supported set."""


class UnsupportedShapeFormat(UFFError):
    """A tensor shape is not encoded as a list of integers."""


class UnsupportedValuesFormat(UFFError):
    """Tensor values are not encoded as a raw byte blob."""


class InvalidValueIdentifier(UFFError):
    """A graph value was created with a non-string name."""
