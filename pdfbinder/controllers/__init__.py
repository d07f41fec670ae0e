"""Controller layer for decoupling conversion state from widgets."""

from .conversion import ConversionController, ConversionState

__all__ = [
    "ConversionController",
    "ConversionState",
]
