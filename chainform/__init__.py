"""chainform: turn smart-contract interfaces into forms and standalone apps."""

__version__ = "0.3.0"

__all__ = ["__version__"]
