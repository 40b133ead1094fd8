"""EMLinter: HTML email formatting and dark-mode contrast checking."""

__version__ = "0.1.0"
