"""ecss: CSS-like style sheets applied to a live entity scene."""

__version__ = "0.1.0"
