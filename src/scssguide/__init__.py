"""scssguide - enforce an SCSS naming and authoring guide."""

__version__ = "0.1.0"
