"""Control primitives, message types and wire formats for quadruped robots."""

__version__ = "0.1.0"