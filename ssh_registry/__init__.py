"""SSH host alias and identity key registry."""

__version__ = "0.1.0"
