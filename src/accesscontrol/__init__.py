"""Access control service - roles, role assignments and permission checks."""

__version__ = "0.1.0"
