"""Fantasy football league models, squad rules, seed data, in-memory repositories and token verification."""

__version__ = "0.1.0"