"""EF repository-pattern scaffolding generator."""
__version__ = "0.1.0"
