"""Settings core for the Curriculum Curator content generator."""

__version__ = "0.1.0"
