"""Extract typed code artifacts from free-form AI assistant responses."""

__version__ = "0.1.0"
