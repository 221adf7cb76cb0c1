"""containerdiff: compare deployed container versions across cluster environments."""

__version__ = "0.4.0"
