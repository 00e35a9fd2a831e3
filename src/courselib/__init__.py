"""courselib: author/course library service with a generic collection query engine."""

__version__ = "0.3.0"
