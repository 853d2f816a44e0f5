"""Split monolithic AI context files into an index plus chapter files."""

__version__ = "0.0.3"
