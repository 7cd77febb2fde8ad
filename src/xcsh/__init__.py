"""xcsh, the F5 Distributed Cloud command-line shell."""

__version__ = "0.4.0"
