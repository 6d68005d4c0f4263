"""glvdctl -- command-line client for the Garden Linux Vulnerability Database."""

__version__ = "0.1.0"
