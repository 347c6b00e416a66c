"""ghrelease - GitHub releases and release notes driven by a RELEASE file."""

__version__ = "0.1.0"
