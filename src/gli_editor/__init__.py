"""gli-editor — line-addressable editor for .gitleaksignore files."""

__version__ = "0.1.0"
