"""Static site build pipeline for GitHub Pages style subpath hosting."""

__version__ = "0.3.0"
