"""mdsite — render a directory of markdown articles to static HTML pages."""

__version__ = "0.1.0"
