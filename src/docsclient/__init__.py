"""docsclient: typed access to a tree of markdown documents and directory meta files."""

from docsclient.client import DocsClient

__version__ = "0.1.0"

__all__ = ["DocsClient", "__version__"]
