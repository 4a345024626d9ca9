"""
Observability helpers: logging configuration, structured log helpers,
correlation IDs and request middleware.
"""

from worksync.observability.logger import configure_logging

__all__ = ["configure_logging"]
