"""
Initializr Metadata

Dependency compatibility and metadata defaulting for project generation requests.
"""

__version__ = "0.1.0"

from .cli import main

__all__ = ["main"]
