"""Utility functions for configuration I/O."""

from .io import (
    save_config,
    load_config,
    save_context,
    load_context
)

__all__ = [
    'save_config',
    'load_config',
    'save_context',
    'load_context'
]
