"""
Base library config module. The config here only controls ambient behavior of
the library (logging, validation switches). The image defaults consumed by a
reconcile pass are resolved explicitly with defaults.setup_defaults().
"""

# Local
from .config import configure_logging, library_config, load_library_config


# Define __getattr__ on this module to delegate to the library config.
def __getattr__(name):
    if name in library_config or hasattr({}, name):
        return getattr(library_config, name)
    raise AttributeError(f"No such config attribute {name}")


# Only expose the library config keys
__all__ = list(library_config.keys())
