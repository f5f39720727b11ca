"""Built-in source adapters and the helpers used to define custom ones."""

from .define import Source, collect_layers, define_source_adapter, load_source, resolve_adapters
from .documents import from_json, from_toml
from .files import dotenv_layers, from_files
from .static import from_object, from_process_env

__all__ = [
    "Source",
    "collect_layers",
    "define_source_adapter",
    "dotenv_layers",
    "from_files",
    "from_json",
    "from_object",
    "from_process_env",
    "from_toml",
    "load_source",
    "resolve_adapters",
]
