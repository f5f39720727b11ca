"""Public package surface of ``lib_layered_env``.

Load ``.env`` files and other sources in a deterministic priority order,
validate them against per-variable schemas, and hand back an immutable
:class:`Env` snapshot.
"""

from __future__ import annotations

from .adapters.dotenv.default import DefaultDotEnvLoader, candidate_file_names, load_env
from .adapters.dotenv.parser import EnvParser, parse_env
from .adapters.schemas.pydantic_schema import PydanticSchema
from .adapters.sources import (
    Source,
    define_source_adapter,
    from_files,
    from_json,
    from_object,
    from_process_env,
    from_toml,
    resolve_adapters,
)
from .application.validator import EnvValidator, create_validator
from .core import create_env, read_env_raw
from .domain.env import EMPTY_ENV, Env, LoadedEnvFile, SourceInfo, ValidationIssue
from .domain.errors import (
    EnvError,
    EnvValidationError,
    InvalidFormat,
    NotFound,
    SourceLoadError,
    UnexpectedRootType,
    UsageError,
)
from .domain.schema import Invalid, SchemaIssue, Valid
from .observability import bind_trace_id, get_logger

__all__ = [
    "DefaultDotEnvLoader",
    "EMPTY_ENV",
    "Env",
    "EnvError",
    "EnvParser",
    "EnvValidationError",
    "EnvValidator",
    "Invalid",
    "InvalidFormat",
    "LoadedEnvFile",
    "NotFound",
    "PydanticSchema",
    "SchemaIssue",
    "Source",
    "SourceInfo",
    "SourceLoadError",
    "UnexpectedRootType",
    "UsageError",
    "Valid",
    "ValidationIssue",
    "bind_trace_id",
    "candidate_file_names",
    "create_env",
    "create_validator",
    "define_source_adapter",
    "from_files",
    "from_json",
    "from_object",
    "from_process_env",
    "from_toml",
    "get_logger",
    "load_env",
    "parse_env",
    "read_env_raw",
    "resolve_adapters",
]
