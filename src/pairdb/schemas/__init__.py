"""Pydantic configuration schemas for the pairdb pipeline.

All configuration validation, coercion, and normalization happens at
schema validation time via Pydantic.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
load_user_config_dict : function
    Read a CONFIG dict from a user config Python file
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line operational overrides
"""

from pairdb.schemas.resolve import resolve_config, load_user_config_dict
from pairdb.schemas.internal import InternalConfig
from pairdb.schemas.param import ParamConfig
from pairdb.schemas.user import UserConfig
from pairdb.schemas.cli import CLIConfig

__all__ = [
    'resolve_config',
    'load_user_config_dict',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
]
