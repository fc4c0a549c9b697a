"""
Configuration management for NameSilo DDNS.

This module handles loading and validating the run configuration from an
optional TOML file and command-line arguments. Configuration priority
(high to low):
1. Command-line arguments
2. Configuration file
3. Default values
"""

from __future__ import annotations

import argparse
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from namesilo_ddns.errors import ConfigError
from namesilo_ddns.models import RecordType

if TYPE_CHECKING:
    from typing import Any, Final


# Configuration file picked up from the working directory when --config is absent
DEFAULT_CONFIG_FILE: Final[Path] = Path("namesilo-ddns.toml")

# Keys accepted in the configuration file
_CONFIG_KEYS: Final[frozenset[str]] = frozenset(
    {"domain", "name", "type", "record", "key", "debug", "log_file"},
)


class RunConfig(BaseModel):
    """
    Resolved inputs for one invocation.

    Attributes
    ----------
    domain : str
        Registrable domain (e.g., "example.com").
    name : str
        Subdomain label to manage (e.g., "home").
    type : RecordType
        DNS record type.
    record : str | None
        Explicit record value. If None, the public IP is discovered.
    key : str
        NameSilo API key.
    debug : bool
        Whether to log at DEBUG level.
    log_file : Path | None
        Optional path of a log file.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    domain: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    type: RecordType = RecordType.A
    record: str | None = None
    key: str = Field(..., min_length=1)
    debug: bool = False
    log_file: Path | None = None


def _format_validation_errors(
    error: ValidationError,
    config_path: Path | None,
) -> str:
    """
    Format Pydantic validation errors into human-readable messages.

    Parameters
    ----------
    error : ValidationError
        Pydantic validation error.
    config_path : Path | None
        Path to the configuration file.

    Returns
    -------
    str
        Human-readable error message.
    """
    lines: list[str] = []

    if config_path:
        lines.append(f'Configuration error (file "{config_path}"):')
    else:
        lines.append("Configuration error:")

    for err in error.errors():
        field_path = ".".join(str(loc) for loc in err["loc"])
        error_type = err["type"]

        if error_type == "missing":
            lines.append(f"  [{field_path}]: Missing required option --{field_path}.")
        elif error_type == "string_too_short":
            lines.append(f"  [{field_path}]: Option --{field_path} must not be empty.")
        elif error_type == "extra_forbidden":
            lines.append(f"  [{field_path}]: Unknown configuration key.")
        else:
            error_input = err["input"]
            value_repr = (
                f'"{error_input}"' if isinstance(error_input, str) else repr(error_input)
            )
            lines.append(f"  [{field_path}]: {err['msg']} (value: {value_repr}).")

    return "\n".join(lines)


def validate_config_dict(
    data: dict[str, Any],
    config_path: Path | None = None,
) -> RunConfig:
    """
    Validate a configuration dictionary and build the run configuration.

    Parameters
    ----------
    data : dict[str, Any]
        Configuration dictionary to validate.
    config_path : Path | None, optional
        Path to the configuration file (for error messages).

    Returns
    -------
    RunConfig
        The validated run configuration.

    Raises
    ------
    ConfigError
        If validation fails.
    """
    try:
        return RunConfig.model_validate(data)
    except ValidationError as e:
        msg = _format_validation_errors(e, config_path)
        raise ConfigError(msg, config_path) from e


def load_config_from_file(config_path: Path) -> dict[str, Any]:
    """
    Load configuration from a TOML file.

    Parameters
    ----------
    config_path : Path
        Path to the configuration file.

    Returns
    -------
    dict[str, Any]
        Parsed configuration dictionary.

    Raises
    ------
    ConfigError
        If the file does not exist, cannot be read, or is not valid TOML.
    """
    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        msg = f'Configuration file not found: "{config_path}".'
        raise ConfigError(msg, config_path) from e
    except tomllib.TOMLDecodeError as e:
        msg = f'Failed to parse configuration file "{config_path}": {e}.'
        raise ConfigError(msg, config_path) from e
    except OSError as e:
        msg = f'Failed to read configuration file "{config_path}": {e}.'
        raise ConfigError(msg, config_path) from e

    unknown = sorted(set(data) - _CONFIG_KEYS)
    if unknown:
        msg = (
            f'Unknown keys in configuration file "{config_path}": '
            f"{', '.join(unknown)}."
        )
        raise ConfigError(msg, config_path)
    return data


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command-line argument parser.

    Required options are validated after merging with the configuration
    file, so none of them are marked as required here.

    Returns
    -------
    argparse.ArgumentParser
        The argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="namesilo-ddns",
        description="NameSilo DDNS - Point a NameSilo DNS record at the current public IP",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "--domain",
        type=str,
        default=None,
        help="A top-level domain",
    )
    parser.add_argument(
        "--type",
        type=str,
        choices=[t.value for t in RecordType],
        default=None,
        help="The type of a domain name can be classified as A, AAAA, TXT, or CNAME (default: A)",
    )
    parser.add_argument(
        "--name",
        type=str,
        default=None,
        help="Second-level domain",
    )
    parser.add_argument(
        "--record",
        type=str,
        default=None,
        help="IP value, if left blank, will be automatically obtained from the internet",
    )
    parser.add_argument(
        "--key",
        type=str,
        default=None,
        help="The key for NameSilo",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Debug mode, log every fetched record",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        dest="log_file",
        default=None,
        help="Also write logs to this file",
    )

    return parser


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Parameters
    ----------
    args : list[str] | None, optional
        Command-line arguments. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    return build_parser().parse_args(args)


def load_config(args: argparse.Namespace | None = None) -> RunConfig:
    """
    Load the run configuration from file and command-line arguments.

    Priority (high to low):
    1. Command-line arguments
    2. Configuration file
    3. Default values

    Parameters
    ----------
    args : argparse.Namespace | None, optional
        Parsed command-line arguments.

    Returns
    -------
    RunConfig
        Loaded configuration.

    Raises
    ------
    ConfigError
        If the configuration file is unusable or required values are missing.
    """
    if args is None:
        args = parse_args()

    config_dict: dict[str, Any] = {}

    # Load from config file if specified or if default exists
    config_path = args.config
    if config_path is not None:
        config_path = config_path.expanduser()
    elif DEFAULT_CONFIG_FILE.exists():
        config_path = DEFAULT_CONFIG_FILE

    if config_path is not None:
        config_dict = load_config_from_file(config_path)

    # Apply command-line overrides
    for key in ("domain", "name", "type", "record", "key", "debug", "log_file"):
        value = getattr(args, key)
        if value is not None:
            config_dict[key] = value

    # An empty --record means "discover the IP"
    if config_dict.get("record") == "":
        config_dict["record"] = None

    if isinstance(config_dict.get("log_file"), str):
        config_dict["log_file"] = Path(config_dict["log_file"]).expanduser()

    return validate_config_dict(config_dict, config_path)
