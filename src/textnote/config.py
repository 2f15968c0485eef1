"""Configuration management for textnote."""

import logging
import os
import re
from dataclasses import dataclass, field, fields
from datetime import datetime
from pathlib import Path

from .core.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_APP_DIR = "TEXTNOTE_DIR"
ENV_PREFIX = "TEXTNOTE_"
CONFIG_FILE_NAME = ".config"


@dataclass
class HeaderOpts:
    """Daily note header line."""

    prefix: str = ""
    suffix: str = ""
    trailing_newlines: int = 1
    time_format: str = "[%a] %d %b %Y"


@dataclass
class SectionOpts:
    """Section marker lines and the fixed list of section names."""

    prefix: str = "___"
    suffix: str = "___"
    trailing_newlines: int = 3
    names: list[str] = field(default_factory=lambda: ["TODO", "DONE", "NOTES"])


@dataclass
class FileOpts:
    time_format: str = "%Y-%m-%d"
    ext: str = "txt"


@dataclass
class ArchiveOpts:
    """Month archive files and the dated item headers inside them."""

    after_days: int = 14
    file_prefix: str = "archive-"
    header_prefix: str = "ARCHIVE "
    header_suffix: str = ""
    section_content_prefix: str = "["
    section_content_suffix: str = "]"
    # must be fixed-width: archived items are ordered by string comparison
    section_content_time_format: str = "%Y-%m-%d"
    month_time_format: str = "%b%Y"


@dataclass
class CliOpts:
    time_format: str = "%Y-%m-%d"


@dataclass
class Opts:
    """textnote configuration."""

    app_dir: str = ""
    header: HeaderOpts = field(default_factory=HeaderOpts)
    section: SectionOpts = field(default_factory=SectionOpts)
    file: FileOpts = field(default_factory=FileOpts)
    archive: ArchiveOpts = field(default_factory=ArchiveOpts)
    cli: CliOpts = field(default_factory=CliOpts)


GROUPS = ("header", "section", "file", "archive", "cli")


def get_app_dir() -> Path | None:
    app_dir = os.environ.get(ENV_APP_DIR, "")
    return Path(app_dir).expanduser() if app_dir else None


def get_config_file_path() -> Path:
    app_dir = get_app_dir()
    if app_dir is None:
        raise ConfigError(f"environment variable [{ENV_APP_DIR}] is not set")
    return app_dir / CONFIG_FILE_NAME


def config_keys() -> list[str]:
    """All conf-file keys, e.g. ``section_names``, in declaration order."""
    defaults = Opts()
    return [
        f"{group}_{f.name}"
        for group in GROUPS
        for f in fields(getattr(defaults, group))
    ]


def describe_env_vars() -> str:
    """Environment variables that override the config file."""
    return "\n".join(f"  {ENV_PREFIX}{key.upper()}" for key in config_keys())


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"'):
        end_quote = value.find('"', 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if value.startswith("'"):
        end_quote = value.find("'", 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def set_option(opts: Opts, key: str, value: str) -> None:
    """Set one option from its conf-file key and string value."""
    group, _, name = key.partition("_")
    if group not in GROUPS:
        raise ConfigError(f"unknown configuration key [{key}]")
    target = getattr(opts, group)
    current = getattr(target, name, None)
    if current is None:
        raise ConfigError(f"unknown configuration key [{key}]")

    match current:
        case int():
            try:
                parsed = int(value)
            except ValueError as e:
                raise ConfigError(f"[{key}] must be an integer, got [{value}]") from e
        case list():
            parsed = [v.strip() for v in value.split(",") if v.strip()]
        case _:
            parsed = value
    setattr(target, name, parsed)


def parse_config(text: str, opts: Opts | None = None) -> Opts:
    """Apply ``key = value`` lines onto opts (defaults if not given)."""
    opts = opts or Opts()
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        if key == "app_dir":
            continue
        set_option(opts, key, _unquote(value.strip()))
    return opts


def apply_env_overrides(opts: Opts, environ: dict | None = None) -> Opts:
    environ = os.environ if environ is None else environ
    for key in config_keys():
        env_key = f"{ENV_PREFIX}{key.upper()}"
        if env_key in environ:
            set_option(opts, key, environ[env_key])
    return opts


def dump_config(opts: Opts) -> str:
    """Render options in conf-file form. Strings are quoted to keep whitespace."""
    lines = []
    for group in GROUPS:
        section = getattr(opts, group)
        lines.append(f"# {group}")
        for f in fields(section):
            value = getattr(section, f.name)
            if isinstance(value, list):
                value = ",".join(value)
            if isinstance(value, str):
                value = f'"{value}"'
            lines.append(f"{group}_{f.name} = {value}")
        lines.append("")
    return "\n".join(lines)


def _check_time_format(time_format: str, label: str) -> None:
    now = datetime.now()
    try:
        datetime.strptime(now.strftime(time_format), time_format)
    except ValueError as e:
        raise ConfigError(f"invalid {label} time format [{time_format}]") from e


# archived items are sorted by header string, so dates must format to one width
_WIDTH_SAMPLE_DATES = (datetime(2020, 1, 1, 1, 1, 1), datetime(2020, 12, 31, 23, 59, 59))


def _check_fixed_width(time_format: str) -> None:
    widths = {len(d.strftime(time_format)) for d in _WIDTH_SAMPLE_DATES}
    if len(widths) > 1:
        raise ConfigError(
            f"archive section content time format [{time_format}] must produce fixed-width dates"
        )


def validate_config(opts: Opts) -> None:
    """Raise ConfigError if the options are misconfigured."""
    names = opts.section.names
    if not names:
        raise ConfigError("must include at least one section")
    if len(set(names)) != len(names):
        raise ConfigError("section names must be unique")
    for name in names:
        if not re.fullmatch(r"[A-Za-z]+", name):
            raise ConfigError(f"section name [{name}] must contain only letters")

    # archive files are recognized by this prefix
    if not opts.archive.file_prefix.strip():
        raise ConfigError("file prefix for archives must not be empty")

    if opts.header.trailing_newlines < 0 or opts.section.trailing_newlines < 0:
        raise ConfigError("trailing newlines must not be negative")
    if opts.archive.after_days < 0:
        raise ConfigError("archive after_days must not be negative")

    _check_time_format(opts.header.time_format, "header")
    _check_time_format(opts.file.time_format, "file")
    _check_time_format(opts.archive.section_content_time_format, "archive section content")
    _check_fixed_width(opts.archive.section_content_time_format)
    _check_time_format(opts.archive.month_time_format, "archive month")
    _check_time_format(opts.cli.time_format, "cli")


def ensure_app_dir() -> Path:
    """Make sure the app directory exists, creating it if needed."""
    app_dir = get_app_dir()
    if app_dir is None:
        raise ConfigError(f"required environment variable [{ENV_APP_DIR}] is not set")
    if not app_dir.exists():
        app_dir.mkdir(parents=True)
        logger.info(f"created directory [{app_dir}]")
    elif not app_dir.is_dir():
        raise ConfigError(f"[{ENV_APP_DIR}={app_dir}] must be a directory")
    return app_dir


def load_config() -> Opts:
    """Load configuration from the config file and environment."""
    config_path = get_config_file_path()
    opts = Opts(app_dir=str(config_path.parent))

    if config_path.exists():
        parse_config(config_path.read_text(), opts)
    apply_env_overrides(opts)

    try:
        validate_config(opts)
    except ConfigError as e:
        raise ConfigError(f"configuration error in [{config_path}]: {e}") from e
    return opts


def load_or_create() -> Opts:
    """Load configuration, writing a default config file first if none exists."""
    ensure_app_dir()
    config_path = get_config_file_path()
    if not config_path.exists():
        config_path.write_text(dump_config(Opts()))
        logger.info(f"created default configuration file: [{config_path}]")
    return load_config()
