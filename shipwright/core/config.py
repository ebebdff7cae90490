"""Typed project configuration.

An optional ``shipwright.toml`` at the project root adjusts publish and git
defaults. Every key is optional; command-line flags override these values.

    [publish]
    registry = "https://registry.npmjs.org"
    client = "npm"
    src = "dist"
    dest = ".dist"
    root_files = ["README.md", ".npmrc"]
    license_file = "LICENSE"

    [git]
    tag_prefix = "v"
    commit_message = "released v{version}"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_REGISTRY",
    "Config",
    "ConfigError",
    "GitConfig",
    "PublishConfig",
    "load_config",
    "load_project_config",
]

CONFIG_FILENAME = "shipwright.toml"

DEFAULT_REGISTRY = "https://registry.npmjs.org"
DEFAULT_CLIENT = "npm"
DEFAULT_SRC = "dist"
DEFAULT_DEST = ".dist"
DEFAULT_ROOT_FILES = ("README.md", ".npmrc")
DEFAULT_LICENSE_FILE = "LICENSE"
DEFAULT_TAG_PREFIX = "v"
DEFAULT_COMMIT_MESSAGE = "released v{version}"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the config file cannot be read or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PublishConfig:
    """Registry and staging defaults."""

    registry: str = DEFAULT_REGISTRY
    client: str = DEFAULT_CLIENT
    src: str = DEFAULT_SRC
    dest: str = DEFAULT_DEST
    root_files: tuple[str, ...] = DEFAULT_ROOT_FILES
    license_file: str = DEFAULT_LICENSE_FILE


@dataclass(frozen=True, slots=True)
class GitConfig:
    """Commit and tag naming."""

    tag_prefix: str = DEFAULT_TAG_PREFIX
    commit_message: str = DEFAULT_COMMIT_MESSAGE

    def default_message(self, version: str) -> str:
        """Fill the template. Only ``{version}`` is substituted; other braces stay literal."""
        return self.commit_message.replace("{version}", version)

    def tag_name(self, version: str) -> str:
        return f"{self.tag_prefix}{version}"


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    publish: PublishConfig = field(default_factory=PublishConfig)
    git: GitConfig = field(default_factory=GitConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        publish: StrDict = get_table(data, "publish") or {}
        git: StrDict = get_table(data, "git") or {}

        root_files = get_str_list(publish, "root_files")
        # An empty tag prefix is legitimate, so it is not read with get_str.
        tag_prefix = git.get("tag_prefix")

        return cls(
            publish=PublishConfig(
                registry=get_str(publish, "registry") or DEFAULT_REGISTRY,
                client=get_str(publish, "client") or DEFAULT_CLIENT,
                src=get_str(publish, "src") or DEFAULT_SRC,
                dest=get_str(publish, "dest") or DEFAULT_DEST,
                root_files=tuple(root_files) if root_files is not None else DEFAULT_ROOT_FILES,
                license_file=get_str(publish, "license_file") or DEFAULT_LICENSE_FILE,
            ),
            git=GitConfig(
                tag_prefix=tag_prefix if isinstance(tag_prefix, str) else DEFAULT_TAG_PREFIX,
                commit_message=get_str(git, "commit_message") or DEFAULT_COMMIT_MESSAGE,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def _validate(config: Config, path: Path) -> Result[Config, ConfigError]:
    if "{version}" not in config.git.commit_message:
        return Err(
            ConfigError("git.commit_message must contain a {version} placeholder", path=path)
        )
    for name in (*config.publish.root_files, config.publish.license_file):
        if Path(name).is_absolute() or ".." in Path(name).parts:
            return Err(ConfigError(f"root file must be relative to the project: {name}", path=path))
    return Ok(config)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate configuration from a TOML file.

    Args:
        path: Path to shipwright.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    parsed = _parse_toml(path)
    if isinstance(parsed, Err):
        return parsed
    return _validate(Config.from_dict(parsed.value), path)


def load_project_config(root: Path) -> Result[Config, ConfigError]:
    """Load ``<root>/shipwright.toml``, falling back to defaults when absent."""
    path = root / CONFIG_FILENAME
    if not path.exists():
        return Ok(Config())
    return load_config(path)
