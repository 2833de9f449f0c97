"""Application configuration, read from a TOML file with environment interpolation."""

from __future__ import annotations

import argparse
import logging
import os
import re
import sys
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from fractions import Fraction
from pathlib import Path
from typing import Any

from ocypod.duration import Duration
from ocypod.errors import BadRequest
from ocypod.queue_settings import QueueSettings

log = logging.getLogger(__name__)

INTERPOLATE_RE = re.compile(r"\$\{([A-Z][A-Z0-9_]*)(?:=([^}]*))?\}", re.MULTILINE)

TRACE = 5
MAX_SHUTDOWN_TIMEOUT = 65_535
_MAX_PORT = 65_535
_MAX_USIZE = 2**64 - 1

_LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}

_SIZE_RE = re.compile(r"\s*([0-9]+(?:\.[0-9]+)?)\s*([A-Za-z]+)\s*")
_SIZE_UNITS = {
    "B": 1,
    "kB": 10**3,
    "MB": 10**6,
    "GB": 10**9,
    "TB": 10**12,
    "PB": 10**15,
    "EB": 10**18,
    "ZB": 10**21,
    "YB": 10**24,
    "KiB": 2**10,
    "MiB": 2**20,
    "GiB": 2**30,
    "TiB": 2**40,
    "PiB": 2**50,
    "EiB": 2**60,
    "ZiB": 2**70,
    "YiB": 2**80,
}


class ConfigError(ValueError):
    """The configuration could not be read or is invalid."""


def interpolate_env(raw_toml: str, environ: Mapping[str, str] | None = None) -> str:
    """Replace ``${NAME}`` and ``${NAME=default}`` with values from the environment."""
    env = os.environ if environ is None else environ
    missing: set[str] = set()

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in env:
            return env[name]
        default = match.group(2)
        if default is not None:
            return default
        missing.add(name)
        return ""

    interpolated = INTERPOLATE_RE.sub(replace, raw_toml)
    if missing:
        raise ConfigError(
            "could not interpolate environment variables into config, "
            "the following variables were not set: " + ", ".join(sorted(missing))
        )
    return interpolated


def parse_human_size(text: str) -> int:
    """Parse a size such as ``"256kB"`` or ``"1 MiB"`` into a number of bytes."""
    match = _SIZE_RE.fullmatch(text) if isinstance(text, str) else None
    if match is None or match.group(2) not in _SIZE_UNITS:
        raise ConfigError(f"Unable to parse size '{text}'")
    size = int(Fraction(match.group(1)) * _SIZE_UNITS[match.group(2)])
    if size > _MAX_USIZE:
        raise ConfigError(f"Unable to parse size '{text}'")
    return size


def parse_log_level(text: str) -> int:
    """Parse a log level name, ignoring case, into a :mod:`logging` level number."""
    level = _LOG_LEVELS.get(text.lower()) if isinstance(text, str) else None
    if level is None:
        raise ConfigError(f"Invalid log level: {text}")
    return level


@dataclass
class ServerConfig:
    """Settings for the HTTP server and its periodic background checks."""

    host: str = "127.0.0.1"
    port: int = 8023
    threads: int | None = None
    max_body_size: int | None = None
    timeout_check_interval: Duration = field(default_factory=lambda: Duration(30))
    retry_check_interval: Duration = field(default_factory=lambda: Duration(60))
    expiry_check_interval: Duration = field(default_factory=lambda: Duration(300))
    shutdown_timeout: Duration | None = None
    next_job_delay: Duration | None = None
    log_level: int = logging.INFO


@dataclass
class RedisConfig:
    """Settings for connecting to Redis."""

    url: str = "redis://127.0.0.1"
    key_namespace: str = ""


def _table(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, Mapping):
        raise ConfigError(f"invalid type for '{name}': expected a table")
    return value


def _string(table: Mapping[str, Any], key: str, default: str) -> str:
    value = table.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"invalid type for '{key}': expected a string")
    return value


def _integer(value: Any, key: str, maximum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= maximum:
        raise ConfigError(f"invalid value for '{key}': expected an integer from 0 to {maximum}")
    return value


def _duration(value: Any, key: str) -> Duration:
    if not isinstance(value, str):
        raise ConfigError(f"invalid type for '{key}': expected a duration string")
    try:
        return Duration.parse(value)
    except ValueError as exc:
        raise ConfigError(f"invalid value for '{key}': {exc}") from exc


def _server_from_table(table: Mapping[str, Any]) -> ServerConfig:
    server = ServerConfig()
    server.host = _string(table, "host", server.host)
    if "port" in table:
        server.port = _integer(table["port"], "port", _MAX_PORT)
    if "threads" in table:
        server.threads = _integer(table["threads"], "threads", _MAX_USIZE)
    if "max_body_size" in table:
        server.max_body_size = parse_human_size(table["max_body_size"])
    for key in ("timeout_check_interval", "retry_check_interval", "expiry_check_interval"):
        if key in table:
            setattr(server, key, _duration(table[key], key))
    for key in ("shutdown_timeout", "next_job_delay"):
        if key in table:
            setattr(server, key, _duration(table[key], key))
    if "log_level" in table:
        server.log_level = parse_log_level(table["log_level"])
    return server


def _redis_from_table(table: Mapping[str, Any]) -> RedisConfig:
    defaults = RedisConfig()
    return RedisConfig(
        url=_string(table, "url", defaults.url),
        key_namespace=_string(table, "key_namespace", defaults.key_namespace),
    )


def _queues_from_table(table: Mapping[str, Any]) -> dict[str, QueueSettings]:
    queues = {}
    for name, settings in table.items():
        if not isinstance(settings, Mapping):
            raise ConfigError(f"invalid type for queue '{name}': expected a table")
        try:
            queues[name] = QueueSettings.from_dict(settings)
        except BadRequest as exc:
            raise ConfigError(f"queue '{name}': {exc}") from exc
    return queues


@dataclass
class Config:
    """Main application configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    redis: RedisConfig = field(default_factory=RedisConfig)
    queue: dict[str, QueueSettings] | None = None

    @classmethod
    def from_toml(cls, text: str) -> Config:
        """Parse configuration from TOML text; missing settings take defaults."""
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(str(exc)) from exc
        queue = None
        if "queue" in data:
            queue = _queues_from_table(_table(data, "queue"))
        return cls(
            server=_server_from_table(_table(data, "server")),
            redis=_redis_from_table(_table(data, "redis")),
            queue=queue,
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> Config:
        """Read a TOML file, interpolate environment variables, and parse it."""
        path = Path(path)
        log.debug("Reading configuration from %s", path)
        try:
            data = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(str(exc)) from exc
        return cls.from_toml(interpolate_env(data))

    def server_addr(self) -> str:
        """Address for the HTTP server to listen on."""
        return f"{self.server.host}:{self.server.port}"

    def redis_url(self) -> str:
        """URL used to connect to Redis."""
        return self.redis.url


def parse_config_from_cli_args(argv: list[str] | None = None) -> Config:
    """Load the config named on the command line, or defaults; exit on invalid config."""
    parser = argparse.ArgumentParser(prog="ocypod")
    parser.add_argument("config", nargs="?", type=Path, help="Path to configuration file")
    opts = parser.parse_args(argv)

    if opts.config is not None:
        try:
            conf = Config.from_file(opts.config)
        except ConfigError as exc:
            print(f"Failed to parse config file {opts.config}: {exc}", file=sys.stderr)
            sys.exit(1)
    else:
        log.warning("No config file specified, using default config")
        conf = Config()

    timeout = conf.server.shutdown_timeout
    if timeout is not None and timeout.seconds > MAX_SHUTDOWN_TIMEOUT:
        print(f"Maximum shutdown_timeout is {MAX_SHUTDOWN_TIMEOUT} seconds", file=sys.stderr)
        sys.exit(1)

    return conf