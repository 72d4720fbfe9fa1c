"""Configuration handling for smtplike servers."""

from dataclasses import dataclass
from pathlib import Path
import yaml


@dataclass
class Config:
    """Configuration settings for a protocol server.

    Attributes:
        host: Address to listen on.
        port: TCP port to listen on.
        backlog: Listen queue length.
        encoding: Text encoding of commands and replies.
    """

    host: str = "0.0.0.0"
    port: int = 1234
    backlog: int = 16
    encoding: str = "utf-8"


def load_config(path: str | Path) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Config object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    server = data.get("server", {})
    protocol = data.get("protocol", {})

    return Config(
        host=server.get("host", Config.host),
        port=server.get("port", Config.port),
        backlog=server.get("backlog", Config.backlog),
        encoding=protocol.get("encoding", Config.encoding),
    )
