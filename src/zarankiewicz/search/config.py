"""Search configuration."""

from dotenv import find_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv(usecwd=True) or None


class SearchConfig(BaseSettings):
    """Configuration settings for the counter-example search."""

    deterministic: bool = True
    """Whether result sets are kept sorted (reproducible output, a bit slower). Default: True."""

    distance_map_path: str = "distance_map.json"
    """Where the distance map snapshot is read from, and written to if absent."""

    queue_host: str = "127.0.0.1"
    """Host of the work queue service."""

    queue_port: int = 5701
    """Port of the work queue service."""

    queue_name: str = "to_check"
    """Name of the queue that candidate words are published to."""

    poll_timeout: int = Field(default=3, gt=0)
    """Seconds a verifier waits for a word before treating the queue as failed. Default: 3."""

    publish_timeout: float = 10.0
    """Seconds to wait for the queue service to accept a word. Default: 10."""

    max_workers: int | None = None
    """Maximum number of worker processes in local mode. If None (default), CPU count - 1."""

    report_interval: int = Field(default=10_000, gt=0)
    """Interval (in number of candidates) at which to report progress. Default: 10000."""

    log_dir: str = "logs"
    """Directory that per-run log files are written under."""

    seed_word: str | None = None
    """Serialized word for the generator to extend. If None (default), the base letter alone."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="forbid",
    )


config = SearchConfig()
