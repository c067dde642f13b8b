"""Default configuration parameters for the toy robot service."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StoreParams:
    """SQLite store parameters."""
    db_path: str = ".db/robot.sqlite3"
    history_limit: int = 50                          # Max history rows returned


@dataclass(frozen=True)
class ServerParams:
    """HTTP server parameters."""
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: tuple[str, ...] = field(
        default=("http://localhost:4200", "http://localhost:3000")
    )


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class ClientParams:
    """Console client parameters."""
    base_url: str = "http://localhost:3000/api/robot"
    timeout_seconds: float = 5.0


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""
    store: StoreParams
    server: ServerParams
    logging: LoggingParams
    client: ClientParams


def get_default_config() -> AppConfig:
    """Get the default configuration instance."""
    return AppConfig(
        store=StoreParams(),
        server=ServerParams(),
        logging=LoggingParams(),
        client=ClientParams(),
    )
