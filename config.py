from pydantic import PrivateAttr
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Document & Subscription Manager"
    debug: bool = False
    log_level: str = "INFO"

    # Local cache of backend collections and client-side history
    database_url: str = "sqlite+aiosqlite:///./doc_manager.db"
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    # Upstream REST backend
    backend_api_url: str = "http://localhost:5050/api"
    backend_api_key: str = ""
    backend_timeout_seconds: float = 30.0

    auth_enabled: bool = True
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expiry_hours: int = 12

    renewal_window_days: int = 7
    expiry_window_days: int = 30

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    _is_sqlite: bool = PrivateAttr(default=False)
    _is_postgresql: bool = PrivateAttr(default=False)

    def model_post_init(self, __context: object) -> None:
        _scheme = self.database_url.split(":")[0].lower()
        object.__setattr__(self, "_is_sqlite", "sqlite" in _scheme)
        object.__setattr__(self, "_is_postgresql", "postgresql" in _scheme)

    @property
    def is_sqlite(self) -> bool:
        return self._is_sqlite

    @property
    def is_postgresql(self) -> bool:
        return self._is_postgresql


settings = Settings()
