from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    BACKEND_ENDPOINT: str = "http://localhost:8080"
    BACKEND_API_PATH: str = "/api/v1"
    BACKEND_USER: str = ""
    BACKEND_PASSWORD: str = ""
    BACKEND_TIMEOUT: int = 60

    DEBUG_LOGFOLDER: str | None = None
    DEBUG_SILENT: bool = False

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def backend_base_url(self) -> str:
        base = str(self.BACKEND_ENDPOINT or "").strip().rstrip("/")
        path = str(self.BACKEND_API_PATH or "").strip().strip("/")
        if not path:
            return base
        return f"{base}/{path}"

    @property
    def backend_credentials(self) -> tuple[str, str] | None:
        user = str(self.BACKEND_USER or "").strip()
        if not user:
            return None
        return user, self.BACKEND_PASSWORD

    @property
    def debug_log_folder(self) -> Path | None:
        folder = str(self.DEBUG_LOGFOLDER or "").strip()
        if not folder:
            return None
        return Path(folder).expanduser()


settings = Settings()
