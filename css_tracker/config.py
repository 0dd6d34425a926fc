from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Ustawienia środowiska uruchomieniowego css-tracker."""

    model_config = ConfigDict(env_file=".env", env_prefix="CSS_TRACKER_", extra="ignore")

    # Logowanie
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # Pusty = brak pliku logów, tylko stderr

    # Manifest projektu z konfiguracją trackera
    MANIFEST_NAME: str = "package.json"
    CONFIG_KEY: str = "cssTracker"

    # Przeszukiwanie katalogów
    SCAN_IGNORED_DIRS: str = ".git,node_modules"  # Nazwy katalogów rozdzielone przecinkami
    FILE_ENCODING: str = "utf-8"

    @property
    def ignored_dirs(self) -> frozenset:
        return frozenset(
            part.strip() for part in self.SCAN_IGNORED_DIRS.split(",") if part.strip()
        )


SETTINGS = Settings()
