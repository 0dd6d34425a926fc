import json
from pathlib import Path
from typing import Any, Callable, Dict

import pytest


@pytest.fixture(scope="session", autouse=True)
def configure_local_settings() -> Dict[str, Any]:
    """
    Utrzymuje spójne środowisko testowe niezależnie od zmiennych CSS_TRACKER_*
    ustawionych na maszynie deweloperskiej.
    """
    from css_tracker.config import SETTINGS

    overrides = {
        "MANIFEST_NAME": "package.json",
        "CONFIG_KEY": "cssTracker",
        "SCAN_IGNORED_DIRS": ".git",
        "FILE_ENCODING": "utf-8",
    }
    original_values = {attr: getattr(SETTINGS, attr) for attr in overrides}

    for attr, value in overrides.items():
        setattr(SETTINGS, attr, value)

    yield original_values

    for attr, value in original_values.items():
        setattr(SETTINGS, attr, value)


@pytest.fixture
def write_files(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """Zapisuje pliki projektu (ścieżka względna -> treść) w katalogu tymczasowym."""

    def _write(files: Dict[str, str]) -> Path:
        for relative_path, content in files.items():
            target = tmp_path / relative_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[..., Path]:
    """Zapisuje package.json z opcjonalną sekcją cssTracker."""

    def _write(tracker: Any = None, **extra: Any) -> Path:
        data: Dict[str, Any] = {"name": "demo-app", "scripts": {}}
        data.update(extra)
        if tracker is not None:
            data["cssTracker"] = tracker
        manifest = tmp_path / "package.json"
        manifest.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return manifest

    return _write
