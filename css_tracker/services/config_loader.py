"""
Moduł: config_loader - odczyt konfiguracji trackera z manifestu projektu.

Konfiguracja znajduje się pod kluczem ``cssTracker`` w ``package.json``.
Kanoniczny schemat blacklisty:
- ``cssPaths`` - arkusze pomijane przy nieużywanych definicjach i duplikatach
- ``moveCssPaths`` - arkusze pomijane przy sugestiach przeniesienia
  (oraz dodatkowo przy nieużywanych definicjach)
- ``frontPaths`` - pliki front-end pomijane we wszystkich etapach
- ``duplicateCssPaths`` - arkusze pomijane tylko przy duplikatach
- ``cssClasses`` - nazwy klas pomijane wszędzie

Historyczne nazwy pól są akceptowane jako aliasy wejściowe:
``css`` -> ``cssPaths``, ``front`` -> ``frontPaths``,
``notUsedCss`` -> ``moveCssPaths``, ``duplicateCss`` -> ``duplicateCssPaths``.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from css_tracker.config import SETTINGS
from css_tracker.core.analyzer import AnalysisOptions
from css_tracker.core.blacklist import Blacklist
from css_tracker.core.errors import ConfigurationError
from css_tracker.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_EXCLUDED_PATHS = ["./node_modules", ".public", "./.cache", "./build"]
TRACK_SCRIPT_NAME = "track-css"
TRACK_SCRIPT_COMMAND = "css-tracker"


class BlacklistConfig(BaseModel):
    """Sekcja ``blacklist`` konfiguracji."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    css_paths: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("cssPaths", "css"),
        serialization_alias="cssPaths",
    )
    move_css_paths: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("moveCssPaths", "notUsedCss"),
        serialization_alias="moveCssPaths",
    )
    front_paths: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("frontPaths", "front"),
        serialization_alias="frontPaths",
    )
    duplicate_css_paths: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("duplicateCssPaths", "duplicateCss"),
        serialization_alias="duplicateCssPaths",
    )
    css_classes: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("cssClasses"),
        serialization_alias="cssClasses",
    )

    def to_blacklist(self, root: Union[str, Path]) -> Blacklist:
        return Blacklist.build(
            root,
            css_paths=self.css_paths,
            move_paths=self.move_css_paths,
            front_paths=self.front_paths,
            duplicate_paths=self.duplicate_css_paths,
            classes=self.css_classes,
        )


class TrackerConfig(BaseModel):
    """Konfiguracja trackera zapisana w manifeście projektu."""

    model_config = ConfigDict(populate_by_name=True)

    check_declarations: bool = Field(default=True, alias="checkDeclarations")
    check_definition_paths: bool = Field(default=True, alias="checkDefinitionPaths")
    check_definitions: bool = Field(default=True, alias="checkDefinitions")
    list_expressions: bool = Field(default=True, alias="listExpressions")
    duplicate_definitions: bool = Field(default=True, alias="duplicateDefinitions")
    css_files: List[str] = Field(default_factory=lambda: [".css", ".scss"], alias="cssFiles")
    front_files: List[str] = Field(
        default_factory=lambda: [".tsx", ".jsx", ".html"], alias="frontFiles"
    )
    output_log: str = Field(default="./logs.txt", alias="outputLog")
    blacklist: BlacklistConfig = Field(default_factory=BlacklistConfig)

    def analysis_options(self) -> AnalysisOptions:
        """Mapowanie przełączników konfiguracji na kategorie wyników."""
        return AnalysisOptions(
            unused_definitions=self.check_declarations,
            relocation_suggestions=self.check_definition_paths,
            missing_definitions=self.check_definitions,
            expressions=self.list_expressions,
            duplicate_definitions=self.duplicate_definitions,
        )


def default_config_block() -> Dict[str, Any]:
    """Domyślny blok ``cssTracker`` dopisywany do manifestu."""
    return {
        "blacklist": {
            "cssPaths": [],
            "moveCssPaths": list(DEFAULT_EXCLUDED_PATHS),
            "frontPaths": list(DEFAULT_EXCLUDED_PATHS),
            "duplicateCssPaths": [],
            "cssClasses": [],
        },
        "frontFiles": [".tsx", ".jsx", ".html"],
        "cssFiles": [".css", ".scss"],
        "outputLog": "./logs.txt",
    }


def _read_manifest(manifest_path: Path) -> Dict[str, Any]:
    if not manifest_path.is_file():
        raise ConfigurationError(f"Manifest not found: {manifest_path}")
    try:
        data = json.loads(manifest_path.read_text(encoding=SETTINGS.FILE_ENCODING))
    except UnicodeDecodeError as exc:
        raise ConfigurationError(
            f"Cannot decode {manifest_path} as {SETTINGS.FILE_ENCODING}: {exc.reason}"
        ) from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in {manifest_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Manifest {manifest_path} must contain a JSON object")
    return data


def parse_config(raw: Any) -> TrackerConfig:
    """
    Waliduje surowy słownik konfiguracji.

    Raises:
        ConfigurationError: Jeśli konfiguracja nie przechodzi walidacji
    """
    if not isinstance(raw, dict):
        raise ConfigurationError("Tracker configuration must be a JSON object")
    try:
        return TrackerConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid tracker configuration: {exc}") from exc


def load_config(
    root: Union[str, Path], manifest: Optional[Union[str, Path]] = None
) -> TrackerConfig:
    """
    Wczytuje konfigurację trackera z manifestu projektu.

    Args:
        root: Katalog projektu
        manifest: Ścieżka manifestu (domyślnie ``<root>/package.json``)

    Raises:
        ConfigurationError: Brak manifestu, niepoprawny JSON, brak klucza
            konfiguracji lub błąd walidacji
    """
    manifest_path = Path(manifest) if manifest else Path(root) / SETTINGS.MANIFEST_NAME
    data = _read_manifest(manifest_path)
    if SETTINGS.CONFIG_KEY not in data:
        raise ConfigurationError(
            f"Missing '{SETTINGS.CONFIG_KEY}' section in {manifest_path} "
            "(run with --init to create it)"
        )
    config = parse_config(data[SETTINGS.CONFIG_KEY])
    logger.debug(f"Wczytano konfigurację z {manifest_path}")
    return config


def init_manifest(
    root: Union[str, Path], manifest: Optional[Union[str, Path]] = None
) -> bool:
    """
    Dopisuje domyślną konfigurację i skrypt ``track-css`` do manifestu.

    Istniejący blok konfiguracji nie jest nadpisywany.

    Returns:
        True jeśli dodano blok konfiguracji, False jeśli już istniał
    """
    manifest_path = Path(manifest) if manifest else Path(root) / SETTINGS.MANIFEST_NAME
    data = _read_manifest(manifest_path)

    scripts = data.setdefault("scripts", {})
    if not isinstance(scripts, dict):
        raise ConfigurationError(f"'scripts' in {manifest_path} must be a JSON object")
    scripts[TRACK_SCRIPT_NAME] = TRACK_SCRIPT_COMMAND

    created = SETTINGS.CONFIG_KEY not in data
    if created:
        data[SETTINGS.CONFIG_KEY] = default_config_block()
        logger.info(f"Dodano sekcję '{SETTINGS.CONFIG_KEY}' do {manifest_path}")
    else:
        logger.info(f"Sekcja '{SETTINGS.CONFIG_KEY}' już istnieje w {manifest_path}")

    manifest_path.write_text(
        json.dumps(data, indent=2) + "\n", encoding=SETTINGS.FILE_ENCODING
    )
    return created
