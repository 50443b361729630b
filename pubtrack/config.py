"""Configuration management.

``Settings`` is a **metaclass-based singleton**: the first call to
``Settings.load()`` creates the instance; every later call returns
the same object.  Use ``update()`` to change values at runtime, or
``reload()`` to re-read everything from disk.

All user-editable configuration lives in ``.metadata/settings.yaml``.
On first run, missing files are copied from ``.metadata.example/``.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

THEME_SOURCES = ("fixed", "document")


# ---------------------------------------------------------------------------
# Researcher defaults
# ---------------------------------------------------------------------------

@dataclass
class ResearcherDefaults:
    """Header values used when the sheet's header cells are empty."""

    name: str = "Dr. DHIBIN VIKASH K P"
    credentials: str = "B.S., MBBS."
    guide: str = "Dr. SATISH MUTHU"
    guide_credentials: str = ""


# ---------------------------------------------------------------------------
# Singleton metaclass
# ---------------------------------------------------------------------------

class _SettingsMeta(type):
    """Metaclass that enforces a process-wide singleton for *Settings*.

    * First ``Settings(...)`` creates and caches the instance.
    * Later ``Settings(...)`` calls return the cached instance (args ignored).
    """

    _instances: dict[type, Any] = {}

    def __call__(cls, *args: Any, **kwargs: Any) -> Any:
        if cls not in cls._instances:
            cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]


# ---------------------------------------------------------------------------
# Settings dataclass (singleton)
# ---------------------------------------------------------------------------

@dataclass
class Settings(metaclass=_SettingsMeta):
    """Application settings: a singleton with runtime-mutable fields.

    Usage::

        settings = Settings.load()                 # first call → create
        settings = Settings.load()                 # later → same object
        settings.update(workbook_path=Path(...))   # runtime change
        settings = Settings.reload()               # re-read from disk
    """

    workbook_path: Path = Path("RP.xlsx")
    db_path: Path = Path("papers.db")
    metadata_dir: Path = Path(".metadata")
    log_path: Optional[Path] = None
    log_level: str = "INFO"

    # Sheet
    theme_source: str = "fixed"
    target_papers: int = 50

    # Web server
    host: str = "0.0.0.0"
    port: int = 3001

    researcher: ResearcherDefaults = field(default_factory=ResearcherDefaults)

    # ── Runtime helpers ───────────────────────────────────────────────

    def update(self, **kwargs: Any) -> None:
        """Mutate settings fields at runtime.

        >>> Settings.load().update(workbook_path=Path("/tmp/RP.xlsx"))
        """
        for key, value in kwargs.items():
            if not hasattr(self, key):
                raise AttributeError(f"Settings has no field '{key}'")
            setattr(self, key, value)

    @property
    def settings_path(self) -> Path:
        return self.metadata_dir / "settings.yaml"

    # ── Factory / lifecycle ───────────────────────────────────────────

    @classmethod
    def load(cls, base_dir: Optional[Path] = None) -> "Settings":
        """Load or return the singleton Settings instance.

        On first call the singleton is created; subsequent calls return
        the cached instance.  Pass *base_dir* to override the project
        root (defaults to the repository root one level above ``pubtrack/``).
        Relative paths in ``settings.yaml`` are resolved against *base_dir*.
        """
        if cls in _SettingsMeta._instances:
            return _SettingsMeta._instances[cls]  # type: ignore[return-value]

        if base_dir is None:
            base_dir = Path(__file__).resolve().parent.parent

        metadata_dir = base_dir / ".metadata"
        cls._ensure_default_files(base_dir, metadata_dir)

        data = _load_yaml(metadata_dir / "settings.yaml")
        sheet = _section(data, "sheet")
        server = _section(data, "server")
        logging_cfg = _section(data, "logging")

        theme_source = str(sheet.get("theme_source") or "fixed").lower()
        if theme_source not in THEME_SOURCES:
            logger.warning("Unknown theme_source %r, using 'fixed'", theme_source)
            theme_source = "fixed"

        log_file = logging_cfg.get("file")

        return cls(
            workbook_path=_resolve(base_dir, sheet.get("workbook"), "RP.xlsx"),
            db_path=_resolve(base_dir, data.get("db_path"), "papers.db"),
            metadata_dir=metadata_dir,
            log_path=_resolve(base_dir, log_file, "") if log_file else None,
            log_level=str(logging_cfg.get("level") or "INFO").upper(),
            theme_source=theme_source,
            target_papers=_as_int(sheet.get("target_papers"), 50),
            host=str(server.get("host") or "0.0.0.0"),
            port=_as_int(server.get("port"), 3001),
            researcher=_load_researcher(_section(data, "researcher")),
        )

    @classmethod
    def reload(cls, base_dir: Optional[Path] = None) -> "Settings":
        """Discard the current singleton and re-load from disk."""
        cls.reset()
        return cls.load(base_dir)

    @classmethod
    def reset(cls) -> None:
        """Discard the singleton so the next ``load()`` re-creates it."""
        _SettingsMeta._instances.pop(cls, None)

    # ── Private ───────────────────────────────────────────────────────

    @staticmethod
    def _ensure_default_files(base_dir: Path, metadata_dir: Path) -> None:
        """Copy ``.metadata.example/`` templates when real files are missing."""
        metadata_dir.mkdir(parents=True, exist_ok=True)

        example_dir = base_dir / ".metadata.example"
        if not example_dir.exists():
            return

        for example_file in example_dir.iterdir():
            if example_file.is_file():
                target = metadata_dir / example_file.name
                if not target.exists():
                    shutil.copy2(example_file, target)
                    logger.info("Created .metadata/%s from template", example_file.name)


# ---------------------------------------------------------------------------
# YAML loaders
# ---------------------------------------------------------------------------

def _load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML mapping; missing or malformed files give ``{}``."""
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _resolve(base_dir: Path, value: Any, default: str) -> Path:
    path = Path(str(value)) if value else Path(default)
    return path if path.is_absolute() else base_dir / path


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _load_researcher(data: dict[str, Any]) -> ResearcherDefaults:
    defaults = ResearcherDefaults()
    return ResearcherDefaults(
        name=str(data.get("name") or defaults.name),
        credentials=str(data.get("credentials") or defaults.credentials),
        guide=str(data.get("guide") or defaults.guide),
        guide_credentials=str(data.get("guide_credentials") or defaults.guide_credentials),
    )

