from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError

DEFAULT_TIMEOUTS: Dict[str, Optional[float]] = {
    "download": 300.0,
    "install": 600.0,
    "register": 120.0,
    "uninstall": 120.0,
    "probe": 30.0,
}


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def strict_exit_codes(self) -> bool:
        return bool(self.raw.get("strict_exit_codes", True))

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    @property
    def temp_dir(self) -> Optional[str]:
        value = self.raw.get("temp_dir")
        return str(value) if value else None

    @property
    def uninstall_settle_seconds(self) -> float:
        return float(self.raw.get("uninstall_settle_seconds", 2))

    @property
    def target_overrides(self) -> Dict[str, Any]:
        return dict(self.raw.get("targets") or {})

    def timeout(self, name: str) -> Optional[float]:
        """Timeout in seconds for one kind of external call; None waits forever."""

        timeouts = self.raw.get("timeouts") or {}
        value = timeouts.get(name, DEFAULT_TIMEOUTS.get(name))
        if value is None:
            return None
        return float(value)

    def with_overrides(self, **values: Any) -> "InstallerConfig":
        """Return a copy where non-None keyword values replace top-level keys."""

        raw = dict(self.raw)
        raw.update({k: v for k, v in values.items() if v is not None})
        return InstallerConfig(raw=raw)


def _validate(raw: Dict[str, Any]) -> None:
    for flag in ("strict_exit_codes", "dry_run"):
        if flag in raw and not isinstance(raw[flag], bool):
            raise ConfigError(f"{flag} must be true or false, got {raw[flag]!r}")

    timeouts = raw.get("timeouts")
    if timeouts is not None:
        if not isinstance(timeouts, dict):
            raise ConfigError("timeouts must be a mapping")
        for name, value in timeouts.items():
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigError(f"timeouts.{name} must be a positive number or null")

    targets = raw.get("targets")
    if targets is not None and not isinstance(targets, dict):
        raise ConfigError("targets must be a mapping")

    settle = raw.get("uninstall_settle_seconds")
    if settle is not None and (isinstance(settle, bool) or not isinstance(settle, (int, float)) or settle < 0):
        raise ConfigError("uninstall_settle_seconds must be a non-negative number")


def load_config(path: Optional[str]) -> InstallerConfig:
    """Load installer settings from YAML; no path means built-in defaults."""

    if not path:
        return InstallerConfig()

    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {path}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("installer config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ConfigError("PyYAML is required to read the installer config") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError("installer config must contain a mapping/object")

    _validate(raw)
    return InstallerConfig(raw=raw)
