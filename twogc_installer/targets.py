from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import ConfigError
from .models import InstallationChoice

INSTALLER_KINDS = {"msi", "copy"}
PROBE_KINDS = {"service", "path"}


@dataclass(frozen=True)
class TargetDescriptor:
    """Everything that differs between the installable services.

    installer_kind:
    - msi: run ``msiexec /i <artifact> /qn``
    - copy: the artifact is the service binary; place it at binary_path

    probe_kind:
    - service: ask the service manager about service_name
    - path: check whether binary_path exists
    """

    key: str
    display_name: str
    download_url: str
    artifact_prefix: str
    artifact_suffix: str
    installer_kind: str
    probe_kind: str
    service_name: str
    binary_path: str
    register_args: Tuple[str, ...] = ("service", "install")
    uninstall_args: Tuple[str, ...] = ("service", "uninstall")

    def install_argv(self, artifact_path: str) -> list[str]:
        if self.installer_kind == "msi":
            return ["msiexec", "/i", artifact_path, "/qn"]
        return []

    def register_argv(self, token: str) -> list[str]:
        return [self.binary_path, *self.register_args, token]

    def uninstall_argv(self) -> Tuple[str, ...]:
        return (self.binary_path, *self.uninstall_args)


TUNNEL_AGENT = TargetDescriptor(
    key="tunnel_agent",
    display_name="Cloudflared",
    download_url="https://github.com/cloudflare/cloudflared/releases/latest/download/cloudflared-windows-amd64.msi",
    artifact_prefix="cloudflared",
    artifact_suffix=".msi",
    installer_kind="msi",
    probe_kind="service",
    service_name="Cloudflared",
    binary_path="C:\\Program Files (x86)\\cloudflared\\cloudflared.exe",
)

BRIDGE_CLIENT = TargetDescriptor(
    key="bridge_client",
    display_name="CloudBridge Client",
    download_url="https://github.com/mlanies/cloudbridge-client/releases/latest/download/cloudbridge-client-windows-amd64.exe",
    artifact_prefix="cloudbridge-client",
    artifact_suffix=".exe",
    installer_kind="copy",
    probe_kind="path",
    service_name="CloudBridgeClient",
    binary_path="C:\\Program Files\\CloudBridgeClient\\cloudbridge-client.exe",
)

TARGETS: Dict[InstallationChoice, TargetDescriptor] = {
    InstallationChoice.TUNNEL_AGENT: TUNNEL_AGENT,
    InstallationChoice.BRIDGE_CLIENT: BRIDGE_CLIENT,
}

_TUPLE_FIELDS = {"register_args", "uninstall_args"}


def apply_overrides(target: TargetDescriptor, overrides: Optional[Mapping[str, Any]]) -> TargetDescriptor:
    """Return a copy of target with fields replaced from a config mapping."""

    if not overrides:
        return target
    if not isinstance(overrides, Mapping):
        raise ConfigError(f"targets.{target.key} must be a mapping")

    known = {f.name for f in dataclasses.fields(TargetDescriptor)} - {"key"}
    changes: Dict[str, Any] = {}
    for name, value in overrides.items():
        if name not in known:
            raise ConfigError(f"Unknown field targets.{target.key}.{name}")
        if name in _TUPLE_FIELDS:
            if isinstance(value, str) or not isinstance(value, (list, tuple)):
                raise ConfigError(f"targets.{target.key}.{name} must be a list of strings")
            value = tuple(str(v) for v in value)
        else:
            value = str(value)
        changes[name] = value

    updated = dataclasses.replace(target, **changes)
    if updated.installer_kind not in INSTALLER_KINDS:
        raise ConfigError(f"targets.{target.key}.installer_kind must be one of {sorted(INSTALLER_KINDS)}")
    if updated.probe_kind not in PROBE_KINDS:
        raise ConfigError(f"targets.{target.key}.probe_kind must be one of {sorted(PROBE_KINDS)}")
    return updated


def resolve_target(
    choice: InstallationChoice,
    overrides: Optional[Mapping[str, Any]] = None,
) -> TargetDescriptor:
    target = TARGETS[choice]
    return apply_overrides(target, (overrides or {}).get(target.key))
