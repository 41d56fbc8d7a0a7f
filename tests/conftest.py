"""
Pytest configuration and shared fixtures for installer tests.
"""

import pytest

from tests.fakes import FakeFetch, FakeRunner, make_operator
from twogc_installer.config import InstallerConfig
from twogc_installer.context import InstallCtx
from twogc_installer.targets import BRIDGE_CLIENT, TUNNEL_AGENT, apply_overrides


@pytest.fixture
def install_root(tmp_path):
    """Stand-in for C:\\Program Files."""
    return tmp_path / "Program Files"


@pytest.fixture
def temp_dir(tmp_path):
    d = tmp_path / "tmp"
    d.mkdir()
    return d


@pytest.fixture
def config(install_root, temp_dir):
    return InstallerConfig(
        raw={
            "temp_dir": str(temp_dir),
            "uninstall_settle_seconds": 0,
            "targets": {
                "tunnel_agent": {"binary_path": str(install_root / "cloudflared" / "cloudflared.exe")},
                "bridge_client": {"binary_path": str(install_root / "CloudBridgeClient" / "cloudbridge-client.exe")},
            },
        }
    )


@pytest.fixture
def tunnel_target(config):
    return apply_overrides(TUNNEL_AGENT, config.target_overrides["tunnel_agent"])


@pytest.fixture
def bridge_target(config):
    return apply_overrides(BRIDGE_CLIENT, config.target_overrides["bridge_client"])


@pytest.fixture
def make_ctx(config):
    """Build an InstallCtx around fakes; returns (ctx, scripted_input, output)."""

    def factory(target, *answers, runner=None, fetch=None, token="abc123", cfg=None, assume_yes=False):
        operator, scripted, output = make_operator(*answers, assume_yes=assume_yes)
        ctx = InstallCtx(
            cfg=cfg or config,
            target=target,
            token=token,
            operator=operator,
            runner=runner if runner is not None else FakeRunner(),
            fetch=fetch if fetch is not None else FakeFetch(),
            sleep=lambda seconds: None,
        )
        return ctx, scripted, output

    return factory
