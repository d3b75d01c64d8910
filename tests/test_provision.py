from unittest.mock import MagicMock, patch

import pytest

from prbench.errors import ProvisioningError
from prbench.runner.provision import (
    DEFAULT_PROVISION_COMMANDS,
    REQUIRED_TOOLS,
    check_tools,
    provision,
)


def test_default_commands_install_harness_dependencies():
    flat = [" ".join(cmd) for cmd in DEFAULT_PROVISION_COMMANDS]
    assert "sudo apt-get install -y valgrind" in flat
    assert "cargo install cargo-criterion" in flat
    assert "sudo apt-get install -y ocaml" in flat


def test_provision_runs_commands_in_order(make_completed):
    with patch(
        "prbench.runner.provision.subprocess.run",
        side_effect=lambda cmd, **kw: make_completed(cmd),
    ) as mock_run:
        provision()

    assert [c.args[0] for c in mock_run.call_args_list] == [
        list(cmd) for cmd in DEFAULT_PROVISION_COMMANDS
    ]


def test_provision_stops_at_first_failure():
    failed = MagicMock(returncode=100, stderr="E: Unable to locate package", stdout="")
    with patch("prbench.runner.provision.subprocess.run", return_value=failed) as mock_run:
        with pytest.raises(ProvisioningError, match="Unable to locate package"):
            provision()

    assert mock_run.call_count == 1


def test_provision_missing_executable():
    with patch("prbench.runner.provision.subprocess.run", side_effect=FileNotFoundError("sudo")):
        with pytest.raises(ProvisioningError, match="failed"):
            provision((("sudo", "true"),))


def test_check_tools_all_present():
    with patch("prbench.runner.provision.shutil.which", side_effect=lambda t: f"/usr/bin/{t}"):
        info = check_tools()

    assert set(info) == set(REQUIRED_TOOLS)
    assert info["valgrind"] == "/usr/bin/valgrind"


def test_check_tools_missing():
    with patch(
        "prbench.runner.provision.shutil.which",
        side_effect=lambda t: None if t == "cargo-criterion" else f"/usr/bin/{t}",
    ):
        with pytest.raises(ProvisioningError, match="cargo-criterion"):
            check_tools()


def test_provision_unstartable_command():
    with patch(
        "prbench.runner.provision.subprocess.run",
        side_effect=PermissionError(13, "Permission denied", "sudo"),
    ):
        with pytest.raises(ProvisioningError, match="Permission denied"):
            provision((("sudo", "true"),))
