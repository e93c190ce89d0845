"""
Tests for the command-line entry point.
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

import cli
from gasless_bridge.config import Settings
from gasless_bridge.core.errors import PollTimeout, UnsupportedAccountKind
from gasless_bridge.core.flow import FlowOutcome


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda level=None: None)


class TestParser:
    def test_bridge_flags_map_to_settings_fields(self):
        args = cli.build_parser().parse_args(
            ["bridge", "--amount", "0.01", "--origin-chain", "10", "--dry-run", "--max-attempts", "3"]
        )

        assert args.bridge_amount_eth == Decimal("0.01")
        assert args.origin_chain_id == 10
        assert args.dry_run is True
        assert args.poll_max_attempts == 3

    def test_overrides_copy_settings(self):
        base = Settings(dry_run=False, poll_max_attempts=60)
        args = cli.build_parser().parse_args(["bridge", "--dry-run", "--max-attempts", "2"])

        cfg = cli._apply_overrides(base, args)

        assert cfg.dry_run is True
        assert cfg.poll_max_attempts == 2
        assert base.dry_run is False

    def test_rejects_non_positive_amount(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["bridge", "--amount", "0"])

    def test_rejects_amount_beyond_uint256_wei(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["bridge", "--amount", "1e80"])

    @pytest.mark.parametrize("value", ["nan", "inf"])
    def test_rejects_non_finite_amount(self, value):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["bridge", "--amount", value])

    @pytest.mark.parametrize("command", [["bridge"], ["status", "R1"]])
    @pytest.mark.parametrize("attempts", ["0", "-5"])
    def test_rejects_non_positive_max_attempts(self, command, attempts):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([*command, "--max-attempts", attempts])

    @pytest.mark.parametrize("command", [["bridge"], ["status", "R1"]])
    @pytest.mark.parametrize("interval", ["0", "-1", "nan"])
    def test_rejects_non_positive_poll_interval(self, command, interval):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([*command, "--poll-interval", interval])

    def test_rejects_bad_address(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["check-delegation", "not-an-address"])


@pytest.mark.asyncio
async def test_no_command_prints_help(capsys):
    assert await cli.main([]) == 0
    assert "bridge" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_bridge_success_exits_zero(monkeypatch):
    bridge = AsyncMock(return_value=FlowOutcome.COMPLETED)
    monkeypatch.setattr(cli, "cli_bridge", bridge)

    assert await cli.main(["bridge", "--dry-run"]) == 0
    assert bridge.await_args.args[0].dry_run is True


@pytest.mark.asyncio
async def test_flow_error_exits_one(monkeypatch, capsys):
    monkeypatch.setattr(
        cli, "cli_bridge", AsyncMock(side_effect=UnsupportedAccountKind("0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"))
    )

    assert await cli.main(["bridge"]) == 1
    assert "❌ Error:" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_zero_poll_budget_never_reaches_the_poller(monkeypatch):
    status = AsyncMock()
    monkeypatch.setattr(cli, "cli_status", status)

    with pytest.raises(SystemExit) as exc_info:
        await cli.main(["status", "R1", "--max-attempts", "0"])

    assert exc_info.value.code == 2
    status.assert_not_awaited()


@pytest.mark.asyncio
async def test_status_timeout_points_at_manual_check(monkeypatch, capsys):
    monkeypatch.setattr(cli, "cli_status", AsyncMock(side_effect=PollTimeout("R1", 2)))

    assert await cli.main(["status", "R1", "--max-attempts", "2"]) == 1
    assert "status R1" in capsys.readouterr().err
