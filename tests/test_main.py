"""Tests for the command line entry points."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from rtt_commute import cli, main
from rtt_commute.domain.models import Service, ServiceCandidate, StopCall

CREDENTIAL_VARS = ("RTT_USERNAME", "RTT_PASSWORD", "ORIGIN_CRS", "TRANSFER_ORIGIN_CRS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: object) -> None:
    """Keep the host environment and any .env file out of the tests."""
    for name in CREDENTIAL_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)  # type: ignore[arg-type]


class TestTrackerEntryPoint:
    """Tests for rtt_commute.main."""

    @pytest.mark.asyncio
    async def test_missing_credentials_exit_2_without_network(self) -> None:
        """Given no credentials, when running, then it exits with 2 and opens no session."""
        with patch("rtt_commute.main.aiohttp.ClientSession") as session_cls:
            with pytest.raises(SystemExit) as exc_info:
                await main.main(["status"])

        assert exc_info.value.code == 2
        session_cls.assert_not_called()

    @pytest.mark.asyncio
    async def test_job_without_configuration_exits_2(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Given only a booked service, when running transfers, then it exits with 2."""
        monkeypatch.setenv("RTT_USERNAME", "rttapi_user")
        monkeypatch.setenv("RTT_PASSWORD", "secret")
        monkeypatch.setenv("ORIGIN_CRS", "RDG")
        monkeypatch.setenv("DESTINATION_CRS", "PAD")
        monkeypatch.setenv("BOOKED_DEPARTURE_HHMM", "0744")

        with pytest.raises(SystemExit) as exc_info:
            await main.main(["transfers"])

        assert exc_info.value.code == 2

    @pytest.mark.asyncio
    async def test_runs_selected_job(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Given a valid configuration, when running status, then only the status job runs."""
        monkeypatch.setenv("RTT_USERNAME", "rttapi_user")
        monkeypatch.setenv("RTT_PASSWORD", "secret")
        monkeypatch.setenv("ORIGIN_CRS", "RDG")
        monkeypatch.setenv("DESTINATION_CRS", "PAD")
        monkeypatch.setenv("BOOKED_DEPARTURE_HHMM", "0744")
        tracker = AsyncMock()

        with patch("rtt_commute.main.build_tracker", return_value=tracker):
            await main.main(["status"])

        tracker.run_status.assert_awaited_once()
        tracker.run_all.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_run_job_defaults_to_all(self) -> None:
        """Given the all job, when dispatching, then every core runs."""
        tracker = AsyncMock()

        await main.run_job(tracker, "all")

        tracker.run_all.assert_awaited_once()

    def test_rejects_unknown_job(self) -> None:
        """Given an unknown job name, when parsing arguments, then argparse exits."""
        with pytest.raises(SystemExit):
            main._setup_argparse().parse_args(["departures"])


class TestLookupCli:
    """Tests for rtt_commute.cli."""

    def test_format_time(self) -> None:
        """Given HHMM or nothing, when formatting, then HH:MM or a placeholder is shown."""
        assert cli._format_time("0744") == "07:44"
        assert cli._format_time(None) == "--:--"

    @pytest.mark.asyncio
    async def test_search_prints_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Given search hits, when searching with --json, then they are printed as JSON."""
        repository = AsyncMock()
        repository.search.return_value = [
            ServiceCandidate("W1", "0744", run_date=date(2024, 3, 15), operator="GW")
        ]

        with (
            patch("rtt_commute.cli.aiohttp.ClientSession", MagicMock()),
            patch("rtt_commute.cli._build_repository", return_value=repository),
        ):
            await cli.main(
                ["search", "rdg", "pad", "--date", "2024-03-15", "--time", "07:00", "--json"]
            )

        out = capsys.readouterr().out
        assert '"service_uid": "W1"' in out
        assert '"run_date": "2024-03-15"' in out
        repository.search.assert_awaited_once_with("RDG", "PAD", date(2024, 3, 15), "0700")

    @pytest.mark.asyncio
    async def test_service_prints_calls(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Given a service, when showing it, then each call is listed."""
        repository = AsyncMock()
        repository.detail.return_value = Service(
            service_id="W1",
            run_date=date(2024, 3, 15),
            calls=(
                StopCall(location_code="RDG", booked_departure="0744", platform="9"),
                StopCall(location_code="PAD", booked_arrival="0820", is_cancelled=True),
            ),
        )

        with (
            patch("rtt_commute.cli.aiohttp.ClientSession", MagicMock()),
            patch("rtt_commute.cli._build_repository", return_value=repository),
        ):
            await cli.main(["service", "W1", "2024-03-15"])

        out = capsys.readouterr().out
        assert "Service W1 on 2024-03-15" in out
        assert "RDG" in out and "07:44" in out
        assert "cancelled" in out

    @pytest.mark.asyncio
    async def test_errors_exit_1(self) -> None:
        """Given a failing lookup, when running the CLI, then it exits with 1."""
        with (
            patch("rtt_commute.cli.aiohttp.ClientSession", MagicMock()),
            patch("rtt_commute.cli._build_repository", side_effect=RuntimeError("no creds")),
        ):
            with pytest.raises(SystemExit) as exc_info:
                await cli.main(["service", "W1", "2024-03-15"])

        assert exc_info.value.code == 1
