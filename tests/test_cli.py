"""Tests for the contract-registry command line."""

from __future__ import annotations

import json
import logging
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from contract_registry.cli import _dispatch, _parse_args, _run, _split_tags, run_cli
from contract_registry.config import RegistrySettings
from contract_registry.models import (
    Contract,
    ContractSearchParams,
    Network,
    PaginatedResponse,
    Publisher,
    RegistryStats,
)
from contract_registry.result import Failure, FailureKind, Ok

# --- Helpers ---------------------------------------------------------------


def _fake_registry() -> MagicMock:
    registry = MagicMock()
    registry.get_contracts = AsyncMock()
    registry.get_contract = AsyncMock()
    registry.get_contract_versions = AsyncMock()
    registry.publish_contract = AsyncMock()
    registry.get_publisher = AsyncMock()
    registry.get_publisher_contracts = AsyncMock()
    registry.get_stats = AsyncMock()
    return registry


def _transport(routes: dict[str, httpx.Response]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return routes.get(request.url.path, httpx.Response(404))

    return httpx.MockTransport(handler)


# --- Argument handling -----------------------------------------------------


class TestSplitTags:
    def test_none(self):
        assert _split_tags(None) == []

    def test_trims_and_drops_empty(self):
        assert _split_tags(" token, sep41 ,,") == ["token", "sep41"]


class TestParseArgs:
    def test_search_defaults(self):
        args = _parse_args(["search", "amm"])
        assert args.command == "search"
        assert args.query == "amm"
        assert args.limit == 10
        assert args.verified_only is False

    def test_global_options_before_command(self):
        args = _parse_args(["--network", "testnet", "--json", "list", "--limit", "5"])
        assert args.network == "testnet"
        assert args.json is True
        assert args.limit == 5

    def test_publish_requires_contract_id(self):
        with pytest.raises(SystemExit):
            _parse_args(["publish", "--name", "x", "--publisher", "G"])


# --- Dispatch --------------------------------------------------------------


class TestDispatch:
    async def test_search_builds_params(self):
        registry = _fake_registry()
        registry.get_contracts.return_value = Ok(MagicMock(spec=PaginatedResponse))
        args = _parse_args(["search", "amm", "--category", "dex", "--verified-only"])
        settings = RegistrySettings(network=Network.TESTNET)

        await _dispatch(args, registry, settings)

        registry.get_contracts.assert_awaited_once_with(
            ContractSearchParams(
                query="amm",
                network=Network.TESTNET,
                verified_only=True,
                category="dex",
                page_size=10,
            )
        )

    async def test_search_without_verified_flag_sends_no_filter(self):
        registry = _fake_registry()
        registry.get_contracts.return_value = Ok(MagicMock(spec=PaginatedResponse))
        args = _parse_args(["search", "amm"])

        await _dispatch(args, registry, RegistrySettings())

        params = registry.get_contracts.await_args[0][0]
        assert params.verified_only is None
        assert params.network is None

    async def test_list_uses_limit_as_page_size(self):
        registry = _fake_registry()
        registry.get_contracts.return_value = Ok(MagicMock(spec=PaginatedResponse))
        args = _parse_args(["list", "--limit", "7"])

        await _dispatch(args, registry, RegistrySettings())

        params = registry.get_contracts.await_args[0][0]
        assert params == ContractSearchParams(page_size=7)

    async def test_publish_defaults_to_mainnet(self):
        registry = _fake_registry()
        registry.publish_contract.return_value = Ok(MagicMock(spec=Contract))
        args = _parse_args(
            [
                "publish",
                "--contract-id",
                "CABC",
                "--name",
                "Token",
                "--publisher",
                "GXYZ",
                "--tags",
                "token, sep41",
            ]
        )

        await _dispatch(args, registry, RegistrySettings())

        request = registry.publish_contract.await_args[0][0]
        assert request.network is Network.MAINNET
        assert request.tags == ["token", "sep41"]
        assert request.description is None
        assert request.publisher_address == "GXYZ"

    async def test_publish_uses_configured_network(self):
        registry = _fake_registry()
        registry.publish_contract.return_value = Ok(MagicMock(spec=Contract))
        args = _parse_args(
            ["publish", "--contract-id", "C", "--name", "N", "--publisher", "G"]
        )

        await _dispatch(args, registry, RegistrySettings(network=Network.FUTURENET))

        assert registry.publish_contract.await_args[0][0].network is Network.FUTURENET

    async def test_publisher_with_contracts(self):
        registry = _fake_registry()
        registry.get_publisher.return_value = Ok(MagicMock(spec=Publisher))
        registry.get_publisher_contracts.return_value = Ok([])
        args = _parse_args(["publisher", "pub-1", "--contracts"])

        outcomes = await _dispatch(args, registry, RegistrySettings())

        assert len(outcomes) == 2
        registry.get_publisher_contracts.assert_awaited_once_with("pub-1")

    async def test_publisher_contracts_skipped_when_lookup_fails(self):
        registry = _fake_registry()
        registry.get_publisher.return_value = Failure(
            kind=FailureKind.CLIENT_ERROR, message="Failed to fetch publisher", status_code=404
        )
        args = _parse_args(["publisher", "pub-1", "--contracts"])

        outcomes = await _dispatch(args, registry, RegistrySettings())

        assert len(outcomes) == 1
        registry.get_publisher_contracts.assert_not_awaited()

    async def test_stats(self):
        registry = _fake_registry()
        registry.get_stats.return_value = Ok(RegistryStats(1, 0, 1))
        args = _parse_args(["stats"])

        outcomes = await _dispatch(args, registry, RegistrySettings())

        assert outcomes[0][0].value.total_contracts == 1


# --- End to end over a mock transport ---------------------------------------


class TestRun:
    async def test_info_prints_text(self, capsys, contract_json):
        transport = _transport(
            {"/api/contracts/abc": httpx.Response(200, json=contract_json)}
        )
        args = _parse_args(["info", "abc"])

        code = await _run(args, RegistrySettings(api_url="http://registry.test"), transport)

        out = capsys.readouterr().out
        assert code == 0
        assert "Soroswap Router [mainnet] (verified)" in out
        assert contract_json["contract_id"] in out
        assert "tags:        amm, router" in out

    async def test_json_output_matches_payload(self, capsys, contract_json):
        transport = _transport(
            {"/api/contracts/abc": httpx.Response(200, json=contract_json)}
        )
        args = _parse_args(["--json", "info", "abc"])

        code = await _run(args, RegistrySettings(api_url="http://registry.test"), transport)

        assert code == 0
        assert json.loads(capsys.readouterr().out) == contract_json

    async def test_stats_text(self, capsys):
        payload = {"total_contracts": 10, "verified_contracts": 4, "total_publishers": 3}
        transport = _transport({"/api/stats": httpx.Response(200, json=payload)})

        code = await _run(_parse_args(["stats"]), RegistrySettings(), transport)

        out = capsys.readouterr().out
        assert code == 0
        assert "Contracts:  10" in out
        assert "Verified:   4" in out
        assert "Publishers: 3" in out

    async def test_list_page_header(self, capsys, contract_json):
        page = {"items": [contract_json], "total": 41, "page": 1, "page_size": 1, "total_pages": 41}
        transport = _transport({"/api/contracts": httpx.Response(200, json=page)})

        code = await _run(_parse_args(["list", "--limit", "1"]), RegistrySettings(), transport)

        assert code == 0
        assert "Page 1/41 (1 of 41 contracts)" in capsys.readouterr().out

    async def test_failure_prints_to_stderr_and_exits_1(self, capsys):
        transport = _transport({})

        code = await _run(_parse_args(["versions", "missing"]), RegistrySettings(), transport)

        captured = capsys.readouterr()
        assert code == 1
        assert captured.out == ""
        assert "error: Failed to fetch contract versions" in captured.err


class TestRunCli:
    def test_invalid_network_flag_exits_2(self, capsys, monkeypatch):
        monkeypatch.delenv("SOROBAN_NETWORK", raising=False)

        code = run_cli(["--network", "devnet", "stats"])

        assert code == 2
        assert "Unknown network 'devnet'" in capsys.readouterr().err

    def test_flags_override_environment(self, monkeypatch):
        monkeypatch.setenv("SOROBAN_REGISTRY_API_URL", "http://from-env.test")
        monkeypatch.setenv("SOROBAN_NETWORK", "mainnet")
        fake_run = AsyncMock(return_value=0)

        with patch("contract_registry.cli._run", fake_run):
            code = run_cli(["--api-url", "http://from-flag.test", "--network", "testnet", "stats"])

        assert code == 0
        settings = fake_run.await_args[0][1]
        assert settings.api_url == "http://from-flag.test"
        assert settings.network is Network.TESTNET

    def test_environment_used_without_flags(self, monkeypatch):
        monkeypatch.setenv("SOROBAN_REGISTRY_API_URL", "http://from-env.test")
        monkeypatch.delenv("SOROBAN_NETWORK", raising=False)
        fake_run = AsyncMock(return_value=1)

        with patch("contract_registry.cli._run", fake_run):
            code = run_cli(["stats"])

        assert code == 1
        assert fake_run.await_args[0][1].api_url == "http://from-env.test"

    @pytest.mark.parametrize(
        ("argv", "level"),
        [
            (["stats"], logging.ERROR),
            (["-v", "stats"], logging.DEBUG),
        ],
    )
    def test_log_level_follows_verbose_flag(self, monkeypatch, argv, level):
        monkeypatch.delenv("SOROBAN_NETWORK", raising=False)

        with (
            patch("contract_registry.cli._run", AsyncMock(return_value=0)),
            patch("contract_registry.cli.logging.basicConfig") as basic_config,
        ):
            run_cli(argv)

        assert basic_config.call_args.kwargs["level"] == level
