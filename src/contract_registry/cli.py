"""Command-line front end for the contract registry."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from typing import Any

import httpx

from contract_registry import __version__
from contract_registry.config import RegistrySettings, load_settings, resolve_network
from contract_registry.errors import ConfigError
from contract_registry.models import (
    Contract,
    ContractSearchParams,
    ContractVersion,
    Network,
    PaginatedResponse,
    Publisher,
    PublishRequest,
    RegistryStats,
)
from contract_registry.registry.base import ContractRegistryPort
from contract_registry.registry.client import RegistryClient
from contract_registry.result import Failure, Result

logger = logging.getLogger(__name__)

_EXIT_OK = 0
_EXIT_FAILURE = 1
_EXIT_USAGE = 2


# ─── Text rendering ───────────────────────────────────────────


def _format_contract(contract: Contract) -> str:
    badge = "verified" if contract.is_verified else "unverified"
    lines = [
        f"{contract.name} [{contract.network}] ({badge})",
        f"  id:          {contract.id}",
        f"  contract_id: {contract.contract_id}",
        f"  wasm_hash:   {contract.wasm_hash}",
        f"  publisher:   {contract.publisher_id}",
    ]
    if contract.category:
        lines.append(f"  category:    {contract.category}")
    if contract.tags:
        lines.append(f"  tags:        {', '.join(contract.tags)}")
    if contract.description:
        lines.append(f"  {contract.description}")
    return "\n".join(lines)


def _format_contracts(contracts: list[Contract]) -> str:
    if not contracts:
        return "No contracts found."
    return "\n\n".join(_format_contract(c) for c in contracts)


def _format_page(page: PaginatedResponse[Contract]) -> str:
    header = (
        f"Page {page.page}/{page.total_pages} "
        f"({len(page.items)} of {page.total} contracts)"
    )
    return f"{header}\n\n{_format_contracts(page.items)}"


def _format_versions(versions: list[ContractVersion]) -> str:
    if not versions:
        return "No versions published."
    lines = []
    for v in versions:
        line = f"{v.version}  {v.wasm_hash}  {v.created_at}"
        if v.commit_hash:
            line += f"  commit {v.commit_hash}"
        lines.append(line)
        if v.release_notes:
            lines.append(f"    {v.release_notes}")
    return "\n".join(lines)


def _format_publisher(publisher: Publisher) -> str:
    lines = [
        publisher.username or publisher.stellar_address,
        f"  id:      {publisher.id}",
        f"  address: {publisher.stellar_address}",
    ]
    for label, value in (
        ("email", publisher.email),
        ("github", publisher.github_url),
        ("website", publisher.website),
    ):
        if value:
            lines.append(f"  {label + ':':<8} {value}")
    return "\n".join(lines)


def _format_stats(stats: RegistryStats) -> str:
    return (
        f"Contracts:  {stats.total_contracts}\n"
        f"Verified:   {stats.verified_contracts}\n"
        f"Publishers: {stats.total_publishers}"
    )


def _to_json(value: Any) -> Any:
    if isinstance(value, list):
        return [item.to_dict() for item in value]
    return value.to_dict()


# ─── Commands ─────────────────────────────────────────────────


def _split_tags(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


async def _dispatch(
    args: argparse.Namespace,
    registry: ContractRegistryPort,
    settings: RegistrySettings,
) -> list[tuple[Result[Any], Any]]:
    """Run the selected command. Returns (result, text formatter) pairs in display order."""
    command = args.command

    if command == "search":
        params = ContractSearchParams(
            query=args.query,
            network=settings.network,
            verified_only=True if args.verified_only else None,
            category=args.category,
            page_size=args.limit,
        )
        return [(await registry.get_contracts(params), _format_page)]

    if command == "list":
        params = ContractSearchParams(network=settings.network, page_size=args.limit)
        return [(await registry.get_contracts(params), _format_page)]

    if command == "info":
        return [(await registry.get_contract(args.id), _format_contract)]

    if command == "versions":
        return [(await registry.get_contract_versions(args.id), _format_versions)]

    if command == "publish":
        request = PublishRequest(
            contract_id=args.contract_id,
            name=args.name,
            network=settings.network or Network.MAINNET,
            publisher_address=args.publisher,
            tags=_split_tags(args.tags),
            description=args.description,
            category=args.category,
            source_url=args.source_url,
        )
        logger.info("Publishing %s (%s) to %s", request.name, request.contract_id, request.network)
        return [(await registry.publish_contract(request), _format_contract)]

    if command == "publisher":
        results: list[tuple[Result[Any], Any]] = [
            (await registry.get_publisher(args.id), _format_publisher)
        ]
        if args.contracts and not isinstance(results[0][0], Failure):
            results.append((await registry.get_publisher_contracts(args.id), _format_contracts))
        return results

    if command == "stats":
        return [(await registry.get_stats(), _format_stats)]

    raise ValueError(f"Unknown command: {command}")


async def _run(
    args: argparse.Namespace,
    settings: RegistrySettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout, connect=10.0),
        follow_redirects=True,
        transport=transport,
    ) as http_client:
        registry = RegistryClient(http_client, base_url=settings.api_url)
        outcomes = await _dispatch(args, registry, settings)

    exit_code = _EXIT_OK
    for result, formatter in outcomes:
        if isinstance(result, Failure):
            detail = f" ({result.detail})" if result.detail else ""
            print(f"error: {result.message}{detail}", file=sys.stderr)
            exit_code = _EXIT_FAILURE
            continue
        if args.json:
            print(json.dumps(_to_json(result.value), indent=2))
        else:
            print(formatter(result.value))
    return exit_code


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="contract-registry",
        description="Discover and publish Soroban smart contracts in a contract registry.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--api-url",
        default=None,
        help="Registry API URL. Defaults to $SOROBAN_REGISTRY_API_URL or http://localhost:3001.",
    )
    parser.add_argument(
        "--network",
        default=None,
        help="mainnet | testnet | futurenet. Defaults to $SOROBAN_NETWORK.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log HTTP requests and failures.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print raw JSON records instead of human-readable text.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search for contracts in the registry.")
    search.add_argument("query", help="Search query text.")
    search.add_argument("--category", default=None, help="Filter by category (e.g. dex, token).")
    search.add_argument(
        "--verified-only", action="store_true", help="Only show verified contracts."
    )
    search.add_argument("--limit", type=int, default=10, help="Maximum number of results.")

    info = sub.add_parser("info", help="Show one contract.")
    info.add_argument("id", help="Registry id of the contract.")

    versions = sub.add_parser("versions", help="List a contract's published versions.")
    versions.add_argument("id", help="Registry id of the contract.")

    publish = sub.add_parser("publish", help="Publish a contract to the registry.")
    publish.add_argument("--contract-id", required=True, help="On-chain contract address.")
    publish.add_argument("--name", required=True, help="Display name.")
    publish.add_argument("--publisher", required=True, help="Publisher Stellar address.")
    publish.add_argument("--description", default=None)
    publish.add_argument("--category", default=None)
    publish.add_argument("--tags", default=None, help="Comma-separated tags.")
    publish.add_argument("--source-url", default=None, help="Link to the contract source.")

    listing = sub.add_parser("list", help="List recent contracts.")
    listing.add_argument("--limit", type=int, default=20, help="Maximum number of results.")

    publisher = sub.add_parser("publisher", help="Show a publisher.")
    publisher.add_argument("id", help="Registry id of the publisher.")
    publisher.add_argument(
        "--contracts", action="store_true", help="Also list the publisher's contracts."
    )

    sub.add_parser("stats", help="Show registry-wide counts.")

    return parser.parse_args(argv)


def run_cli(argv: list[str] | None = None) -> int:
    """CLI runner. Returns the process exit status."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
        overrides: dict[str, Any] = {}
        if args.api_url:
            overrides["api_url"] = args.api_url
        if args.network:
            overrides["network"] = resolve_network(args.network)
        settings = dataclasses.replace(settings, **overrides)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return _EXIT_USAGE

    return asyncio.run(_run(args, settings))


def main() -> None:
    """Entry point for the `contract-registry` CLI."""
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
