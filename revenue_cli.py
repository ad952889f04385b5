"""Operator script for the revenue API.

Usage examples:

- Import entries from a JSON/YAML file:
    `python revenue_cli.py import entries.yaml`

- Preview the requests without sending them:
    `python revenue_cli.py import entries.yaml --dry-run`

- Show the chart series / analytics for a year:
    `python revenue_cli.py chart --year 2025`
    `python revenue_cli.py analytics --year 2025`

- Download the Excel export:
    `python revenue_cli.py export --year 2025 --output revenue_2025.xlsx`

- Issue a bearer token from the configured secret (needs the backend installed):
    `python revenue_cli.py token --role admin`

The API base URL comes from `--base-url` or `REVENUE_API_URL`, the bearer token
from `--token` or `REVENUE_API_TOKEN`. An import file is either a list of
entries or a mapping with an `entries` list and an optional `baseUrl`.
"""
from __future__ import annotations

import argparse
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
import yaml
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

BASE_URL = os.getenv("REVENUE_API_URL", "http://localhost:8000")
SESSION = requests.Session()
DRY_RUN = False
CONSOLE = Console()


def load_entries(path: str) -> List[Dict[str, Any]]:
    """Read revenue entries from a JSON (.json) or YAML (.yml/.yaml) file."""
    global BASE_URL
    file = Path(path)
    if not file.exists():
        raise FileNotFoundError(f"Entries file not found: {path}")

    if file.suffix.lower() in (".yml", ".yaml"):
        content = yaml.safe_load(file.read_text(encoding="utf-8"))
    else:
        content = json.loads(file.read_text(encoding="utf-8"))

    if isinstance(content, dict):
        if isinstance(content.get("baseUrl"), str):
            BASE_URL = content["baseUrl"].rstrip("/")
        content = content.get("entries")
    if not isinstance(content, list):
        raise ValueError("Entries file must contain a list of entries (or an 'entries' list)")
    for idx, entry in enumerate(content):
        if not isinstance(entry, dict):
            raise ValueError(f"Entry #{idx + 1} must be a mapping")
    return content


def update_base_url(url: str) -> None:
    global BASE_URL
    BASE_URL = url.rstrip("/")


def use_token(token: Optional[str]) -> None:
    if token:
        SESSION.headers["Authorization"] = f"Bearer {token}"


# --- HTTP helpers ---------------------------------------------------------

def import_entries(entries: List[Dict[str, Any]]) -> int:
    """POST each entry; returns how many the API accepted."""
    created = 0
    for entry in entries:
        if DRY_RUN:
            CONSOLE.print(Panel.fit(f"[DRY] POST {BASE_URL}/api/revenue/\n{json.dumps(entry)}", title="Dry Run", border_style="magenta"))
            continue
        try:
            resp = SESSION.post(f"{BASE_URL}/api/revenue/", json=entry, timeout=5)
            resp.raise_for_status()
            created += 1
            record = resp.json()["data"]
            CONSOLE.print(f"[green]✔ {record['month']} {record['year']}: {record['revenue']}[/]")
        except requests.HTTPError as exc:
            CONSOLE.print(f"[red]✘ {entry}: {_error_message(exc.response)}[/]")
    if not DRY_RUN:
        CONSOLE.print(f"[bold]{created}/{len(entries)} entries imported[/]")
    return created


def fetch_chart(year: Optional[int]) -> Dict[str, Any]:
    resp = SESSION.get(f"{BASE_URL}/api/revenue/chart-data", params=_year_params(year), timeout=5)
    resp.raise_for_status()
    return resp.json()


def fetch_analytics(year: Optional[int]) -> Dict[str, Any]:
    resp = SESSION.get(f"{BASE_URL}/api/revenue/analytics", params=_year_params(year), timeout=5)
    resp.raise_for_status()
    return resp.json()["data"]


def download_export(year: Optional[int], output: Optional[str]) -> Path:
    resp = SESSION.get(f"{BASE_URL}/api/revenue/export", params=_year_params(year), timeout=30)
    resp.raise_for_status()
    target = Path(output or f"revenue_{year or 'current'}.xlsx")
    target.write_bytes(resp.content)
    CONSOLE.print(f"[green]✔ Excel exported: {target}[/]")
    return target


# --- Rendering --------------------------------------------------------------

def render_chart(body: Dict[str, Any]) -> Table:
    labels = body["data"]["labels"]
    series = body["data"]["datasets"][0]["data"]
    table = Table(title=f"Monthly Revenue {body['year']}", box=box.SIMPLE)
    table.add_column("Month", style="bold cyan")
    table.add_column("Revenue", justify="right")
    for label, value in zip(labels, series):
        table.add_row(label, f"{value:,.2f}")
    table.add_row("[bold]Total[/]", f"[bold]{body['totalRevenue']:,.2f}[/]")
    return table


def render_analytics(data: Dict[str, Any]) -> Table:
    table = Table(title=f"Revenue Analytics {data['currentYear']}", box=box.SIMPLE, show_header=False)
    table.add_row("[bold cyan]totalRevenue[/]", f"{data['totalRevenue']:,.2f}")
    table.add_row("[bold cyan]avgMonthlyRevenue[/]", f"{data['avgMonthlyRevenue']:,.2f}")
    for item in data["monthlyBreakdown"]:
        table.add_row(f"  {item['month']}", f"{item['total']:,.2f} ({item['count']} entries)")
    for item in data["yearlyComparison"]:
        table.add_row(f"[magenta]{item['year']}[/]", f"{item['total']:,.2f} ({item['count']} entries)")
    return table


def issue_token(user_id: str, role: str) -> str:
    from app.config import get_settings
    from application.token_service import create_access_token

    return create_access_token(user_id, role, get_settings())


def _year_params(year: Optional[int]) -> Dict[str, Any]:
    return {"year": year} if year is not None else {}


def _error_message(resp: Optional[requests.Response]) -> str:
    if resp is None:
        return "no response"
    try:
        return resp.json().get("message", resp.text)
    except ValueError:
        return resp.text


# --- Entry point ------------------------------------------------------------

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Revenue API operator tool")
    parser.add_argument("--base-url", type=str, default=None, help="Override backend base URL (e.g. http://localhost:8000)")
    parser.add_argument("--token", type=str, default=os.getenv("REVENUE_API_TOKEN"), help="Bearer token for the API")
    sub = parser.add_subparsers(dest="command", required=True)

    p_import = sub.add_parser("import", help="POST entries from a JSON/YAML file")
    p_import.add_argument("path", type=str)
    p_import.add_argument("--dry-run", action="store_true", help="Print requests without sending")

    for name in ("chart", "analytics"):
        p = sub.add_parser(name, help=f"Show {name} for a year")
        p.add_argument("--year", type=int, default=None)

    p_export = sub.add_parser("export", help="Download the Excel export")
    p_export.add_argument("--year", type=int, default=None)
    p_export.add_argument("--output", type=str, default=None)

    p_token = sub.add_parser("token", help="Issue a bearer token from the configured secret")
    p_token.add_argument("--user-id", type=str, default="cli")
    p_token.add_argument("--role", choices=("admin", "employee", "client"), default="admin")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    global DRY_RUN
    args = parse_args(argv)
    # the entries file may set baseUrl; the command line still wins
    entries = load_entries(args.path) if args.command == "import" else []
    if args.base_url:
        update_base_url(args.base_url)
    use_token(args.token)

    if args.command == "import":
        DRY_RUN = bool(args.dry_run)
        import_entries(entries)
    elif args.command == "chart":
        CONSOLE.print(render_chart(fetch_chart(args.year)))
    elif args.command == "analytics":
        CONSOLE.print(render_analytics(fetch_analytics(args.year)))
    elif args.command == "export":
        download_export(args.year, args.output)
    elif args.command == "token":
        print(issue_token(args.user_id, args.role))


if __name__ == "__main__":
    main()
