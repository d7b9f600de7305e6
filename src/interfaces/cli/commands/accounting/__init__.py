"""会計 CLI コマンドグループ."""

import asyncio
import json

from pathlib import Path
from typing import Any

import click

from src.application.dtos.financial_analysis_dto import (
    AnalyzeFinancialHealthInputDto,
    AnalyzeFinancialHealthOutputDto,
)
from src.domain.value_objects.financial_record import FinancialRecord, InventoryItem
from src.interfaces.cli.base import (
    BaseCommand,
    close_state_store,
    resolve_container,
    with_error_handling,
)


def _parse_ledger(
    data: dict[str, Any],
) -> tuple[list[FinancialRecord], list[InventoryItem]]:
    """``{"transactions": [...], "inventory": [...]}`` を値オブジェクトにする."""
    records = [
        FinancialRecord(
            id=str(t.get("id", i)),
            type=t["type"],
            category=t.get("category", ""),
            amount=float(t["amount"]),
            date=t.get("date", ""),
            description=t.get("description", ""),
        )
        for i, t in enumerate(data.get("transactions", []))
    ]
    inventory = [
        InventoryItem(
            id=str(item.get("id", i)),
            name=item.get("name", ""),
            quantity=int(item["quantity"]),
            unit_price=float(item["unitPrice"]),
            category=item.get("category", "General"),
        )
        for i, item in enumerate(data.get("inventory", []))
    ]
    return records, inventory


@click.group()
def accounting():
    """会計関連コマンド."""
    pass


@accounting.command()
@click.argument("ledger_file", type=click.Path(exists=True, dir_okay=False))
@with_error_handling
def analyze(ledger_file: str):
    """取引・在庫のJSONからAIによる財務分析を表示する."""
    try:
        data = json.loads(Path(ledger_file).read_text(encoding="utf-8"))
        records, inventory = _parse_ledger(data)
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
        raise click.BadParameter(
            f"malformed ledger: {e}", param_hint="LEDGER_FILE"
        ) from e

    output = asyncio.run(_run_analyze(records, inventory))
    click.echo(output.summary)
    click.echo("")
    click.echo(output.analysis)
    if not output.success:
        BaseCommand.error(output.error_message or "Analysis failed")


async def _run_analyze(
    records: list[FinancialRecord], inventory: list[InventoryItem]
) -> AnalyzeFinancialHealthOutputDto:
    container = resolve_container()
    try:
        usecase = container.use_cases.analyze_financial_health_usecase()
        return await usecase.execute(
            AnalyzeFinancialHealthInputDto(records=records, inventory=inventory)
        )
    finally:
        await close_state_store(container)
