# Command line for the cafeteria back office.
#
# - cafeteria init                      seed empty collections with demo data
# - cafeteria export [-o FILE]          dump the nine collections as one JSON document
# - cafeteria import FILE               overwrite collections from a JSON document
# - cafeteria sales                     list sales with status and total
# - cafeteria sell -e 1 -u 1 -l 1:2     record a sale (article 1, two units)
# - cafeteria void SALE_ID              void a sale and restore stock
#
# Storage location and log level come from CAFETERIA_* env vars (see config.py).
from __future__ import annotations

import logging

import click

from cafeteria.config import get_settings
from cafeteria.exceptions import CafeteriaError
from cafeteria.services.backoffice import Backoffice
from cafeteria.storage.seed import initialize_store
from cafeteria.storage.transfer import export_data, import_data


def _money(cents: int) -> str:
    return f"RD$ {cents / 100:,.2f}"


def _parse_line(value: str) -> dict:
    article_id, _, qty = value.partition(":")
    try:
        quantity = int(qty or 1)
    except ValueError:
        raise click.BadParameter(f"expected ARTICLE_ID[:QTY], got {value!r}")
    return {"article_id": article_id, "quantity": quantity}


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = Backoffice.from_settings(settings)


@cli.command("init")
@click.pass_obj
def init_cmd(bo: Backoffice) -> None:
    """Seed every collection that has never been written."""
    seeded = initialize_store(bo.store)
    click.echo(f"Seeded: {', '.join(seeded)}" if seeded else "Nothing to seed.")


@cli.command("export")
@click.option("-o", "--output", type=click.File("w", encoding="utf-8"), default="-")
@click.pass_obj
def export_cmd(bo: Backoffice, output) -> None:
    """Export all collections as one JSON document."""
    output.write(export_data(bo.store))
    output.write("\n")


@cli.command("import")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.pass_obj
def import_cmd(bo: Backoffice, source) -> None:
    """Overwrite collections from a JSON document."""
    if not import_data(bo.store, source.read()):
        raise click.ClickException("Import failed: not a valid JSON document")
    click.echo("Import complete.")


@cli.command("sales")
@click.pass_obj
def sales_cmd(bo: Backoffice) -> None:
    """List sales."""
    for s in bo.sales.list_sales():
        click.echo(
            f"{s.id}\t{s.invoice_number}\t{s.timestamp:%Y-%m-%d %H:%M}\t"
            f"{s.status}\t{_money(s.total_cents)}"
        )


@cli.command("sell")
@click.option("-e", "--employee", "employee_id", required=True)
@click.option("-u", "--user", "user_id", required=True)
@click.option("-l", "--line", "lines", multiple=True, required=True, help="ARTICLE_ID[:QTY]")
@click.pass_obj
def sell_cmd(bo: Backoffice, employee_id: str, user_id: str, lines) -> None:
    """Record a sale at current article prices."""
    try:
        sale = bo.sales.create_sale(employee_id, user_id, [_parse_line(v) for v in lines])
    except CafeteriaError as exc:
        raise click.ClickException(str(exc))
    click.echo(f"{sale.invoice_number}\t{_money(sale.total_cents)}")


@cli.command("void")
@click.argument("sale_id")
@click.pass_obj
def void_cmd(bo: Backoffice, sale_id: str) -> None:
    """Void a sale and put its units back in stock."""
    if not bo.sales.void_sale(sale_id):
        raise click.ClickException(f"Sale {sale_id} not found or already voided")
    click.echo(f"Sale {sale_id} voided.")


if __name__ == "__main__":
    cli()
