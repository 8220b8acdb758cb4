from __future__ import annotations
import asyncio
import json
import logging
from pathlib import Path
from typing import Any
import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from meal_shopping_list.categories import GroceryCategory
from meal_shopping_list.config import Config
from meal_shopping_list.errors import ShoppingListError
from meal_shopping_list.formatter import format_shopping_list, items_to_json
from meal_shopping_list.generator import generate_shopping_list, validate_meal_plan
from meal_shopping_list.ids import ID_STRATEGIES
from meal_shopping_list.llm import client_from_config
from meal_shopping_list.parser import parse_response
from meal_shopping_list.prompt import SYSTEM_INSTRUCTION, build_user_prompt

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _config_error_message(e: ValidationError) -> str:
    first = e.errors()[0]
    error = first.get("ctx", {}).get("error")
    return str(error) if error else first["msg"]


def _load_plan(path: Path) -> Any:
    try:
        return json.loads(path.read_text())
    except json.JSONDecodeError as e:
        err_console.print(f"[red]Error:[/red] Meal plan is not valid JSON: {e}")
        raise SystemExit(1)


def _emit(output: str, as_json: bool, output_path: Path | None) -> None:
    if as_json:
        click.echo(output)
    else:
        console.print(output, markup=False, highlight=False)
    if output_path:
        output_path.write_text(output)
        err_console.print(f"[dim]Saved to {output_path}[/dim]")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Meal plan to shopping list, organized by grocery category."""
    _configure_logging(verbose)


@cli.command()
@click.argument("plan_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print items as JSON instead of a checklist")
@click.option(
    "--output", "output_path", default=None, type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the result to this file"
)
def generate(plan_file: Path, as_json: bool, output_path: Path | None):
    """Generate a shopping list from a meal plan JSON file."""
    try:
        config = Config()
    except ValidationError as e:
        err_console.print(f"[red]Error:[/red] {_config_error_message(e)}")
        raise SystemExit(1)

    meal_plan = _load_plan(plan_file)
    client = client_from_config(config)
    new_id = ID_STRATEGIES[config.id_strategy]()

    if not as_json:
        console.print(f"[dim]Asking {config.provider} for a shopping list...[/dim]")
    try:
        items = asyncio.run(
            generate_shopping_list(meal_plan, client, new_id=new_id, timeout=config.request_timeout)
        )
    except ShoppingListError as e:
        err_console.print(f"[red]Error:[/red] {e.reason}")
        if e.details is not None:
            err_console.print(str(e.details), markup=False, highlight=False, style="dim")
        raise SystemExit(1)

    if not as_json:
        console.print(f"[green]✓[/green] [bold]{len(items)}[/bold] items to buy.\n")
    _emit(items_to_json(items) if as_json else format_shopping_list(items), as_json, output_path)


@cli.command()
@click.argument("response_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print items as JSON instead of a checklist")
def parse(response_file: Path, as_json: bool):
    """Parse a saved model response into a shopping list (no API call)."""
    items = parse_response(response_file.read_text())
    if not items:
        console.print("[yellow]No shopping items found in that response.[/yellow]")
        return
    _emit(items_to_json(items) if as_json else format_shopping_list(items), as_json, None)


@cli.command()
@click.argument("plan_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def prompt(plan_file: Path):
    """Show the prompt that would be sent for a meal plan."""
    try:
        plan = validate_meal_plan(_load_plan(plan_file))
    except ShoppingListError as e:
        err_console.print(f"[red]Error:[/red] {e.reason}")
        raise SystemExit(1)
    console.print("[bold]System[/bold]\n")
    click.echo(SYSTEM_INSTRUCTION)
    console.print("\n[bold]User[/bold]\n")
    click.echo(build_user_prompt(plan))


@cli.command()
def categories():
    """List the grocery categories, in display order."""
    table = Table(title="Grocery Categories")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Category")
    for i, category in enumerate(GroceryCategory, start=1):
        table.add_row(str(i), category.value)
    console.print(table)
