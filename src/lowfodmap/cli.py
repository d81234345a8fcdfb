"""CLI interface using Typer."""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from lowfodmap.analysis.loads import (
    LoadStatus,
    analyze_meal,
    item_calories,
    round_half_up,
)
from lowfodmap.config import get_settings, reload_settings
from lowfodmap.data.catalog import FoodCatalog
from lowfodmap.data.models import Meal, MealSlot
from lowfodmap.data.sample_foods import sample_catalog
from lowfodmap.export.serialization import (
    meal_to_dict,
    plan_from_dict,
    plan_to_dict,
    preferences_from_dict,
)
from lowfodmap.export.shopping_list import (
    format_shopping_list,
    generate_shopping_list,
    shopping_list_to_dict,
)
from lowfodmap.optimizer.weekly import generate_weekly_plan
from lowfodmap.plan.weekly import CalorieStatus, daily_totals, format_amount, format_plan_text
from lowfodmap.search.fuzzy import FodmapFilter, rank_foods
from lowfodmap.templates.assembler import add_food, expand_template, shuffle_meal
from lowfodmap.templates.definitions import get_template, list_templates, soup_templates
from lowfodmap.templates.models import ShuffleOption

app = typer.Typer(
    help="Low-FODMAP meal building and weekly plan balancing",
    no_args_is_help=True,
)
console = Console()

config_app = typer.Typer(help="Show or create the configuration file")
app.add_typer(config_app, name="config")

STATUS_STYLES = {
    LoadStatus.SAFE: "green",
    LoadStatus.MODERATE: "yellow",
    LoadStatus.HIGH: "red",
}

CALORIE_STATUS_STYLES = {
    CalorieStatus.GOOD: "green",
    CalorieStatus.WARNING: "yellow",
    CalorieStatus.HIGH: "red",
}


@app.callback()
def main(
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to config.yaml"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Configure logging and settings before running a command."""
    package_logger = logging.getLogger("lowfodmap")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.addHandler(
        RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    )
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False

    if config_path is not None:
        reload_settings(config_path)


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict, file=None) -> None:
    """Output JSON response to stdout or file."""
    json_str = json.dumps(response, indent=2, ensure_ascii=False)
    if file:
        file.write(json_str)
    else:
        print(json_str)


def fail(message: str, command: str, json_output: bool) -> NoReturn:
    """Report an error and exit with status 1."""
    if json_output:
        output_json({"success": False, "command": command, "errors": [message]})
    else:
        console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def read_data_file(path: Path) -> Any:
    """Read a YAML or JSON file."""
    with open(path) as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(f)
        return json.load(f)


def load_catalog(catalog_path: Optional[Path], command: str, json_output: bool) -> FoodCatalog:
    """Load the catalog from a path, the configured path, or the bundled sample."""
    path = catalog_path or get_settings().catalog.path
    if path is None:
        return sample_catalog()
    if not path.exists():
        fail(f"Catalog file not found: {path}", command, json_output)
    try:
        return FoodCatalog.from_file(path)
    except (ValueError, yaml.YAMLError) as e:
        fail(f"Could not load catalog {path}: {e}", command, json_output)


def print_meal(meal: Meal, title: str) -> None:
    """Print a meal with per-item loads and its FODMAP summary."""
    if meal.is_empty:
        console.print(f"[yellow]{title}: no foods[/yellow]")
        return

    analysis = analyze_meal(meal)

    table = Table(title=title)
    table.add_column("Food")
    table.add_column("Category", style="dim")
    table.add_column("Amount", justify="right")
    table.add_column("kcal", justify="right")
    table.add_column("Load", justify="right")

    for item in meal.items:
        load = analysis.individual_loads.get(item.instance_id, 0.0)
        load_str = f"{round_half_up(load)}%" if item.food.has_fodmaps else ""
        style = "red" if load > 100 else ""
        table.add_row(
            item.food.name,
            item.food.category.label,
            f"{format_amount(item.current_amount)} {item.food.unit}",
            str(round_half_up(item_calories(item))),
            f"[{style}]{load_str}[/{style}]" if style else load_str,
        )

    console.print(table)
    console.print(f"Total: [bold]{analysis.display_calories} kcal[/bold]")

    if not analysis.fodmap_loads:
        console.print("[green]No FODMAPs in this meal[/green]")
        return

    for fodmap_type, load in analysis.fodmap_loads.items():
        status = analysis.status(fodmap_type)
        style = STATUS_STYLES[status]
        console.print(
            f"  {fodmap_type.label}: [{style}]{status.value} ({round_half_up(load * 100)}%)[/{style}]"
        )

    if analysis.has_accumulation_risk:
        console.print("[red]Accumulation risk: reduce the highlighted portions[/red]")


def meal_response(meal: Meal) -> dict:
    analysis = analyze_meal(meal)
    return {"items": meal_to_dict(meal), **analysis.to_dict()}


# ============================================================================
# Commands
# ============================================================================


@app.command()
def search(
    query: str = typer.Argument(..., help="Food name, or part of it"),
    fodmap_filter: FodmapFilter = typer.Option(
        FodmapFilter.ALL, "--filter", "-f", help="Only foods without (low) or with (high) FODMAPs"
    ),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum results"),
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="Catalog YAML/JSON file"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Find foods by approximate name."""
    settings = get_settings()
    catalog = load_catalog(catalog_path, "search", json_output)
    results = rank_foods(
        query,
        catalog,
        fodmap_filter,
        limit=limit or settings.search.limit,
        min_score=settings.search.min_score,
    )

    if json_output:
        output_json({
            "success": True,
            "command": "search",
            "data": {
                "query": query,
                "results": [
                    {
                        "id": r.food.id,
                        "name": r.food.name,
                        "category": r.food.category.value,
                        "score": round(r.score, 3),
                        "safe_amount": r.food.safe_amount,
                        "unit": r.food.unit,
                        "fodmaps": [t.value for t in r.food.fodmap_types],
                    }
                    for r in results
                ],
            },
            "human_summary": f"Found {len(results)} foods matching '{query}'",
        })
        return

    if not results:
        console.print(f"[yellow]No foods found matching '{query}'[/yellow]")
        return

    table = Table(title=f"Foods matching '{query}'")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category", style="dim")
    table.add_column("Safe amount", justify="right")
    table.add_column("FODMAPs", style="magenta")
    table.add_column("Score", justify="right", style="dim")

    for r in results:
        food = r.food
        safe = f"{format_amount(food.safe_amount)} {food.unit}" if food.safe_amount else ""
        table.add_row(
            food.id,
            food.name,
            food.category.label,
            safe,
            ", ".join(t.label for t in food.fodmap_types),
            f"{r.score:.2f}",
        )

    console.print(table)


@app.command()
def analyze(
    template_id: Optional[str] = typer.Option(None, "--template", "-t", help="Start from a template"),
    items: Optional[list[str]] = typer.Option(
        None, "--item", "-i", help="Food to add, as FOOD_ID or FOOD_ID=AMOUNT (repeatable)"
    ),
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="Catalog YAML/JSON file"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show FODMAP loads and calories for a meal."""
    catalog = load_catalog(catalog_path, "analyze", json_output)

    meal = Meal()
    if template_id:
        template = get_template(template_id)
        if template is None:
            fail(f"Unknown template '{template_id}'", "analyze", json_output)
        meal = expand_template(template, catalog)

    for entry in items or []:
        food_id, _, amount_str = entry.partition("=")
        food = catalog.get(food_id.strip())
        if food is None:
            fail(f"Food '{food_id}' not found in catalog", "analyze", json_output)
        amount = None
        if amount_str:
            try:
                amount = float(amount_str)
            except ValueError:
                fail(f"Invalid amount in '{entry}'", "analyze", json_output)
            if amount < 0:
                fail(f"Amount must be >= 0 in '{entry}'", "analyze", json_output)
        meal = add_food(meal, food, amount)

    if meal.is_empty:
        fail("Nothing to analyze: pass --template or --item", "analyze", json_output)

    if json_output:
        analysis = analyze_meal(meal)
        output_json({
            "success": True,
            "command": "analyze",
            "data": meal_response(meal),
            "human_summary": (
                f"{len(meal)} items, {analysis.display_calories} kcal, "
                f"{len(analysis.overloaded_types)} overloaded FODMAP types"
            ),
        })
        return

    print_meal(meal, "Meal")


@app.command()
def shuffle(
    option: str = typer.Argument(
        "lunch", help="breakfast, lunch, afternoon_snack, dinner, snacks or soup"
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="Catalog YAML/JSON file"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Create a random meal of suitable foods."""
    try:
        shuffle_option = ShuffleOption.parse(option)
    except ValueError as e:
        fail(str(e), "shuffle", json_output)

    settings = get_settings()
    catalog = load_catalog(catalog_path, "shuffle", json_output)
    meal = shuffle_meal(
        catalog,
        shuffle_option,
        random.Random(seed),
        soups=soup_templates(),
        soup_probability=settings.shuffle.soup_probability,
    )

    if json_output:
        output_json({
            "success": True,
            "command": "shuffle",
            "data": {"option": shuffle_option.value, **meal_response(meal)},
            "human_summary": f"Random {shuffle_option.value}: {', '.join(meal.food_names())}",
        })
        return

    print_meal(meal, f"Random {shuffle_option.value.replace('_', ' ')}")


@app.command()
def templates(
    slot: Optional[str] = typer.Option(None, "--slot", "-s", help="Only templates for this slot"),
) -> None:
    """List built-in meal templates."""
    category = None
    if slot:
        try:
            category = MealSlot(slot.lower())
        except ValueError:
            fail(f"Unknown meal slot '{slot}'", "templates", False)

    table = Table(title="Meal templates")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Slot", style="dim")
    table.add_column("Foods", justify="right")

    for template in list_templates(category):
        slot_label = template.category.label if template.category else "Soup"
        table.add_row(template.id, template.name, slot_label, str(len(template.items)))

    console.print(table)


@app.command()
def plan(
    preferences_path: Optional[Path] = typer.Argument(
        None, help="YAML/JSON file mapping slots to preferred food ids"
    ),
    calories: Optional[float] = typer.Option(None, "--calories", "-c", help="Daily calorie goal"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write plan JSON to file"),
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="Catalog YAML/JSON file"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Generate a balanced weekly plan from preferred foods."""
    settings = get_settings()
    preferences_path = preferences_path or settings.planning.preferences_path
    if preferences_path is None:
        fail("No preferences file given", "plan", json_output)
    if not preferences_path.exists():
        fail(f"Preferences file not found: {preferences_path}", "plan", json_output)

    try:
        preferences = preferences_from_dict(read_data_file(preferences_path))
    except (ValueError, AttributeError, yaml.YAMLError) as e:
        fail(f"Invalid preferences file: {e}", "plan", json_output)

    goal = calories if calories is not None else settings.planning.daily_calorie_goal
    catalog = load_catalog(catalog_path, "plan", json_output)

    try:
        result = generate_weekly_plan(
            catalog,
            preferences,
            daily_goal=goal,
            rng=random.Random(seed),
            settings=settings.optimizer,
        )
    except ValueError as e:
        fail(str(e), "plan", json_output)

    plan_data = plan_to_dict(result.plan)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w") as f:
            output_json(plan_data, file=f)

    if json_output:
        output_json({
            "success": True,
            "command": "plan",
            "data": {
                "daily_calorie_goal": goal,
                "plan": plan_data,
                "reports": [
                    {
                        "day": r.day,
                        "slot": r.slot.value,
                        "target_calories": round(r.target.target, 1),
                        "calories": round(r.result.total_calories, 1),
                        "iterations": r.result.iterations,
                        "outcome": r.result.outcome.value,
                    }
                    for r in result.reports
                ],
            },
            "human_summary": (
                f"Planned {len(result.reports)} meals over {len(result.plan)} days, "
                f"{len(result.unconverged)} not fully balanced"
            ),
        })
        return

    if not result.plan:
        console.print("[yellow]No meals planned: select preferred foods for at least one slot[/yellow]")
        return

    console.print(format_plan_text(result.plan), markup=False, highlight=False)
    console.print()

    table = Table(title="Daily totals")
    table.add_column("Day")
    table.add_column("kcal", justify="right")
    table.add_column("Status")
    for total in daily_totals(result.plan, goal):
        style = CALORIE_STATUS_STYLES[total.status]
        table.add_row(
            total.day, str(total.display_calories), f"[{style}]{total.status.value}[/{style}]"
        )
    console.print(table)

    if result.unconverged:
        console.print(
            f"[yellow]{len(result.unconverged)} meals could not be fully balanced "
            f"within {settings.optimizer.max_iterations} iterations[/yellow]"
        )
    if output:
        console.print(f"[green]Plan written to {output}[/green]")


@app.command()
def shopping(
    plan_path: Path = typer.Argument(..., help="Plan JSON/YAML file written by 'plan --output'"),
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="Catalog YAML/JSON file"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Build a shopping list from a saved weekly plan."""
    if not plan_path.exists():
        fail(f"Plan file not found: {plan_path}", "shopping", json_output)

    catalog = load_catalog(catalog_path, "shopping", json_output)
    try:
        weekly_plan = plan_from_dict(read_data_file(plan_path) or {}, catalog)
    except (ValueError, AttributeError, yaml.YAMLError) as e:
        fail(f"Invalid plan file: {e}", "shopping", json_output)

    shopping_list = generate_shopping_list(weekly_plan)

    if json_output:
        output_json({
            "success": True,
            "command": "shopping",
            "data": shopping_list_to_dict(shopping_list),
            "human_summary": (
                f"{sum(len(v) for v in shopping_list.items_by_category.values())} items"
            ),
        })
        return

    if shopping_list.is_empty:
        console.print("[yellow]The plan has no meals[/yellow]")
        return

    console.print(format_shopping_list(shopping_list), markup=False, highlight=False)


@config_app.command("show")
def config_show() -> None:
    """Print the active settings as YAML."""
    settings = get_settings()
    console.print(
        yaml.dump(settings.to_dict(), default_flow_style=False, sort_keys=False),
        markup=False,
    )


@config_app.command("init")
def config_init(
    path: Optional[Path] = typer.Argument(None, help="Where to write config.yaml"),
) -> None:
    """Write the default settings to a config file."""
    from lowfodmap.config.settings import Settings, _default_config_dir

    target = path or _default_config_dir() / "config.yaml"
    if target.exists():
        console.print(f"[yellow]Config already exists: {target}[/yellow]")
        raise typer.Exit(1)

    Settings().save(target)
    console.print(f"[green]Config written to {target}[/green]")


if __name__ == "__main__":
    app()
