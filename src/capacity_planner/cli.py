"""CLI entry point for the capacity planner."""

import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .constants import MSG_ASSIGNMENTS_CREATED, MSG_GROUPS_RECALCULATED
from .exceptions import PlanningError
from .exporters import get_exporter
from .loader import DataLoader
from .service import CapacityService
from .utils import format_hours

app = typer.Typer(
    name="capacity-planner",
    help="Training capacity planning: trainer workload, room occupancy and projections",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    excel = "excel"


DataDir = Annotated[
    Path,
    typer.Argument(help="Directory containing trainers.json, modules.json, rooms.json, groups.json"),
]
Verbose = Annotated[
    bool,
    typer.Option("-v", "--verbose", help="Show debug logging"),
]


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load(data_dir: Path, verbose: bool) -> CapacityService:
    """Load the data directory, turning planner errors into a clean exit."""
    _setup_logging(verbose)
    try:
        with console.status("[bold green]Loading planning data..."):
            return DataLoader(data_dir).load()
    except PlanningError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _rate_style(rate: int) -> str:
    if rate > 100:
        return "red"
    if rate >= 80:
        return "yellow"
    return "green"


@app.command()
def workload(data_dir: DataDir, verbose: Verbose = False) -> None:
    """Show weekly workload of every active trainer."""
    service = _load(data_dir, verbose)

    table = Table(title="Charge formateurs")
    table.add_column("Formateur", style="cyan")
    table.add_column("Heures/sem", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Occupation", justify="right")

    for tw in service.trainer_workload():
        style = _rate_style(tw.occupation_rate)
        table.add_row(
            tw.name,
            format_hours(tw.current_hours),
            str(tw.max_hours),
            f"[{style}]{tw.occupation_rate}%[/{style}]",
        )

    console.print(table)


@app.command()
def rooms(data_dir: DataDir, verbose: Verbose = False) -> None:
    """Show weekly occupancy of every active room."""
    service = _load(data_dir, verbose)

    table = Table(title="Occupation salles")
    table.add_column("Salle", style="cyan")
    table.add_column("Heures occupées", justify="right")
    table.add_column("Disponibles", justify="right")
    table.add_column("Occupation", justify="right")

    for ro in service.room_occupancy():
        style = _rate_style(ro.occupation_rate)
        table.add_row(
            ro.name,
            format_hours(ro.occupied_hours),
            str(ro.available_hours),
            f"[{style}]{ro.occupation_rate}%[/{style}]",
        )

    console.print(table)


@app.command()
def weekly(
    data_dir: DataDir,
    limit: Annotated[
        int,
        typer.Option("-n", "--limit", help="Number of weeks to show"),
    ] = 12,
    verbose: Verbose = False,
) -> None:
    """Show the week-by-week projection of group schedules."""
    service = _load(data_dir, verbose)
    weeks = service.weekly_planning()

    if not weeks:
        console.print("[yellow]Aucune formation planifiée[/yellow]")
        return

    for week in weeks[:limit]:
        table = Table(
            title=(
                f"Semaine {week.week} - {week.month_name} "
                f"({week.start_date.isoformat()} → {week.end_date.isoformat()})"
            )
        )
        table.add_column("Groupe", style="cyan")
        table.add_column("Salle", style="blue")
        table.add_column("#", justify="right")
        table.add_column("Module")
        table.add_column("Formateur", style="magenta")
        table.add_column("h/sem", justify="right", style="green")

        for group in week.groups:
            for module in group.modules:
                table.add_row(
                    group.group_name,
                    group.room_name,
                    str(module.scheduled_order),
                    module.module_name,
                    module.trainer_name,
                    format_hours(module.weekly_hours),
                )
        console.print(table)

    if len(weeks) > limit:
        console.print(f"[dim]... and {len(weeks) - limit} more week(s)[/dim]")


@app.command()
def monthly(
    data_dir: DataDir,
    today: Annotated[
        Optional[datetime],
        typer.Option("--today", help="Reference date (YYYY-MM-DD)", formats=["%Y-%m-%d"]),
    ] = None,
    verbose: Verbose = False,
) -> None:
    """Show the 12-month projection with capacity conflicts."""
    service = _load(data_dir, verbose)
    months = service.monthly_planning(today.date() if today else None)

    table = Table(title="Planification mensuelle")
    table.add_column("Mois", style="cyan")
    table.add_column("Groupes", justify="right")
    table.add_column("Heures formateurs", justify="right")
    table.add_column("Heures salles", justify="right")
    table.add_column("Conflits", style="red")

    for month in months:
        table.add_row(
            f"{month.month_name} {month.year}",
            str(month.total_groups),
            format_hours(month.total_trainer_hours),
            format_hours(month.total_room_hours),
            "\n".join(c.description for c in month.conflicts) or "[green]OK[/green]",
        )

    console.print(table)


@app.command()
def dashboard(data_dir: DataDir, verbose: Verbose = False) -> None:
    """Show headline capacity figures."""
    service = _load(data_dir, verbose)
    summary = service.dashboard_summary()

    table = Table(title="Tableau de bord", show_header=False)
    table.add_column("Indicateur", style="cyan")
    table.add_column("Valeur", style="green")

    table.add_row("Occupation formateurs", f"{summary.trainer_occupation_rate}%")
    table.add_row("Occupation salles", f"{summary.room_occupation_rate}%")
    table.add_row("Groupes actifs", str(summary.active_groups))
    table.add_row("Groupes totaux", str(summary.total_groups))
    table.add_row("Groupes terminés", str(summary.completed_groups))
    table.add_row("Groupes en retard", str(summary.delayed_groups))
    table.add_row("Capacité restante", f"{summary.capacity_remaining}%")
    table.add_row("Formateurs", str(summary.total_trainers))
    table.add_row("Salles", str(summary.total_rooms))

    console.print(table)


@app.command()
def analyze(
    data_dir: DataDir,
    today: Annotated[
        Optional[datetime],
        typer.Option("--today", help="Reference date (YYYY-MM-DD)", formats=["%Y-%m-%d"]),
    ] = None,
    verbose: Verbose = False,
) -> None:
    """Run the full capacity analysis and print recommendations."""
    service = _load(data_dir, verbose)
    analysis = service.capacity_analysis(today.date() if today else None)

    overloaded = [tc for tc in analysis.trainer_constraints if tc.is_overloaded]
    overbooked = [rc for rc in analysis.room_constraints if rc.is_overbooked]
    conflict_months = [m for m in analysis.monthly_planning if m.has_conflicts]

    console.print("\n[bold]Capacity analysis[/bold]")
    console.print(f"  Trainers: {len(analysis.trainer_constraints)} ({len(overloaded)} overloaded)")
    console.print(f"  Rooms: {len(analysis.room_constraints)} ({len(overbooked)} overbooked)")
    console.print(f"  Groups: {len(analysis.group_assignments)}")
    console.print(f"  Planned weeks: {len(analysis.weekly_planning)}")
    console.print(f"  Months in conflict: {len(conflict_months)}")

    groups_table = Table(title="Groupes")
    groups_table.add_column("Groupe", style="cyan")
    groups_table.add_column("Modules", justify="right")
    groups_table.add_column("Formateurs", justify="right")
    groups_table.add_column("Salle")

    for ga in analysis.group_assignments:
        groups_table.add_row(
            ga.group_name,
            str(ga.assigned_modules),
            str(ga.assigned_trainers),
            "[green]✓[/green]" if ga.has_room else "[red]✗[/red]",
        )
    console.print(groups_table)

    console.print("\n[bold]Recommandations:[/bold]")
    for line in analysis.recommendations:
        console.print(f"  • {line}")


@app.command(name="auto-assign")
def auto_assign(data_dir: DataDir, verbose: Verbose = False) -> None:
    """Record a competency row for every specialty match and show the matrix."""
    service = _load(data_dir, verbose)
    created = service.auto_assign_all_trainers_to_modules()

    trainers = service.get_all_trainers()
    table = Table(title="Matrice de compétences")
    table.add_column("Module", style="cyan")
    for trainer in trainers:
        table.add_column(trainer.name, justify="center")

    for module in service.get_all_modules():
        cells = []
        for trainer in trainers:
            row = service.store.find_assignment(module.id, trainer.id)
            if row is None:
                cells.append("")
            elif row.can_teach:
                cells.append("[green]✓[/green]")
            else:
                cells.append("[red]✗[/red]")
        table.add_row(module.name, *cells)

    console.print(table)
    console.print(f"\n[bold green]✓[/bold green] {MSG_ASSIGNMENTS_CREATED.format(count=created)}")


@app.command()
def recalculate(data_dir: DataDir, verbose: Verbose = False) -> None:
    """Re-run auto-assignment for every planned or active group."""
    service = _load(data_dir, verbose)
    with console.status("[bold green]Recalculating..."):
        count = service.recalculate_capacity()

    table = Table(title="Groupes")
    table.add_column("Groupe", style="cyan")
    table.add_column("Modules", justify="right")
    table.add_column("Fin estimée")

    for group in service.get_all_training_groups():
        end = group.estimated_end_date
        table.add_row(
            group.name,
            str(len(service.list_schedules_for_group(group.id))),
            end.isoformat() if end else "-",
        )

    console.print(table)
    console.print(f"\n[bold green]✓[/bold green] {MSG_GROUPS_RECALCULATED.format(count=count)}")


@app.command()
def export(
    data_dir: DataDir,
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Output file path"),
    ] = Path("output/capacity"),
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    today: Annotated[
        Optional[datetime],
        typer.Option("--today", help="Reference date (YYYY-MM-DD)", formats=["%Y-%m-%d"]),
    ] = None,
    verbose: Verbose = False,
) -> None:
    """Export the capacity analysis to JSON or Excel."""
    service = _load(data_dir, verbose)
    analysis = service.capacity_analysis(today.date() if today else None)

    suffix = ".xlsx" if format == OutputFormat.excel else ".json"
    output_path = output if output.suffix else output.with_suffix(suffix)

    exporter = get_exporter(format.value)
    with console.status(f"[bold green]Exporting to {format.value}..."):
        exporter.export(analysis, output_path)

    console.print(f"\n[bold green]✓[/bold green] Exported to: {output_path}")


if __name__ == "__main__":
    app()
