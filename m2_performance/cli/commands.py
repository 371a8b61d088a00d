"""CLI commands for the Magento 2 performance analyzer."""

import json
import sys
from pathlib import Path
from typing import List

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress
from rich.table import Table

from ..analysis.collector import RecommendationCollector
from ..analysis.scoring import ScoringEngine
from ..analysis.summary import export_rows, filter_by_priority, sort_by_priority, summarize
from ..models.data_models import AnalysisRunResult, Priority, Recommendation
from ..orchestrator.main import AnalysisOrchestrator, slowest
from ..orchestrator.profiles import AREA_KEYS, AnalyzerRegistry, Profile
from ..utils.config import Config
from ..utils.environment import EnvironmentLoader, load_core_config_export
from ..utils.errors import ConfigurationLoadError
from ..utils.logging import setup_logging
from ..utils.validation import validate_magento_root

console = Console()

PRIORITY_STYLES = {
    Priority.HIGH: "bold red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
}


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--config-file', type=click.Path(), help='Configuration (.env) file path')
@click.pass_context
def cli(ctx, debug, config_file):
    """Magento 2 performance analyzer."""
    ctx.ensure_object(dict)
    
    config = Config(config_file)
    ctx.obj['config'] = config
    
    setup_logging(
        log_level="DEBUG" if debug else config.log_level,
        log_file=config.log_file or None,
        console_output=True
    )


@cli.command()
@click.option('--magento-root', '-r', default='.', type=click.Path(), help='Magento installation root')
@click.option('--profile', '-p', default=None, help='Analyzer profile: basic, security or full')
@click.option('--areas', '-a', default=None, help='Comma separated areas, e.g. "caching,database"')
@click.option('--priority', type=click.Choice(['low', 'medium', 'high']), default=None,
              help='Only show recommendations at or above this priority')
@click.option('--async', 'run_async', is_flag=True, help='Run analyzers in parallel')
@click.option('--watch', is_flag=True, help='Re-run the analysis continuously')
@click.option('--allow-dev-mode', is_flag=True, default=None, help='Adjust recommendations for developer mode')
@click.option('--summary', is_flag=True, help='Show counts per area instead of every recommendation')
@click.option('--verbose-explanation', is_flag=True, help='Include the long explanation of each recommendation')
@click.option('--export', 'export_format', type=click.Choice(['json']), default=None, help='Export format')
@click.option('--output', '-o', type=click.Path(), default=None, help='Export file, stdout if omitted')
@click.option('--core-config-csv', type=click.Path(), default=None,
              help='core_config_data export used as the database configuration layer')
@click.pass_context
def analyze(ctx, magento_root, profile, areas, priority, run_async, watch, allow_dev_mode,
            summary, verbose_explanation, export_format, output, core_config_csv):
    """Analyze a Magento 2 installation and print recommendations."""
    
    config = ctx.obj['config']
    
    is_valid, error = validate_magento_root(magento_root)
    if not is_valid:
        console.print(f"[red]{error}[/red]")
        ctx.exit(1)
    
    try:
        database_config = load_core_config_export(core_config_csv) if core_config_csv else None
        loader = EnvironmentLoader(magento_root, database_config)
        snapshot = loader.load()
    except ConfigurationLoadError as e:
        console.print(f"[red]Configuration could not be loaded: {e}[/red]")
        ctx.exit(1)
    
    if allow_dev_mode is None:
        allow_dev_mode = config.allow_dev_mode
    if snapshot.mode == "developer" and not allow_dev_mode and sys.stdin.isatty():
        allow_dev_mode = click.confirm(
            "Magento is in developer mode. Adjust recommendations for a development environment?",
            default=True
        )
    
    selected_profile = Profile.resolve(profile or config.default_profile)
    registry = AnalyzerRegistry()
    orchestrator = AnalysisOrchestrator(config)
    
    def build_run():
        collector = RecommendationCollector()
        if config.debug_config:
            add_debug_config(collector, snapshot)
        analyzers = registry.prepare(snapshot, collector, selected_profile, areas, bool(allow_dev_mode))
        return collector, analyzers
    
    if watch:
        console.print(f"[bold blue]Watching {snapshot.root} every {config.watch_interval:g}s "
                      f"(Ctrl+C to stop)[/bold blue]")
        try:
            orchestrator.watch(build_run, interval=config.watch_interval, display=console.print)
        except KeyboardInterrupt:
            console.print("\n[yellow]Watch mode stopped[/yellow]")
        return
    
    collector, analyzers = build_run()
    available = len(registry.available_keys(snapshot.is_enterprise))
    
    if run_async:
        with console.status(f"Running {len(analyzers)} analyzers in parallel..."):
            result = orchestrator.run_async(analyzers, collector)
    else:
        with Progress(console=console, transient=True) as progress:
            task = progress.add_task("Analyzing...", total=len(analyzers))
            result = orchestrator.run_sync(
                analyzers,
                progress=lambda done, total: progress.update(task, completed=done),
                collector=collector
            )
    result.available = available
    
    recommendations = sort_by_priority(filter_by_priority(result.recommendations, priority))
    score = ScoringEngine().score_recommendations(result.recommendations)
    
    if export_format == 'json':
        payload = {
            'magento_root': snapshot.root,
            'profile': selected_profile.value,
            'mode': result.mode,
            'score': score.model_dump(),
            'summary': summarize(recommendations).model_dump(),
            'recommendations': export_rows(recommendations),
            'failed_analyzers': [o.model_dump() for o in result.failed_outcomes],
        }
        text = json.dumps(payload, indent=2)
        if output:
            Path(output).write_text(text, encoding="utf-8")
            console.print(f"[green]Report saved to {output}[/green]")
        else:
            click.echo(text)
        return
    
    if summary:
        display_summary(recommendations)
    else:
        display_recommendations(recommendations, verbose_explanation)
    
    display_dashboard(result, score)


@cli.command()
def profiles():
    """List analyzer profiles and area filters."""
    table = Table(title="Profiles")
    table.add_column("Profile", style="cyan")
    table.add_column("Analyzers", style="green")
    table.add_column("Description")
    
    for profile in Profile:
        keys = sorted(profile.keys) if profile.keys is not None else ["all"]
        table.add_row(profile.value, ", ".join(keys), profile.description)
    
    console.print(table)
    
    areas = Table(title="Areas")
    areas.add_column("Area", style="cyan")
    areas.add_column("Analyzers", style="green")
    for tag, keys in AREA_KEYS.items():
        areas.add_row(tag.value, ", ".join(keys))
    
    console.print(areas)


def add_debug_config(collector: RecommendationCollector, snapshot):
    """Report the loaded configuration as a low priority finding."""
    collector.add(
        "debug",
        "Loaded configuration",
        Priority.LOW,
        f"{len(snapshot.config)} config values, {len(snapshot.modules)} modules, "
        f"mode {snapshot.mode}, enterprise {snapshot.is_enterprise}",
        metadata={"config": dict(snapshot.config)}
    )


def display_recommendations(recommendations: List[Recommendation], verbose: bool = False):
    """Display recommendations in console."""
    if not recommendations:
        console.print("[green]No recommendations. The installation looks well optimized.[/green]")
        return
    
    table = Table(title="Recommendations", show_lines=verbose)
    table.add_column("Priority")
    table.add_column("Area", style="cyan")
    table.add_column("Recommendation", style="bold")
    table.add_column("Details")
    
    for rec in recommendations:
        details = rec.details
        if verbose and rec.explanation:
            details = f"{details}\n\n[dim]{rec.explanation}[/dim]"
        if rec.has_files():
            details = f"{details}\n[dim]Files: {', '.join(rec.files[:5])}[/dim]"
        table.add_row(
            f"[{PRIORITY_STYLES[rec.priority]}]{rec.priority.label}[/]",
            rec.area,
            rec.title,
            details
        )
    
    console.print(table)


def display_summary(recommendations: List[Recommendation]):
    """Display recommendation counts per area."""
    stats = summarize(recommendations)
    
    table = Table(title="Summary")
    table.add_column("Area", style="cyan")
    table.add_column("Recommendations", justify="right")
    for area, count in sorted(stats.by_area.items()):
        table.add_row(area, str(count))
    
    console.print(table)
    console.print(
        f"Total: {stats.total}  "
        f"[bold red]High: {stats.high}[/bold red]  "
        f"[yellow]Medium: {stats.medium}[/yellow]  "
        f"[green]Low: {stats.low}[/green]"
    )


def display_dashboard(result: AnalysisRunResult, score):
    """Score, timing statistics and failed analyzers."""
    lines = [
        f"[bold]Performance score: {score.score:.1f}/100 (grade {score.grade})[/bold]",
        f"Analyzers: {result.executed}/{result.available} in {result.total_ms / 1000:.2f}s ({result.mode})",
    ]
    
    if result.timings:
        lines.append("Top slowest:")
        for name, elapsed in slowest(result.timings):
            lines.append(f"  {name}: {elapsed:.0f}ms")
    else:
        lines.append("[dim]Per-analyzer timings are not available in async mode[/dim]")
    
    console.print(Panel("\n".join(lines), title="Dashboard", border_style="blue"))
    
    if result.failed_outcomes:
        console.print("[yellow]Analyzers that failed:[/yellow]")
        for outcome in result.failed_outcomes:
            console.print(f"  ⚠ {outcome.key}: {outcome.error}")
