"""Entry point for the PlexPurchases configuration builder.

Usage:
    python -m plexpurchases_builder inspect FILE...   # Show imported configurations
    python -m plexpurchases_builder export FILE...    # Bundle into a ZIP of <id>.yml files
    python -m plexpurchases_builder lint FILE...      # Check files against plugin rules
    python -m plexpurchases_builder new [FILE...]     # Build a configuration interactively
"""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table

from . import catalog
from .builder import ConfigurationDraft, ValidationError, build
from .config import Config, load_config
from .entities import DeliveryType, SubscriptionBasis, Variant
from .exporter import export_archive, write_archive, write_documents
from .importer import ConfigurationImportError, import_directory, import_file
from .lint import ERROR, lint_configurations
from .store import ConfigurationStore

logger = logging.getLogger("plexpurchases_builder")


def setup_logging(log_file: str, log_level: int) -> None:
    """Configure logging to write to both a file and stderr.

    The file handler logs at the configured level; stderr only gets
    WARNING and above so it does not drown the Rich output.
    """
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger("plexpurchases_builder")
    root_logger.setLevel(logging.DEBUG)  # Capture everything; handlers filter
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        "%(asctime)s.%(msecs)03d [%(levelname)-5s] %(name)-35s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)
    root_logger.addHandler(stderr_handler)


def load_into_store(paths: list[Path], store: ConfigurationStore, console: Console) -> int:
    """Import each path (file or directory) into ``store``. Returns the failure count."""
    failures = 0
    for path in paths:
        if path.is_dir():
            report = import_directory(path)
            store.extend(report.accepted)
            console.print(
                f"  [green]OK[/green] {path}: {report.accepted_count} configuration(s) "
                f"from {len(report.files_loaded)} file(s)"
            )
            for failed, message in report.failures.items():
                console.print(f"  [red]FAIL[/red] {failed}: {message}")
            failures += len(report.failures)
            continue

        try:
            result = import_file(path)
        except ConfigurationImportError as e:
            failures += 1
            logger.error("Import of %s failed: %s %s", path, e, e.detail)
            console.print(f"  [red]FAIL[/red] {path}: {e}")
            continue

        store.extend(result.accepted)
        console.print(
            f"  [green]OK[/green] {path}: Successfully imported {result.accepted_count} configuration(s)"
        )
        if result.rejected_count:
            console.print(f"    [dim]{result.rejected_count} entry(ies) skipped: no productId or subscriptionId[/dim]")
    return failures


def _configurations_table(store: ConfigurationStore) -> Table:
    table = Table(title=f"Purchase configurations ({len(store)})", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="bold")
    table.add_column("Type")
    table.add_column("Name")
    table.add_column("Price", justify="right")
    table.add_column("Delivery")
    table.add_column("Details")

    for index, c in enumerate(store):
        if c.is_subscription:
            kind = "[blue]Subscription[/blue]"
            details = c.subscription_basis.value
        else:
            kind = "[green]One-time[/green]"
            details = "repeatable" if c.repeatable_purchase else ""
        if c.dependency:
            details = f"{details} requires {c.dependency_amount}x {c.dependency}".strip()
        if c.is_limited_by_times:
            details = f"{details} limited by purchase count".strip()
        table.add_row(
            str(index), c.identifier, kind, c.name, str(c.price),
            c.delivery_type.value, details,
        )
    return table


def run_inspect(args: argparse.Namespace, config: Config, console: Console) -> int:
    store = ConfigurationStore()
    failures = load_into_store(args.files, store, console)
    console.print()
    if not len(store):
        console.print("[yellow]No configurations loaded.[/yellow]")
        return 1
    console.print(_configurations_table(store))
    duplicates = store.duplicate_identifiers()
    if duplicates:
        console.print(f"[yellow]Duplicate IDs:[/yellow] {', '.join(duplicates)}")
    return 0 if not failures else 1


def run_export(args: argparse.Namespace, config: Config, console: Console) -> int:
    store = ConfigurationStore()
    failures = load_into_store(args.files, store, console)
    console.print()
    if failures:
        console.print("[bold red]Nothing exported:[/bold red] fix the failed imports first.")
        return 1
    if not len(store):
        console.print("[yellow]No configurations to export.[/yellow]")
        return 1

    result = export_archive(list(store))
    path = write_archive(result, Path(args.output) if args.output else config.archive_path)

    console.print(f"  Archive entries:  [green]{result.entry_count}[/green]")
    for filename, times in result.collisions.items():
        console.print(f"  [yellow]'{filename}' was written {times} times; the last one was kept[/yellow]")
    if args.loose:
        written = write_documents(list(store), Path(args.loose))
        console.print(f"  Loose files:      [green]{len(written)}[/green] in {args.loose}")

    console.print()
    console.print(f"[bold green]Done![/bold green] Archive saved to [bold]{path}[/bold]")
    return 0


def run_lint(args: argparse.Namespace, config: Config, console: Console) -> int:
    store = ConfigurationStore()
    failures = load_into_store(args.files, store, console)
    issues = lint_configurations(store)
    console.print()

    if issues:
        table = Table(title="Lint results")
        table.add_column("Severity")
        table.add_column("ID", style="bold")
        table.add_column("Message")
        for issue in issues:
            style = "red" if issue.severity == ERROR else "yellow"
            table.add_row(f"[{style}]{issue.severity}[/{style}]", issue.identifier, issue.message)
        console.print(table)
    else:
        console.print(f"[bold green]No problems found[/bold green] in {len(store)} configuration(s).")

    has_errors = any(i.severity == ERROR for i in issues)
    return 1 if failures or has_errors else 0


def prompt_draft(console: Console, store: ConfigurationStore) -> ConfigurationDraft:
    """Ask for every field of a new configuration."""
    kind = Prompt.ask("Type", choices=["product", "subscription"], default="product", console=console)
    draft = ConfigurationDraft(variant=Variant(kind))

    draft.identifier = Prompt.ask(f"{kind.capitalize()} ID", console=console).strip()
    draft.name = Prompt.ask(f"{kind.capitalize()} name", console=console)
    draft.description = Prompt.ask("Description", default="", console=console)

    price = FloatPrompt.ask("Price", default=0.0, console=console)
    draft.price = int(price) if price.is_integer() else price
    draft.delivery_type = DeliveryType[Prompt.ask(
        "Delivery type", choices=[d.value for d in DeliveryType],
        default=DeliveryType.ONLY_WHEN_PLAYER_ONLINE.value, console=console,
    )]

    if draft.variant is Variant.SUBSCRIPTION:
        draft.subscription_basis = SubscriptionBasis[Prompt.ask(
            "Billing frequency", choices=[b.value for b in SubscriptionBasis],
            default=SubscriptionBasis.MONTHLY.value, console=console,
        )]
    else:
        draft.repeatable_purchase = Confirm.ask(
            "Allow players to purchase this item multiple times?", default=False, console=console
        )

    if len(store):
        console.print(f"[dim]Existing IDs: {', '.join(store.identifiers())}[/dim]")
    draft.dependency = Prompt.ask("Dependency (blank for none)", default="", console=console).strip()
    if draft.dependency:
        draft.dependency_amount = IntPrompt.ask("Dependency amount", default=1, console=console)

    draft.permission = Prompt.ask(
        "Permission (e.g. plexpurchases.coins.times.<purchase_times>)", default="", console=console
    ).strip()
    if draft.permission:
        draft.hide_if_no_permission = Confirm.ask(
            "Hide if the player lacks the permission?", default=False, console=console
        )

    item = Prompt.ask("Display item (blank for none, ? to search)", default="", console=console).strip()
    while item.startswith("?"):
        matches = catalog.search(item[1:])
        console.print(", ".join(m.id for m in matches[:40]) or "[dim]no matches[/dim]")
        item = Prompt.ask("Display item", default="", console=console).strip()
    draft.display_item = item.upper()

    for action_kind in draft.action_kinds:
        commands = []
        console.print(f"[bold]{action_kind}[/bold] actions (blank line to finish), e.g. /broadcast %player_name% purchased")
        while True:
            command = Prompt.ask(f"  {action_kind} #{len(commands) + 1}", default="", console=console)
            if not command:
                break
            commands.append(command)
        draft.actions[action_kind] = commands or [""]

    return draft


def run_new(args: argparse.Namespace, config: Config, console: Console) -> int:
    store = ConfigurationStore()
    if args.files:
        load_into_store(args.files, store, console)

    console.print()
    console.rule("[bold cyan]Add New Configuration")
    while True:
        draft = prompt_draft(console, store)
        try:
            configuration = build(draft, store)
        except ValidationError as e:
            for error in e.errors:
                console.print(f"  [red]- {error}[/red]")
            if Confirm.ask("Start over?", default=True, console=console):
                continue
            return 1
        break

    store.add(configuration)
    output_dir = Path(args.output_dir) if args.output_dir else config.output_dir
    (path,) = write_documents([configuration], output_dir)
    logger.info("Created %s '%s' at %s", configuration.variant.value, configuration.identifier, path)
    console.print(f"[bold green]Saved[/bold green] {path}")
    return 0


COMMANDS = {
    "inspect": run_inspect,
    "export": run_export,
    "lint": run_lint,
    "new": run_new,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plexpurchases-builder",
        description="PlexPurchases configuration builder - import, validate and export purchase YAML files",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    files_help = "YAML files (.yml/.yaml) or directories of them"

    inspect_parser = subparsers.add_parser("inspect", help="Import files and list the configurations")
    inspect_parser.add_argument("files", nargs="+", type=Path, help=files_help)

    export_parser = subparsers.add_parser("export", help="Bundle configurations into a ZIP archive")
    export_parser.add_argument("files", nargs="+", type=Path, help=files_help)
    export_parser.add_argument(
        "--output", "-o",
        help="Archive path (default: PLEXPURCHASES_OUTPUT_DIR/PLEXPURCHASES_ARCHIVE_NAME)",
    )
    export_parser.add_argument("--loose", help="Also write the individual .yml files to this directory")

    lint_parser = subparsers.add_parser("lint", help="Check configurations against the plugin's rules")
    lint_parser.add_argument("files", nargs="+", type=Path, help=files_help)

    new_parser = subparsers.add_parser("new", help="Create a configuration interactively")
    new_parser.add_argument("files", nargs="*", type=Path, help="Existing configurations (for dependencies)")
    new_parser.add_argument("--output-dir", help="Where to write <id>.yml (default: PLEXPURCHASES_OUTPUT_DIR)")

    return parser


def run(argv: list[str] | None = None, console: Console | None = None) -> int:
    """Parse arguments and run one command. Returns exit code."""
    args = build_parser().parse_args(argv)
    console = console or Console()

    config = load_config()
    setup_logging(str(config.log_file), config.numeric_log_level)
    logger.info("Running '%s' (output dir: %s)", args.command, config.output_dir)

    return COMMANDS[args.command](args, config, console)


def main() -> None:
    """Synchronous entry point."""
    try:
        exit_code = run()
    except KeyboardInterrupt:
        print("\nInterrupted.")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
