"""
Command-line entry point for the bank ledger.

Settings come from the environment / .env (see bank_ledger.config);
options given here override them for this run. The command configures
logging, loads the ledger, and hands control to the interactive menu.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from bank_ledger.audit import configure_logging
from bank_ledger.config import get_settings, validate_all_settings
from bank_ledger.shell import LedgerShell
from bank_ledger.store import create_ledger_store


app = typer.Typer(add_completion=False, help="Single-user bank ledger with a text menu.")


@app.command()
def run(
    data_dir: Annotated[
        Optional[Path],
        typer.Option(help="Directory holding the ledger files."),
    ] = None,
    accounts_file: Annotated[
        Optional[str],
        typer.Option(help="Account collection file name (inside the data directory)."),
    ] = None,
    transactions_file: Annotated[
        Optional[str],
        typer.Option(help="Transaction log file name (inside the data directory)."),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(help="DEBUG, INFO, WARNING, ERROR or CRITICAL."),
    ] = None,
    log_file: Annotated[
        Optional[Path],
        typer.Option(help="Write logs to this file instead of stderr."),
    ] = None,
) -> None:
    """Open the ledger and run the interactive menu."""
    checks = validate_all_settings()
    failed = [name for name, ok in checks.items() if ok is False]
    if failed:
        for name in failed:
            typer.echo(f"Invalid {name} settings: {checks[f'{name}_error']}", err=True)
        raise typer.Exit(code=2)

    settings = get_settings()
    storage_settings = settings.storage
    app_settings = settings.app

    configure_logging(
        level=(log_level or app_settings.effective_log_level),
        log_file=log_file or app_settings.log_file,
        json_output=app_settings.log_json,
    )

    directory = data_dir or storage_settings.data_dir
    store = create_ledger_store(
        accounts_path=directory / (accounts_file or storage_settings.accounts_file),
        transactions_path=directory / (transactions_file or storage_settings.transactions_file),
        account_id_floor=app_settings.account_id_floor,
    )

    raise typer.Exit(code=LedgerShell(store).run())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
