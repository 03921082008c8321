"""
Command-line interface for the BookSmart patcher.
"""

import json
import logging

import click
from pathlib import Path

from . import __version__
from .db import LoadOrderDB
from .errors import BookSmartError
from .patch import PatchMod
from .patcher import build_quest_book_index, run_patch
from .records import PatchReport
from .settings import Settings, load_settings


def _load(settings_path: Path) -> Settings:
    try:
        return load_settings(settings_path)
    except BookSmartError as e:
        raise click.ClickException(str(e)) from e


def _run(db_path: Path, settings: Settings, patch: PatchMod) -> PatchReport:
    try:
        with LoadOrderDB(db_path) as db:
            return run_patch(db, settings, patch)
    except BookSmartError as e:
        raise click.ClickException(str(e)) from e


def _echo_report(report: PatchReport, as_json: bool):
    if as_json:
        click.echo(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
        return
    for i in report.instructions:
        click.echo(f"{i.form_key}: '{i.old_name}' -> '{i.new_name}'")
    click.echo(f"Scanned {report.books_scanned} books, relabelled {report.books_patched}")


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', count=True, help='-v for progress, -vv for debug output')
def main(verbose: int):
    """BookSmart - label skill, map-marker and quest books."""
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(message)s")


settings_option = click.option(
    '--settings', '-s', 'settings_path', type=click.Path(path_type=Path),
    default=Path('settings.json'), show_default=True, help='Path to settings.json')
db_option = click.option(
    '--db', '-d', 'db_path', type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True, help='Path to load-order database')


@main.command()
@db_option
@settings_option
@click.option('--output', '-o', type=click.Path(dir_okay=False, writable=True, path_type=Path),
              required=True, help='Path to output patch file')
@click.option('--name', default='BookSmart.esp', show_default=True, help='Patch plugin name')
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
def run(db_path: Path, settings_path: Path, output: Path, name: str, as_json: bool):
    """Relabel books and write the patch."""
    settings = _load(settings_path)
    patch = PatchMod(name)
    report = _run(db_path, settings, patch)
    try:
        patch.write(output)
    except OSError as e:
        raise click.ClickException(f"Cannot write patch to {output}: {e.strerror or e}") from e
    _echo_report(report, as_json)
    if not as_json:
        click.echo(f"Patch written to: {output}")


@main.command()
@db_option
@settings_option
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
def preview(db_path: Path, settings_path: Path, as_json: bool):
    """Show the new names without writing a patch."""
    settings = _load(settings_path)
    report = _run(db_path, settings, PatchMod())
    _echo_report(report, as_json)


@main.command()
@click.argument('form_key')
@db_option
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
def quests(form_key: str, db_path: Path, as_json: bool):
    """List the quests that reference a book."""
    with LoadOrderDB(db_path) as db:
        index = build_quest_book_index(db, Settings(addQuestLabels=True))
        quest_keys = index.quests_for(form_key)
        found = [{"formKey": q, "name": db.get_quest_name(q)} for q in quest_keys]

    if as_json:
        click.echo(json.dumps({"book": form_key, "quests": found}, ensure_ascii=False, indent=2))
        return
    if not found:
        click.echo(f"{form_key} is not referenced by any quest")
        return
    for quest in found:
        click.echo(f"{quest['formKey']}: {quest['name'] or ''}")


@main.command(name='settings')
@settings_option
def show_settings(settings_path: Path):
    """Print the effective settings."""
    settings = _load(settings_path)
    click.echo(json.dumps(settings.to_dict(), ensure_ascii=False, indent=2))


if __name__ == '__main__':
    main()
