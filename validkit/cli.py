"""Defines the command-line interface for validkit.

This module uses the `click` library to expose a couple of diagnostic
commands: describing how a validator class is configured, and showing the
process-wide settings validators would be created with.
"""
import importlib
import inspect
import json
import logging
import sys
from typing import Any, Dict, Optional, Tuple, Type

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .core.base_validator import BaseValidator
from .core.exceptions import ValidatorConfigurationError
from .core.settings import ValidatorSettings
from .utils.inline import dump_inline, parse_inline

console = Console()

logger = logging.getLogger(__name__)


def _load_validator_class(target: str) -> Type[BaseValidator]:
    """Imports a validator class from a 'module:Class' or 'module.Class' path.

    Args:
        target: The import path of the class.

    Returns:
        The validator class.

    Raises:
        click.BadParameter: If the class cannot be imported or is not a
            concrete `BaseValidator` subclass.
    """
    if ":" in target:
        module_name, _, class_name = target.partition(":")
    else:
        module_name, _, class_name = target.rpartition(".")
    if not module_name or not class_name:
        raise click.BadParameter(f"Expected 'module:Class', got '{target}'.", param_hint="TARGET")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Could not import module '{module_name}': {e}", param_hint="TARGET") from e

    item = getattr(module, class_name, None)
    if not inspect.isclass(item) or not issubclass(item, BaseValidator):
        raise click.BadParameter(f"'{target}' is not a validator class.", param_hint="TARGET")
    if inspect.isabstract(item):
        raise click.BadParameter(f"'{target}' is abstract and cannot be constructed.", param_hint="TARGET")
    return item


def _parse_assignments(ctx: click.Context, param: click.Parameter, values: Tuple[str, ...]) -> Dict[str, Any]:
    """Parses repeated 'name=value' pairs into a dictionary.

    Option values are read as inline YAML so that 'true' or '10' keep their
    type; messages are always kept as text.
    """
    parsed: Dict[str, Any] = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected 'name=value', got '{item}'.", ctx=ctx, param=param)
        parsed[name.strip()] = parse_inline(value) if param.name == "options" else value
    return parsed


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="validkit")
@click.option("--verbose", is_flag=True, help="Enable verbose output.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
def main(verbose: bool, debug: bool) -> None:
    """Inspect validators and the settings they are built with."""
    log_level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=log_level, format='%(asctime)s - %(levelname)s - %(message)s')
    logger.debug("Debug mode enabled.")


@main.command()
@click.argument("target")
@click.option("--option", "-o", "options", multiple=True, callback=_parse_assignments, help="Option as name=value (repeatable).")
@click.option("--message", "-m", "messages", multiple=True, callback=_parse_assignments, help="Error message as code=text (repeatable).")
@click.option("--indent", type=int, default=0, show_default=True, help="Spaces to prepend to the description.")
@click.option("--table", "show_table", is_flag=True, help="Also show every option and message in a table.")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Path to a settings file.")
def show(target: str, options: Dict[str, Any], messages: Dict[str, str], indent: int, show_table: bool, config_path: Optional[str]) -> None:
    """Construct a validator and describe its configuration.

    TARGET is the import path of a validator class, e.g. 'myapp.validators:EmailValidator'.
    Only options and messages that differ from the defaults are shown.
    """
    validator_class = _load_validator_class(target)
    loaded_settings = ValidatorSettings.load(config_path)

    try:
        validator = validator_class(options, messages, settings=loaded_settings)
    except ValidatorConfigurationError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    click.echo(validator.as_string(indent))

    if show_table:
        _display_validator(validator)


def _display_validator(validator: BaseValidator) -> None:
    """Displays the options and messages of a validator in tables."""
    default_options = validator.get_default_options()
    required = set(validator.get_required_options())

    options_table = Table(title="Options")
    options_table.add_column("Option", style="cyan")
    options_table.add_column("Value")
    options_table.add_column("Default")
    options_table.add_column("Required")
    for name, value in validator.get_options().items():
        default = dump_inline(default_options[name]) if name in default_options else "-"
        options_table.add_row(name, escape(dump_inline(value)), escape(default), "yes" if name in required else "")
    console.print(options_table)

    default_messages = validator.get_default_messages()
    messages_table = Table(title="Messages")
    messages_table.add_column("Code", style="cyan")
    messages_table.add_column("Message")
    for code, message in validator.get_messages().items():
        text = escape(message)
        if default_messages.get(code) != message:
            text = f"[yellow]{text}[/yellow]"
        messages_table.add_row(code, text)
    console.print(messages_table)


@main.command()
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Path to a settings file.")
@click.option("--json", "json_output", is_flag=True, help="Output settings in JSON format.")
def settings(config_path: Optional[str], json_output: bool) -> None:
    """Show the charset and default messages new validators would use."""
    loaded = ValidatorSettings.load(config_path)
    if json_output:
        click.echo(json.dumps(loaded.as_dict(), indent=2))
        return

    console.print(f"Charset: [bold]{loaded.get_charset()}[/bold]")
    table = Table(title="Default Messages")
    table.add_column("Code", style="cyan")
    table.add_column("Message")
    for code, message in loaded.get_default_messages().items():
        table.add_row(code, escape(message))
    console.print(table)


if __name__ == "__main__":
    main()
