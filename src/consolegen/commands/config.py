"""Config commands -- view and modify the user configuration.

Provides the ``consolegen config`` sub-command group for reading and
updating the user's configuration file
(:class:`~consolegen.models.GeneratorConfig`). Settings are persisted in the
consolegen config directory and supply the defaults of ``consolegen
examples``: the enabled documentation files and the assembly mode.
"""

from __future__ import annotations

import json

import typer

from consolegen.exceptions import ConfigError
from consolegen.output import error, info, print_data, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(
    effective: bool = typer.Option(
        False, "--effective", help="Show the merged configuration instead of the user file."
    ),
) -> None:
    """Show current configuration.

    Prints the config directory to stderr and the configuration as JSON to
    stdout. With ``--effective`` the project file and environment variables
    are merged in as ``consolegen examples`` would see them.

    Example::

        consolegen config show
        consolegen config show --effective
    """
    from consolegen.config import get_config_dir, load_global_config, resolve_config

    try:
        config = resolve_config() if effective else load_global_config()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(f"Config directory: {get_config_dir()}")
    print_data(json.dumps(config.model_dump(mode="json"), indent=2))


@config_app.command("set-mode")
def config_set_mode(
    mode: str = typer.Argument(help="Assembly mode: 'run' or 'test'."),
) -> None:
    """Set the default assembly mode.

    Example::

        consolegen config set-mode test
    """
    from consolegen.config import load_global_config, save_global_config
    from consolegen.models import GeneratorConfig

    try:
        config = load_global_config()
        data = config.model_dump(mode="json")
        data["mode"] = mode
        new_config = GeneratorConfig.model_validate(data)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_global_config(new_config)
    success(f"Set mode = {new_config.mode.value}")


@config_app.command("set-enabled")
def config_set_enabled(
    files: list[str] = typer.Argument(help="Documentation files to process."),
) -> None:
    """Replace the list of enabled documentation files.

    Paths are relative to the reference documentation root, as they appear
    in the examples report. The list is stored sorted and deduplicated.

    Example::

        consolegen config set-enabled docs/get.asciidoc docs/delete.asciidoc
    """
    from consolegen.config import load_global_config, save_global_config

    try:
        config = load_global_config()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    new_config = config.model_copy(update={"enabled_files": sorted(set(files))})
    save_global_config(new_config)
    success(f"Enabled {len(new_config.enabled_files)} documentation files")


@config_app.command("reset")
def config_reset() -> None:
    """Reset configuration to defaults.

    Example::

        consolegen config reset
    """
    from consolegen.config import save_global_config
    from consolegen.models import GeneratorConfig

    save_global_config(GeneratorConfig())
    success("Configuration reset to defaults.")
