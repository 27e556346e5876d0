"""
Command Line Interface for Ansible Lab.
"""
from typing import Optional, Tuple

import click
from pydantic import ValidationError

from ..MANAGERS.environment_manager import EnvironmentManager
from ..RUNNERS.command_runner import CommandError
from ..UTILS.config_loader import load_config
from ..UTILS.logging_setup import configure_logging
from ..UTILS.output import print_error

DESTROY = "destroy"


def print_usage(prog: str):
    click.echo(f"Usage: {prog} [destroy]", err=True)
    click.echo("  (no args) - Setup Ansible environment", err=True)
    click.echo("  destroy   - Destroy Ansible environment", err=True)


def unknown_argument(args: Tuple[str, ...]) -> Optional[str]:
    """
    Returns the first argument that is not a valid mode, or None.
    Only a single "destroy" is accepted.
    """
    for position, arg in enumerate(args):
        if arg != DESTROY or position > 0:
            return arg
    return None


class LabCommand(click.Command):
    """
    Reports click's own parsing errors the same way as an unknown mode.
    """
    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            print_error(e.format_message())
            print_usage(ctx.find_root().info_name or "ansible-lab")
            ctx.exit(1)


@click.command(cls=LabCommand, context_settings={"ignore_unknown_options": True})
@click.argument('mode', nargs=-1, type=click.UNPROCESSED)
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='YAML file overriding the lab configuration')
@click.option('--verbose', '-v', is_flag=True, help='Trace every external command on stderr')
@click.pass_context
def cli(ctx, mode: Tuple[str, ...], config_file: Optional[str], verbose: bool):
    """
    Ansible Lab - SSH-ready containers for Ansible practice.

    Without arguments, sets up the lab. With "destroy", tears it down.
    """
    prog = ctx.find_root().info_name or "ansible-lab"

    unknown = unknown_argument(mode)
    if unknown is not None:
        print_error(f"Unknown argument: {unknown}")
        print_usage(prog)
        ctx.exit(1)

    configure_logging(verbose)

    try:
        config = load_config(config_file)
    except (ValidationError, ValueError, OSError) as e:
        print_error(f"Invalid configuration: {e}")
        ctx.exit(1)

    manager = EnvironmentManager(config, program_name=prog)
    try:
        if mode:
            manager.destroy()
        else:
            manager.setup()
    except CommandError as e:
        print_error(str(e))
        ctx.exit(e.returncode)
    except OSError as e:
        print_error(str(e))
        ctx.exit(1)


def main():
    """
    Main entry point for the CLI.
    """
    cli(prog_name="ansible-lab")


if __name__ == '__main__':
    main()
