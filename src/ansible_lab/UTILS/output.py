"""
Coloured status lines for the console.
"""
import click


def print_info(message: str):
    click.echo(f"{click.style('[INFO]', fg='blue')} {message}")


def print_success(message: str):
    click.echo(f"{click.style('[SUCCESS]', fg='green')} {message}")


def print_warning(message: str):
    click.echo(f"{click.style('[WARNING]', fg='yellow', bold=True)} {message}")


def print_error(message: str):
    """Errors go to stderr so they survive stdout redirection."""
    click.echo(f"{click.style('[ERROR]', fg='red')} {message}", err=True)


def heading(text: str, color: str = "green") -> str:
    return click.style(text, fg=color)
