# anymessage/cli/main_cli.py
import typer
from . import team_cli
from . import user_cli
from ..utils.security import generate_fernet_key

app = typer.Typer(
    name="anymessage",
    help="AnyMessage API Command Line Interface.",
    no_args_is_help=True
)

app.add_typer(team_cli.app, name="team")
app.add_typer(user_cli.app, name="user")


@app.callback()
def main_callback():
    """
    AnyMessage API CLI.
    Use 'anymessage team --help' or 'anymessage user --help' for commands.
    """
    pass


@app.command("generate-key")
def generate_key():
    """Generate a Fernet key for ENCRYPTION_KEY."""
    typer.echo("Generated Fernet Key:")
    typer.echo(generate_fernet_key())
    typer.echo("Add this to your .env file as ENCRYPTION_KEY")


def cli_entry_point():
    """Entry point function for console script registration in pyproject.toml"""
    app()


if __name__ == "__main__":
    cli_entry_point()
