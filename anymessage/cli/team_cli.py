# anymessage/cli/team_cli.py
import typer
from typing_extensions import Annotated

from .utils_cli import make_api_request

app = typer.Typer(
    name="team",
    help="Inspect AnyMessage teams via the API.",
    no_args_is_help=True
)


@app.command("available")
def team_available(
    subdomain: Annotated[
        str,
        typer.Argument(help="Subdomain to check, e.g. 'acme'.")
    ]
):
    """Check whether a team subdomain is still free."""
    data = make_api_request("GET", "/team/available", params_payload={"subdomain": subdomain})
    if data and data.get("available"):
        typer.secho(f"'{subdomain}' is available.", fg=typer.colors.GREEN)
    else:
        typer.secho(f"'{subdomain}' is taken.", fg=typer.colors.YELLOW)


if __name__ == "__main__":
    app()
