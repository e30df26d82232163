# anymessage/cli/user_cli.py
import typer
from typing_extensions import Annotated

from .utils_cli import make_api_request

app = typer.Typer(
    name="user",
    help="Register AnyMessage users on behalf of the host application.",
    no_args_is_help=True
)


@app.command("register")
def register_user(
    email: Annotated[
        str,
        typer.Argument(help="Email address of the user to register.")
    ]
):
    """Register a user (or rotate their token) and print the new bearer token."""
    make_api_request(
        "POST",
        "/auth/register-user",
        json_payload={"email": email},
        send_host_app_secret=True
    )


if __name__ == "__main__":
    app()
