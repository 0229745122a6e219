"""Flask CLI commands for bootstrapping administrator accounts."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from storefront.models.user import Role
from storefront.uow import SQLAlchemyUnitOfWork

LOGGER = logging.getLogger(__name__)


@click.group("users")
def users_cli() -> None:
    """Manage user accounts from the command line."""


@users_cli.command("create-admin")
@click.option("--email", required=True, help="Login email of the administrator.")
@click.option("--name", default=None, help="Display name (defaults to the email local part).")
@click.password_option("--password", help="Initial password.")
@with_appcontext
def create_admin_command(email: str, name: str | None, password: str) -> None:
    """Create an administrator, or promote the existing account with that email."""
    with SQLAlchemyUnitOfWork() as uow:
        user = uow.users.get_by_email(email)
        if user is None:
            user = uow.users.add(
                uow.users.model(
                    email=email,
                    name=name or email.split("@", 1)[0],
                    password=password,
                    role=Role.ADMIN,
                )
            )
            action = "created"
        else:
            uow.users.assign_updates(user, {"role": Role.ADMIN, "password": password})
            action = "promoted"
        user_id = user.id

    LOGGER.info(
        "users.admin_%s", action, extra={"event": f"users.admin_{action}", "user_id": user_id}
    )
    click.echo(f"Administrator {action}: id={user_id} email={email.strip().lower()}")


@users_cli.command("set-role")
@click.argument("email")
@click.argument("role", type=click.Choice([r.value for r in Role], case_sensitive=False))
@with_appcontext
def set_role_command(email: str, role: str) -> None:
    """Change the role of the account registered under EMAIL."""
    with SQLAlchemyUnitOfWork() as uow:
        user = uow.users.get_by_email(email)
        if user is None:
            raise click.ClickException(f"No user with email {email!r}")
        uow.users.assign_updates(user, {"role": Role.parse(role)})
        user_id = user.id

    click.echo(f"Role of user {user_id} set to {Role.parse(role).value}")
