"""
Script for creating a new user. For dev/test purposes only.

.. warning: DO NOT USE THIS ON A PRODUCTION DATABASE.

"""

import json

import click

from review import domain
from review.factory import create_web_app
from review.services import accounts, exceptions, util


@click.command()
@click.option('--username', prompt='Your username')
@click.option('--email', prompt='Your email address')
@click.option('--password', prompt='Your password', hide_input=True)
@click.option('--role', prompt='Your role',
              type=click.Choice([r.value for r in domain.Role],
                                case_sensitive=False),
              default=domain.Role.STUDENT.value)
def create_user(username: str, email: str, password: str, role: str) -> None:
    """Create a new user. For dev/test purposes only."""
    app = create_web_app()
    with app.app_context():
        util.create_all()
        try:
            user = accounts.register(username, email, password, role)
        except (exceptions.ConflictError, exceptions.ValidationError) as e:
            raise click.ClickException(str(e)) from e
        click.echo(json.dumps(domain.to_dict(user), indent=2))


if __name__ == '__main__':
    create_user()
