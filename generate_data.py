"""Generate synthetic data for testing and development purposes."""

import random
from typing import List

import click
from mimesis import Person, Text
from mimesis.locales import Locale

from review import domain
from review.factory import create_web_app
from review.services import accounts, exceptions, papers, util

PASSWORD = 'password'


def _tags(text: Text) -> List[str]:
    return [word.lower() for word in text.words(quantity=random.randint(0, 3))]


@click.command()
@click.option('--count', default=50, help='Number of users to create.')
@click.option('--papers-per-author', default=3)
def generate(count: int, papers_per_author: int) -> None:
    """Fill the configured database with random users and papers."""
    app = create_web_app()
    person = Person(Locale.EN)
    text = Text(Locale.EN)
    with app.app_context():
        util.create_all()
        authors: List[str] = []
        committee: List[str] = []
        for i in range(count):
            role = random.choice(list(domain.Role))
            username = f'{person.username(mask="l_d")}{i}'[:20]
            try:
                accounts.register(username, f'{username}@example.com',
                                  PASSWORD, role.value)
            except exceptions.ConflictError:
                continue
            if role is domain.Role.AUTHOR:
                authors.append(username)
            elif role is domain.Role.COMMITTEE:
                committee.append(username)

        created = 0
        for author in authors:
            for _ in range(random.randint(0, papers_per_author)):
                paper = papers.create(
                    text.title()[:200],
                    text.text(quantity=3),
                    text.text(quantity=10),
                    _tags(text),
                    author
                )
                created += 1
                if committee and random.randint(0, 100) < 60:
                    papers.publish(paper.paper_id, random.choice(committee))
        click.echo(f'Created {len(authors) + len(committee)} authors and '
                   f'committee members, and {created} papers')


if __name__ == '__main__':
    generate()
