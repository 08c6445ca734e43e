"""Load a small sample data set into an empty database."""

from datetime import timedelta
import logging

from .. import domain
from . import accounts, papers, util
from .models import DBPaper, DBUser

logger = logging.getLogger(__name__)

SAMPLE_PASSWORD = 'password'

SAMPLE_USERS = [
    ('author1', 'author@example.com', domain.Role.AUTHOR),
    ('committee1', 'committee@example.com', domain.Role.COMMITTEE),
]

SAMPLE_PAPERS = [
    {
        'title': 'Introduction to Machine Learning',
        'abstract_text': 'This paper provides an introduction to machine'
                         ' learning concepts and algorithms.',
        'content': 'Machine learning is a subset of artificial intelligence'
                   ' that enables systems to learn from data...',
        'tags': ['machine-learning', 'artificial-intelligence'],
        'published_days_ago': 10,
    },
    {
        'title': 'Deep Learning Applications in Computer Vision',
        'abstract_text': 'An exploration of deep learning techniques applied'
                         ' to computer vision problems.',
        'content': 'Deep learning has revolutionized computer vision with'
                   ' convolutional neural networks...',
        'tags': ['deep-learning', 'computer-vision'],
        'published_days_ago': None,
    },
    {
        'title': 'Natural Language Processing with Transformers',
        'abstract_text': 'This paper discusses transformer architectures for'
                         ' natural language processing tasks.',
        'content': 'Transformers have become the dominant architecture for'
                   ' NLP since the introduction of attention mechanisms...',
        'tags': ['nlp', 'transformers'],
        'published_days_ago': 5,
    },
]
"""Two published by ``committee1``, one left as a draft."""


def seed() -> None:
    """
    Create the roles, the sample users and, if there are none, papers.

    Users are only added if their username is free, and papers only if the
    paper table is empty, so this can be run against the same database any
    number of times.
    """
    for role in domain.Role:
        accounts.ensure_role(role)

    for username, email, role in SAMPLE_USERS:
        if accounts.username_exists(username):
            continue
        accounts.register(username, email, SAMPLE_PASSWORD, role.value)
        logger.info('Created sample user: %s', username)

    with util.transaction() as session:
        if session.query(DBPaper.id).first() is not None:
            logger.debug('Papers already present; not loading samples')
            return
        author = session.query(DBUser) \
            .filter(DBUser.username == SAMPLE_USERS[0][0]).one()
        committee = session.query(DBUser) \
            .filter(DBUser.username == SAMPLE_USERS[1][0]).one()
        for sample in SAMPLE_PAPERS:
            db_paper = DBPaper(
                title=sample['title'],
                abstract_text=sample['abstract_text'],
                content=sample['content'],
                author=author,
                tags=[papers.ensure_tag(session, name)
                      for name in sample['tags']]
            )
            if sample['published_days_ago'] is not None:
                db_paper.published_by_committee = committee
                db_paper.publication_date = \
                    util.now() - timedelta(days=sample['published_days_ago'])
            session.add(db_paper)
    logger.info('Loaded %i sample papers', len(SAMPLE_PAPERS))
