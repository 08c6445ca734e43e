"""Database models for users, roles, papers and tags."""

from datetime import datetime

from pytz import UTC
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from flask_sqlalchemy import SQLAlchemy

from .. import domain

db: SQLAlchemy = SQLAlchemy()


def _now() -> datetime:
    return datetime.now(tz=UTC)


paper_tags = db.Table(
    'paper_tags',
    Column('paper_id', ForeignKey('papers.id'), primary_key=True),
    Column('tag_id', ForeignKey('tags.id'), primary_key=True),
)
"""Association between papers and tags. Owned by the paper side."""


class DBRole(db.Model):  # type: ignore
    """
    Role lookup table. Rows are created the first time a role is used.

    +-------+-------------+------+-----+---------+----------------+
    | Field | Type        | Null | Key | Default | Extra          |
    +-------+-------------+------+-----+---------+----------------+
    | id    | int         | NO   | PRI | NULL    | auto_increment |
    | name  | varchar(20) | NO   | UNI | NULL    |                |
    +-------+-------------+------+-----+---------+----------------+
    """

    __tablename__ = 'roles'

    id = Column(Integer, primary_key=True)
    name = Column(String(20), nullable=False, unique=True)

    def to_domain(self) -> domain.Role:
        return domain.Role(self.name)


class DBUser(db.Model):  # type: ignore
    """
    Registered users.

    +----------+--------------+------+-----+---------+----------------+
    | Field    | Type         | Null | Key | Default | Extra          |
    +----------+--------------+------+-----+---------+----------------+
    | id       | int          | NO   | PRI | NULL    | auto_increment |
    | username | varchar(20)  | NO   | UNI | NULL    |                |
    | email    | varchar(50)  | NO   | UNI | NULL    |                |
    | password | varchar(120) | NO   |     | NULL    |                |
    | role_id  | int          | YES  | MUL | NULL    |                |
    +----------+--------------+------+-----+---------+----------------+
    """

    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    username = Column(String(20), nullable=False, unique=True, index=True)
    email = Column(String(50), nullable=False, unique=True)
    password = Column(String(120), nullable=False)
    """Password hash; see :mod:`review.services.passwords`."""
    role_id = Column(ForeignKey('roles.id'), nullable=True, index=True)

    role = relationship('DBRole', lazy='joined')

    def to_domain(self) -> domain.User:
        return domain.User(
            user_id=self.id,
            username=self.username,
            email=self.email,
            role=self.role.to_domain() if self.role is not None else None
        )


class DBTag(db.Model):  # type: ignore
    """Paper labels, created on first use."""

    __tablename__ = 'tags'

    id = Column(Integer, primary_key=True)
    name = Column(String(50), nullable=False, unique=True)
    description = Column(String(255), nullable=True)

    def to_domain(self) -> domain.Tag:
        return domain.Tag(tag_id=self.id, name=self.name,
                          description=self.description)


class DBPaper(db.Model):  # type: ignore
    """
    Submitted papers.

    A paper is published when ``publication_date`` and
    ``published_by_committee_id`` are set; they are only ever set together.
    """

    __tablename__ = 'papers'

    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False)
    abstract_text = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    publication_date = Column(DateTime, nullable=True, index=True)
    author_id = Column(ForeignKey('users.id'), nullable=False, index=True)
    published_by_committee_id = Column(ForeignKey('users.id'), nullable=True,
                                       index=True)
    created_at = Column(DateTime, nullable=False, default=_now)
    updated_at = Column(DateTime, nullable=False, default=_now, onupdate=_now)

    author = relationship('DBUser', foreign_keys=[author_id], lazy='joined')
    published_by_committee = relationship(
        'DBUser',
        foreign_keys=[published_by_committee_id],
        lazy='joined'
    )
    tags = relationship('DBTag', secondary=paper_tags, lazy='selectin',
                        order_by='DBTag.name')

    def to_domain(self) -> domain.Paper:
        publisher = self.published_by_committee
        return domain.Paper(
            paper_id=self.id,
            title=self.title,
            abstract_text=self.abstract_text,
            content=self.content,
            author=self.author.to_domain(),
            published_by_committee=(
                publisher.to_domain() if publisher is not None else None
            ),
            publication_date=self.publication_date,
            tags=[tag.to_domain() for tag in self.tags],
            created_at=self.created_at,
            updated_at=self.updated_at
        )
