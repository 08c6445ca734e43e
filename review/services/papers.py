"""Provide methods for submitting, publishing and finding papers."""

from typing import Iterable, List, Optional
import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query

from .. import domain
from . import util
from .exceptions import AuthorNotFound, CommitteeMemberNotFound, \
    PaperNotFound, AlreadyPublished, NoSuchUser
from .models import DBPaper, DBTag, DBUser

logger = logging.getLogger(__name__)


def create(title: str, abstract_text: str, content: str,
           tag_names: Iterable[str], author_username: str) -> domain.Paper:
    """
    Create a new, unpublished paper.

    Tags are matched by exact name; any that do not exist yet are created.
    A name given more than once is attached once.

    Parameters
    ----------
    title : str
    abstract_text : str
    content : str
    tag_names : iterable
        Names of tags to attach to the paper.
    author_username : str
        Username of the author. Whether that user may author papers is
        decided by the caller.

    Returns
    -------
    :class:`.domain.Paper`

    Raises
    ------
    :class:`.AuthorNotFound`
        Raised if there is no user with ``author_username``.

    """
    logger.info('Creating paper with title: %s for author: %s',
                title, author_username)
    try:
        paper = _create(title, abstract_text, content, tag_names,
                        author_username)
    except IntegrityError:  # A new tag was added concurrently.
        logger.debug('Tag conflict creating paper, trying again')
        paper = _create(title, abstract_text, content, tag_names,
                        author_username)
    logger.info('Paper created with ID: %s', paper.paper_id)
    return paper


def _create(title: str, abstract_text: str, content: str,
            tag_names: Iterable[str], author_username: str) -> domain.Paper:
    with util.transaction() as session:
        author = _get_user(session, author_username, AuthorNotFound)
        db_paper = DBPaper(
            title=title,
            abstract_text=abstract_text,
            content=content,
            author=author,
            tags=[ensure_tag(session, name)
                  for name in _unique(tag_names or [])]
        )
        session.add(db_paper)
        session.commit()
        return db_paper.to_domain()


def publish(paper_id: int, committee_username: str) -> domain.Paper:
    """
    Publish a paper on behalf of a committee member.

    The publisher and the publication date are set together, with the paper
    row locked for the duration of the transaction where the database
    supports it.

    Parameters
    ----------
    paper_id : int
    committee_username : str
        Username of the committee member. Whether that user may publish is
        decided by the caller.

    Returns
    -------
    :class:`.domain.Paper`
        The paper in its published state.

    Raises
    ------
    :class:`.PaperNotFound`
    :class:`.CommitteeMemberNotFound`
    :class:`.AlreadyPublished`
        Raised if the paper has been published before. Publication is final.

    """
    logger.info('Publishing paper ID: %s by committee member: %s',
                paper_id, committee_username)
    with util.transaction() as session:
        db_paper: Optional[DBPaper] = session.query(DBPaper) \
            .filter(DBPaper.id == paper_id) \
            .with_for_update(of=DBPaper) \
            .first()
        if db_paper is None:
            logger.warning('Paper not found: %s', paper_id)
            raise PaperNotFound(f'Paper {paper_id} does not exist')
        publisher = _get_user(session, committee_username,
                              CommitteeMemberNotFound)
        if db_paper.publication_date is not None \
                or db_paper.published_by_committee_id is not None:
            logger.warning('Paper %s is already published', paper_id)
            raise AlreadyPublished(f'Paper {paper_id} is already published')
        db_paper.published_by_committee = publisher
        db_paper.publication_date = util.now()
        session.add(db_paper)
        session.commit()
        paper = db_paper.to_domain()
    logger.info('Paper ID: %s published', paper_id)
    return paper


def search(keyword: Optional[str] = None) -> List[domain.Paper]:
    """
    Find papers whose title or abstract contains ``keyword``.

    Without a keyword (``None``, empty or only whitespace) this is the same
    as :func:`list_published`. With one, drafts are included too. Wildcard
    characters in the keyword match literally.
    """
    if keyword is None or not keyword.strip():
        logger.debug('No keyword; listing published papers')
        return list_published()
    logger.debug('Searching papers with keyword: %s', keyword)
    with util.transaction() as session:
        query = _papers(session).filter(or_(
            DBPaper.title.contains(keyword, autoescape=True),
            DBPaper.abstract_text.contains(keyword, autoescape=True)
        ))
        return [p.to_domain() for p in query.order_by(DBPaper.id)]


def list_published() -> List[domain.Paper]:
    """Get published papers, most recently published first."""
    with util.transaction() as session:
        query = _papers(session) \
            .filter(DBPaper.publication_date.isnot(None)) \
            .order_by(DBPaper.publication_date.desc(), DBPaper.id.desc())
        return [p.to_domain() for p in query]


def list_unpublished() -> List[domain.Paper]:
    """Get papers that are still drafts."""
    with util.transaction() as session:
        query = _papers(session) \
            .filter(DBPaper.publication_date.is_(None)) \
            .order_by(DBPaper.id)
        return [p.to_domain() for p in query]


def list_by_author(username: str) -> List[domain.Paper]:
    """
    Get all papers written by a user.

    Raises
    ------
    :class:`.NoSuchUser`

    """
    with util.transaction() as session:
        author = _get_user(session, username, NoSuchUser)
        query = _papers(session) \
            .filter(DBPaper.author_id == author.id) \
            .order_by(DBPaper.id)
        return [p.to_domain() for p in query]


def list_published_by_committee(username: str) -> List[domain.Paper]:
    """
    Get all papers published by a committee member.

    Raises
    ------
    :class:`.NoSuchUser`

    """
    with util.transaction() as session:
        member = _get_user(session, username, NoSuchUser)
        query = _papers(session) \
            .filter(DBPaper.published_by_committee_id == member.id) \
            .order_by(DBPaper.publication_date.desc(), DBPaper.id.desc())
        return [p.to_domain() for p in query]


def get_by_id(paper_id: int) -> Optional[domain.Paper]:
    """Get a paper by its ID, or ``None``."""
    with util.transaction() as session:
        db_paper = _papers(session).filter(DBPaper.id == paper_id).first()
        if db_paper is None:
            return None
        return db_paper.to_domain()


def list_all() -> List[domain.Paper]:
    """Get every paper, published or not."""
    with util.transaction() as session:
        return [p.to_domain() for p in _papers(session).order_by(DBPaper.id)]


def ensure_tag(session, name: str) -> DBTag:
    """
    Get the tag called ``name``, adding it to ``session`` if it is new.

    Nothing is committed here; a new tag is written along with whatever
    the caller commits.
    """
    db_tag = session.query(DBTag).filter(DBTag.name == name).first()
    if db_tag is None:
        logger.debug('Creating new tag: %s', name)
        db_tag = DBTag(name=name)
        session.add(db_tag)
    return db_tag


def _papers(session) -> Query:
    return session.query(DBPaper)


def _get_user(session, username: str, exc: type) -> DBUser:
    db_user: Optional[DBUser] = session.query(DBUser) \
        .filter(DBUser.username == username) \
        .first()
    if db_user is None:
        logger.warning('User not found: %s', username)
        raise exc(f'User {username} does not exist')
    return db_user


def _unique(names: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for name in names:
        if name not in seen:
            seen.append(name)
    return seen
