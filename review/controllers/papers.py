"""
Controllers for submitting, publishing and reading papers.

Whether the acting user may create or publish is decided before these are
called (see :func:`review.authorization.scoped`). Papers are rendered with
the camel-cased keys that API clients expect.
"""

from typing import Any, Dict, List, Optional
from http import HTTPStatus
from datetime import datetime
import logging

from wtforms import FieldList, Form, StringField
from wtforms.validators import DataRequired, Length

from retry import retry

from .. import domain
from ..services import papers
from ..services.exceptions import Unavailable, AuthorNotFound, \
    CommitteeMemberNotFound, PaperNotFound, AlreadyPublished, NoSuchUser
from .util import ResponseData, form_error, message, only_strings

logger = logging.getLogger(__name__)

PAPER_FIELDS = ('title', 'abstractText', 'content')

PUBLISHED = message('Paper published successfully!')
NO_SUCH_PAPER = message('Error: Paper not found!')
NO_SUCH_AUTHOR = message('Error: Author not found!')
NO_SUCH_COMMITTEE_MEMBER = message('Error: Committee member not found!')
NO_SUCH_USER = message('Error: User not found!')
ALREADY_PUBLISHED = message('Error: Paper is already published!')
BAD_TAGS = message('Error: Tags must be a list of names!')
CANT_CREATE_PAPER = message('Error: Failed to create paper!')
CANT_PUBLISH_PAPER = message('Error: Failed to publish paper!')


class PaperForm(Form):
    """A new paper."""

    title = StringField('Title', validators=[
        DataRequired(message='Title is required!'),
        Length(max=200, message='Title must be at most 200 characters!')
    ])
    abstract_text = StringField('Abstract', validators=[
        DataRequired(message='Abstract is required!')
    ])
    content = StringField('Content', validators=[
        DataRequired(message='Content is required!')
    ])
    tags = FieldList(StringField('Tag', validators=[
        DataRequired(message='Tag names must not be blank!'),
        Length(max=50, message='Tag names must be at most 50 characters!')
    ]))


def create_paper(payload: Optional[dict],
                 author_username: str) -> ResponseData:
    """
    Create a new, unpublished paper.

    Parameters
    ----------
    payload : dict
        Should include `title`, `abstractText` and `content`, and may include
        a list of `tags`.
    author_username : str
        The author, already known to hold the AUTHOR role.

    Returns
    -------
    dict
        A `message` and, on success, the `id` of the new paper.
    int
        Status code: 200 on success, 400 for bad input, 404 if the author
        does not exist.
    dict
        Headers to add to the response.

    """
    tags = payload.get('tags') if isinstance(payload, dict) else None
    if tags is None:
        tags = []
    if not isinstance(tags, list) \
            or not all(isinstance(tag, str) for tag in tags):
        return BAD_TAGS, HTTPStatus.BAD_REQUEST, {}

    data = only_strings(payload, PAPER_FIELDS)
    form = PaperForm(data={
        'title': data['title'],
        'abstract_text': data['abstractText'],
        'content': data['content'],
        'tags': tags
    })
    if not form.validate():
        logger.debug('Paper data is not valid: %s', form.errors)
        return form_error(form), HTTPStatus.BAD_REQUEST, {}

    try:
        paper = _do_create(form.title.data, form.abstract_text.data,
                           form.content.data, form.tags.data,
                           author_username)
    except AuthorNotFound:
        return NO_SUCH_AUTHOR, HTTPStatus.NOT_FOUND, {}
    except Exception:
        logger.exception('Error creating paper for %s', author_username)
        return CANT_CREATE_PAPER, HTTPStatus.INTERNAL_SERVER_ERROR, {}
    response_data = {
        'message': f'Paper created successfully with ID: {paper.paper_id}',
        'id': paper.paper_id
    }
    return response_data, HTTPStatus.OK, {}


def publish_paper(paper_id: int, committee_username: str) -> ResponseData:
    """
    Publish a paper.

    Parameters
    ----------
    paper_id : int
    committee_username : str
        The publisher, already known to hold the COMMITTEE role.

    Returns
    -------
    dict
        A `message` describing the outcome.
    int
        Status code: 200 on success, 404 if the paper or the committee
        member does not exist, 409 if the paper is already published.
    dict
        Headers to add to the response.

    """
    try:
        _do_publish(paper_id, committee_username)
    except PaperNotFound:
        return NO_SUCH_PAPER, HTTPStatus.NOT_FOUND, {}
    except CommitteeMemberNotFound:
        return NO_SUCH_COMMITTEE_MEMBER, HTTPStatus.NOT_FOUND, {}
    except AlreadyPublished:
        return ALREADY_PUBLISHED, HTTPStatus.CONFLICT, {}
    except Exception:
        logger.exception('Error publishing paper %s', paper_id)
        return CANT_PUBLISH_PAPER, HTTPStatus.INTERNAL_SERVER_ERROR, {}
    return PUBLISHED, HTTPStatus.OK, {}


def search_papers(keyword: Optional[str]) -> ResponseData:
    """Find papers by keyword; published papers if there is none."""
    return _listing(papers.search(keyword))


def list_published() -> ResponseData:
    """Get published papers, newest first."""
    return _listing(papers.list_published())


def list_unpublished() -> ResponseData:
    """Get draft papers."""
    return _listing(papers.list_unpublished())


def list_all() -> ResponseData:
    """Get every paper."""
    return _listing(papers.list_all())


def list_by_author(username: str) -> ResponseData:
    """Get the papers written by ``username``."""
    try:
        return _listing(papers.list_by_author(username))
    except NoSuchUser:
        return NO_SUCH_USER, HTTPStatus.NOT_FOUND, {}


def list_by_committee(username: str) -> ResponseData:
    """Get the papers published by ``username``."""
    try:
        return _listing(papers.list_published_by_committee(username))
    except NoSuchUser:
        return NO_SUCH_USER, HTTPStatus.NOT_FOUND, {}


def get_paper(paper_id: int) -> ResponseData:
    """Get a single paper."""
    paper = papers.get_by_id(paper_id)
    if paper is None:
        return NO_SUCH_PAPER, HTTPStatus.NOT_FOUND, {}
    return paper_to_json(paper), HTTPStatus.OK, {}


def paper_to_json(paper: domain.Paper) -> Dict[str, Any]:
    """Render a paper the way API clients expect it."""
    return {
        'id': paper.paper_id,
        'title': paper.title,
        'abstractText': paper.abstract_text,
        'content': paper.content,
        'publicationDate': _isoformat(paper.publication_date),
        'author': user_to_json(paper.author),
        'publishedByCommittee': (
            user_to_json(paper.published_by_committee)
            if paper.published_by_committee is not None else None
        ),
        'tags': [
            {'id': tag.tag_id, 'name': tag.name,
             'description': tag.description}
            for tag in paper.tags
        ],
        'createdAt': _isoformat(paper.created_at),
        'updatedAt': _isoformat(paper.updated_at)
    }


def user_to_json(user: domain.User) -> Dict[str, Any]:
    return {
        'id': user.user_id,
        'username': user.username,
        'email': user.email,
        'role': user.role.value if user.role is not None else None
    }


def _listing(found: List[domain.Paper]) -> ResponseData:
    return [paper_to_json(paper) for paper in found], HTTPStatus.OK, {}


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


# These are broken out to add retry logic.
@retry(Unavailable, tries=3, delay=0.5, backoff=2)
def _do_create(title: str, abstract_text: str, content: str,
               tag_names: List[str], author_username: str) -> domain.Paper:
    return papers.create(title, abstract_text, content, tag_names,
                         author_username)


@retry(Unavailable, tries=3, delay=0.5, backoff=2)
def _do_publish(paper_id: int, committee_username: str) -> domain.Paper:
    return papers.publish(paper_id, committee_username)
