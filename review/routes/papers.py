"""Provides routes for papers."""

from flask import Blueprint, make_response, request, Response
from flask.json import jsonify

from .. import scopes
from ..authorization import scoped
from ..controllers import papers

blueprint = Blueprint('papers', __name__, url_prefix='/api/papers')


@blueprint.route('/create', methods=['POST'])
@scoped(scopes.CREATE_PAPER, 'authorUsername')
def create_paper() -> tuple:
    """Submit a new paper as its author."""
    payload = request.get_json(force=True, silent=True)
    author_username = request.args['authorUsername'].strip()
    data, status_code, headers = papers.create_paper(payload, author_username)
    return jsonify(data), status_code, headers


@blueprint.route('/publish/<int:paper_id>', methods=['POST'])
@scoped(scopes.PUBLISH_PAPER, 'committeeUsername')
def publish_paper(paper_id: int) -> tuple:
    """Publish a paper as a committee member."""
    committee_username = request.args['committeeUsername'].strip()
    data, status_code, headers = papers.publish_paper(paper_id,
                                                      committee_username)
    return jsonify(data), status_code, headers


@blueprint.route('/search', methods=['GET'])
def search_papers() -> tuple:
    """Search titles and abstracts."""
    data, status_code, headers = \
        papers.search_papers(request.args.get('keyword'))
    return jsonify(data), status_code, headers


@blueprint.route('/published', methods=['GET'])
def published_papers() -> tuple:
    data, status_code, headers = papers.list_published()
    return jsonify(data), status_code, headers


@blueprint.route('/unpublished', methods=['GET'])
def unpublished_papers() -> tuple:
    data, status_code, headers = papers.list_unpublished()
    return jsonify(data), status_code, headers


@blueprint.route('', methods=['GET'])
@blueprint.route('/', methods=['GET'])
@blueprint.route('/all', methods=['GET'])
def all_papers() -> tuple:
    data, status_code, headers = papers.list_all()
    return jsonify(data), status_code, headers


@blueprint.route('/author/<string:username>', methods=['GET'])
def papers_by_author(username: str) -> tuple:
    """Papers written by a user."""
    data, status_code, headers = papers.list_by_author(username)
    return jsonify(data), status_code, headers


@blueprint.route('/committee/<string:username>', methods=['GET'])
def papers_by_committee(username: str) -> tuple:
    """Papers published by a committee member."""
    data, status_code, headers = papers.list_by_committee(username)
    return jsonify(data), status_code, headers


@blueprint.route('/<int:paper_id>', methods=['GET'])
def read_paper(paper_id: int) -> tuple:
    """Provide a single paper."""
    data, status_code, headers = papers.get_paper(paper_id)
    return jsonify(data), status_code, headers


@blueprint.route('/test', methods=['GET'])
def test() -> Response:
    """Get if the paper routes are up."""
    return make_response('Paper controller is working!')
