import pytest

from review.factory import create_web_app
from review.services import models


@pytest.fixture()
def app(tmp_path):
    app = create_web_app(
        SQLALCHEMY_DATABASE_URI=f'sqlite:///{tmp_path}/test.db',
        CREATE_DB=True,
        SEED_DB=True
    )
    yield app
    with app.app_context():
        models.db.session.remove()
        models.db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()
