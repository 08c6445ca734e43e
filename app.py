"""Provides application for development purposes."""
from review.factory import create_web_app
from review.services import bootstrap, util

app = create_web_app()
with app.app_context():
    util.create_all()
    if app.config['SEED_DB']:
        bootstrap.seed()
