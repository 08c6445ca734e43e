"""Flask configuration."""
import secrets
import os

VERSION = '0.1.0'
APP_VERSION = os.environ.get('APP_VERSION', VERSION)

#################### Database ####################
SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI',
                                         'sqlite:///review.db')
"""Any SQLAlchemy URL. Relative SQLite paths land in the instance folder."""

SQLALCHEMY_TRACK_MODIFICATIONS = False

CREATE_DB = bool(int(os.environ.get('CREATE_DB', 0)))
"""Create all tables when the app starts."""

SEED_DB = bool(int(os.environ.get('SEED_DB', 0)))
"""Load the sample users and papers after creating tables.

Only has an effect together with `CREATE_DB`."""


#################### API ####################
CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:4200').split()
"""Origins allowed to call the API from a browser; space separated."""

LOGIN_TOKEN = os.environ.get('LOGIN_TOKEN', 'dummy-token')
"""Placeholder returned by login. It is not a credential and is never checked."""


#################### Logging ####################
LOGLEVEL = int(os.environ.get('LOGLEVEL', '20'))
LOGFILE = os.environ.get('LOGFILE', None)
"""Write log records to this file instead of stderr."""


#################### Minor configs ##############################
SECRET_KEY = os.environ.get('SECRET_KEY', secrets.token_urlsafe(16))
"""Sets the `Flask` secret key. Nothing in the API uses sessions."""
