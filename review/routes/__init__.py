"""HTTP routes for the paper review API."""

from . import auth, health, papers
