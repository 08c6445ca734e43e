"""
Paper submission and review API.

Students, authors and committee members sign up and log in; authors submit
papers, committee members publish them, and anyone can search what has been
written. See :func:`review.factory.create_web_app`.
"""
