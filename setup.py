"""Install the paper review API."""

from setuptools import setup, find_packages

setup(
    name='paper-review',
    version='0.1.0',
    packages=find_packages(exclude=['*test*']),
    py_modules=['wsgi'],
    package_data={'review': ['config.py']},
    install_requires=[
        "flask",
        "flask-sqlalchemy>=3.0",
        "sqlalchemy>=1.4",
        "wtforms",
        "email-validator",
        "passlib",
        "retry",
        "python-json-logger>=3.1",
        "pytz",
        "click",
        "mimesis>=5.0"
    ],
    extras_require={
        'test': ["pytest", "jsonschema"],
        'mysql': ["mysqlclient"]
    },
    zip_safe=False
)
