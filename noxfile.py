import os
from pathlib import Path
import nox

nox.options.reuse_existing_virtualenvs = True
nox.options.sessions = ["lint", "unit", "integration"]

TEST_INSTALL = ["-e", ".[test]"]

# Settings the test run may inherit from the caller's shell
FORWARDED_SETTINGS = (
    "SECRET_KEY",
    "ENVIRONMENT",
    "DATABASE_URL",
    "TIMEZONE",
    "MANAGER_ROLES",
)


def _configure(session):
    """Point the session at the project root and an in-memory database."""
    session.env["PYTHONPATH"] = str(Path.cwd())
    session.env.setdefault("DATABASE_URL", "sqlite://")
    for name in FORWARDED_SETTINGS:
        if name in os.environ:
            session.env[name] = os.environ[name]


def _pytest(session, default_target, *extra):
    session.run(
        "pytest",
        *(session.posargs or [default_target]),
        "--maxfail=1",
        "-vv",
        "--tb=short",
        *extra,
    )


@nox.session(name="lint")
def lint(session):
    """isort, black, flake8 and mypy over the application package."""
    _configure(session)
    session.install("isort", "black", "flake8", "mypy")
    for tool in (["isort"], ["black"], ["flake8"]):
        session.run(*tool, "app/", "tests/")
    session.run("mypy", "app/")


@nox.session(name="unit")
def unit(session):
    """
    Service, core and middleware tests with coverage.

    Usage:
      nox -s unit
      nox -s unit -- tests/unit/test_services/test_checkin.py
    """
    _configure(session)
    session.install(*TEST_INSTALL)
    _pytest(
        session,
        "tests/unit",
        "--cov=app",
        "--cov-report=term-missing",
        "--cov-report=html:.nox/htmlcov",
        "--cov-report=xml",
    )


@nox.session(name="integration")
def integration(session):
    """
    HTTP tests through the FastAPI test client.

    Usage:
      nox -s integration
      nox -s integration -- tests/integration/test_api/test_checkin.py
    """
    _configure(session)
    session.install(*TEST_INSTALL)
    _pytest(session, "tests/integration")


@nox.session(name="migrations")
def migrations(session):
    """Apply every Alembic revision to a scratch SQLite file, then roll back."""
    session.install("-e", ".")
    scratch = Path(session.create_tmp()) / "migrations.db"
    session.env["DATABASE_URL"] = f"sqlite:///{scratch}"
    session.run("alembic", "upgrade", "head")
    session.run("alembic", "downgrade", "base")
