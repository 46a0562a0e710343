import os
from pathlib import Path
import nox

# Reuse existing virtualenvs for faster runs
nox.options.reuse_existing_virtualenvs = True
# Default sessions when running "nox"
nox.options.sessions = ["lint", "unit", "integration"]

# Environment variables to propagate
PASSED_ENV_VARS = [
    "DATABASE_URL",
    "SECRET_KEY",
    "ENVIRONMENT",
    "LOG_LEVEL",
]


def _set_env(session):
    """
    Propagate database and test-related environment variables into the session.
    Also ensure the project root is on PYTHONPATH.
    """
    session.env["PYTHONPATH"] = str(Path.cwd())
    for var in PASSED_ENV_VARS:
        if var in os.environ:
            session.env[var] = os.environ[var]


@nox.session(name="lint")
def lint(session):
    """
    Code formatting and linting:
      - isort
      - black
      - flake8
    """
    _set_env(session)
    session.install("isort", "black", "flake8")
    session.run("isort", "--check-only", "edconsult/", "tests/")
    session.run("black", "--check", "edconsult/", "tests/")
    session.run("flake8", "edconsult/", "tests/")


@nox.session(name="unit")
def unit(session):
    """
    Run unit tests.
    Usage:
      nox -s unit
      nox -s unit -- tests/unit/test_services/test_scheduling.py
    """
    _set_env(session)
    session.install("-e", ".[test]")
    tests = session.posargs or ["tests/unit"]
    session.run(
        "pytest",
        *tests,
        "-m", "unit",
        "-vv",
        "--tb=short",
        "--cov=edconsult",
        "--cov-report=term-missing",
        "--cov-report=html:.nox/htmlcov",
        "--cov-report=xml",
    )


@nox.session(name="integration")
def integration(session):
    """
    Run the HTTP-level tests through the FastAPI app.
    Usage:
      nox -s integration
      nox -s integration -- tests/integration/test_api/test_meetings.py
    """
    _set_env(session)
    session.install("-e", ".[test]")
    tests = session.posargs or ["tests/integration"]
    session.run(
        "pytest",
        *tests,
        "-vv",
        "--tb=short",
    )


@nox.session(name="postgres")
def postgres(session):
    """
    Run the row-lock tests against a throwaway Postgres container (needs Docker).
    Usage:
      nox -s postgres
    """
    _set_env(session)
    session.env["EDCONSULT_POSTGRES_TESTS"] = "1"
    session.install("-e", ".[test]")
    session.run(
        "pytest",
        "tests/unit/test_services/test_locking_postgres.py",
        "-m", "postgres",
        "-vv",
        "--tb=short",
    )
