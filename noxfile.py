"""Nox sessions for testing and quality checks."""

import nox


@nox.session(python=["3.12", "3.14"])
def tests(session: nox.Session) -> None:
    """Run the test suite with coverage reporting.

    Args:
        session: The nox session object.
    """
    session.run("uv", "sync", "--extra", "test", external=True)
    session.run(
        "pytest",
        "--cov=disk_usage",
        "--cov-report=term-missing:skip-covered",
        "--cov-fail-under=85",
        *session.posargs,
    )


@nox.session(python=["3.14"])
def properties(session: nox.Session) -> None:
    """Run only the hypothesis property tests."""
    session.run("uv", "sync", "--extra", "test", external=True)
    session.run("pytest", "-m", "property", *session.posargs)


@nox.session(python=["3.14"])
def lint(session: nox.Session) -> None:
    """Run ruff linting and formatting checks.

    Args:
        session: The nox session object.
    """
    session.run("uv", "sync", external=True)
    session.run("ruff", "check", ".")
    session.run("ruff", "format", "--check", ".")


@nox.session(python=["3.14"])
def typecheck(session: nox.Session) -> None:
    """Run basedpyright type checking."""
    session.run("uv", "sync", external=True)
    session.run("uvx", "basedpyright@latest", external=True)


@nox.session(python=["3.14"])
def format(session: nox.Session) -> None:
    """Auto-format code with ruff.

    Args:
        session: The nox session object.
    """
    session.run("uv", "sync", external=True)
    session.run("ruff", "check", ".", "--fix")
    session.run("ruff", "format", ".")
