import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]

nox.options.sessions = ["tests"]


def _install(session: nox.Session) -> None:
    session.install("-e", ".[test]")


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the full suite on every supported Python."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_domain(session: nox.Session) -> None:
    """Domain-layer tests only: no HTTP app, no order persistence."""
    _install(session)
    session.run("pytest", "-m", "domain", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_checkout(session: nox.Session) -> None:
    """Checkout scenarios and API tests, the slowest part of the suite."""
    _install(session)
    session.run(
        "pytest",
        "tests/ordering/bdd/",
        "tests/ordering/integration/",
        "tests/notifications/integration/",
        *session.posargs,
    )
