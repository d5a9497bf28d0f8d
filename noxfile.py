import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]


def _install(session: nox.Session) -> None:
    """Install the project with all extras into the nox virtualenv."""
    session.run(
        "poetry",
        "install",
        "--all-extras",
        external=True,
    )


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run full test suite across Python versions."""
    _install(session)
    session.run("pytest")


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Run domain-layer tests only (no infrastructure required)."""
    _install(session)
    session.run("pytest", "tests/ordering/domain/")


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_sql(session: nox.Session) -> None:
    """Run the suite with the relational stock store and order counter."""
    _install(session)
    session.run(
        "pytest",
        env={
            "STOCK_STORE_ADAPTER": "sqlalchemy",
            "ORDER_COUNTER_ADAPTER": "sqlalchemy",
            "DATABASE_URL": "sqlite://",
        },
    )
