import nox

nox.needs_version = ">=2024.4.15"
nox.options.default_venv_backend = "uv|virtualenv"


@nox.session
@nox.parametrize("editable", [True, False])
def tests(session: nox.Session, editable: bool) -> None:
    session.install("-e.[test]" if editable else ".[test]")
    session.run("pytest", "--timeout=30", "tests", *session.posargs)


@nox.session
def import_check(session: nox.Session) -> None:
    session.install(".")
    # The package must import without the test extras installed.
    out = session.run("python", "-c", "import formdata; print(formdata.__version__)", silent=True)
    assert out.strip(), "formdata did not report a version"
