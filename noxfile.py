"""Nox entry point."""

from __future__ import annotations

import os
import shutil
import typing

import nox

MAIN_PACKAGE = "tplmatch"
TEST_PACKAGE = "tests"
PYPROJECT_TOML = "pyproject.toml"
COVERAGE_HTML_PATH = os.path.join("public", "coverage", "html")
PYTHON_PATHS = (MAIN_PACKAGE, TEST_PACKAGE, "noxfile.py")

DIRECTORIES_TO_DELETE = [".nox", "build", "dist", "tplmatch.egg-info", "public", ".pytest_cache", ".mypy_cache"]
FILES_TO_DELETE = [".coverage", "coverage.xml"]

nox.options.sessions = ["codespell", "pytest", "ruff", "mypy"]
nox.options.default_venv_backend = "uv"


def _sync(session: nox.Session, /, *, groups: typing.Sequence[str] = (), install_project: bool = True) -> None:
    """Install session packages using `uv sync`."""
    args: list[str] = []
    for group in groups:
        args.extend(("--group" if install_project else "--only-group", group))
    if not install_project:
        args.append("--no-install-project")

    session.run_install("uv", "sync", *args, silent=True, env={"UV_PROJECT_ENVIRONMENT": session.virtualenv.location})


@nox.session(reuse_venv=True)
def pytest(session: nox.Session) -> None:
    """Run unit tests and optionally measure code coverage with `--coverage`."""
    _sync(session, groups=["pytest"])

    flags = ["-c", PYPROJECT_TOML, "--showlocals"]
    if "--coverage" in session.posargs:
        session.posargs.remove("--coverage")
        flags.extend(
            [
                "--cov",
                MAIN_PACKAGE,
                "--cov-config",
                PYPROJECT_TOML,
                "--cov-report",
                "term",
                "--cov-report",
                f"html:{COVERAGE_HTML_PATH}",
            ]
        )

    session.run("python", "-m", "pytest", *flags, *session.posargs, TEST_PACKAGE)


@nox.session(reuse_venv=True)
def ruff(session: nox.Session) -> None:
    """Run code linting using ruff."""
    _sync(session, groups=["ruff"])
    session.run("ruff", "check", *session.posargs, *PYTHON_PATHS)


@nox.session(reuse_venv=True)
def mypy(session: nox.Session) -> None:
    """Perform static type analysis on Python source code using mypy."""
    _sync(session, groups=["mypy"])
    session.run("mypy", "-p", MAIN_PACKAGE, "--config-file", PYPROJECT_TOML)


@nox.session(reuse_venv=True)
def codespell(session: nox.Session) -> None:
    """Run codespell to check for spelling mistakes."""
    _sync(session, groups=["codespell"], install_project=False)
    session.run("codespell", "--builtin", "clear,rare,code", *PYTHON_PATHS, "SPEC_FULL.md", "DESIGN.md")


@nox.session(venv_backend="none")
def purge(session: nox.Session) -> None:
    """Delete any nox-generated files."""
    for func, trash_list in ((shutil.rmtree, DIRECTORIES_TO_DELETE), (os.remove, FILES_TO_DELETE)):
        for trash in trash_list:
            try:
                func(trash)
            except OSError as exc:
                session.warn(f"[ FAIL ] Failed to remove {trash!r}: {exc!s}")
            else:
                session.log(f"[  OK  ] Removed {trash!r}")
