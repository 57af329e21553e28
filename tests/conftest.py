import shutil
import subprocess
from pathlib import Path

import pytest
from pyfakefs.fake_filesystem_unittest import Patcher

FIXTURES = Path(__file__).parent / "fixtures"

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def read_fixture(name):
    return (FIXTURES / name).read_text()


def git(*args, cwd):
    subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True)


@pytest.fixture
def fs():
    with Patcher() as patcher:
        yield patcher.fs


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """An empty git repository on branch master, with HOME isolated."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    repo = tmp_path / "repo"
    repo.mkdir()
    git("init", cwd=repo)
    git("symbolic-ref", "HEAD", "refs/heads/master", cwd=repo)
    return repo


@pytest.fixture
def add_workflow():
    """Write a fixture file into .github/workflows of a repository."""
    def _add(repo, fixture, name):
        workflows = Path(repo) / ".github" / "workflows"
        workflows.mkdir(parents=True, exist_ok=True)
        (workflows / name).write_text(read_fixture(fixture))
    return _add
