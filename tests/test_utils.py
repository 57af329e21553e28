"""
Unit tests for belay.utils module
"""
import unittest
import tempfile
import os
import shutil
import subprocess
from pathlib import Path

import pytest

from belay.models import RepositoryContext
from belay.utils import (
    run_command,
    run_shell,
    find_git_root,
    is_git_repo,
    get_current_branch,
    get_remote_names,
    get_repository_context,
)

from conftest import git, requires_git


class TestRunCommand(unittest.TestCase):
    """Test the run_command utility function"""

    def test_run_command_capture_output(self):
        result = run_command("echo 'test'", capture_output=True)
        self.assertEqual(result, "test")

    def test_run_command_no_capture(self):
        result = run_command("echo 'test'", capture_output=False)
        self.assertIsNone(result)

    def test_run_command_dry_run(self):
        result = run_command("echo 'test'", dry_run=True, capture_output=True)
        self.assertEqual(result, "Dry run output")

    def test_run_command_failure_unchecked(self):
        result = run_command("false", capture_output=True, check=False)
        self.assertEqual(result, "")

    def test_run_command_failure_checked(self):
        with self.assertRaises(subprocess.CalledProcessError):
            run_command("exit 3", check=True, log_stderr=False)

    def test_run_command_with_cwd(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            result = run_command("pwd", cwd=temp_dir, capture_output=True)
            self.assertEqual(os.path.realpath(result), os.path.realpath(temp_dir))


class TestRunShell(unittest.TestCase):
    """Test running task commands through the shell"""

    def test_exit_status(self):
        self.assertEqual(run_shell("true"), 0)
        self.assertEqual(run_shell("exit 7"), 7)

    def test_shell_features(self):
        self.assertEqual(run_shell("test 1 -eq 1 && true"), 0)

    def test_cwd(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            self.assertEqual(run_shell("test -f marker", cwd=temp_dir), 1)
            Path(temp_dir, "marker").touch()
            self.assertEqual(run_shell("test -f marker", cwd=temp_dir), 0)

    def test_missing_shell_raises(self):
        with self.assertRaises(OSError):
            run_shell("true", shell="/nonexistent/shell")


class TestGitRepoDetection(unittest.TestCase):
    """Test git repository detection functions"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.repo = os.path.join(self.temp_dir, "repo")
        self.nested = os.path.join(self.repo, "src", "pkg")
        os.makedirs(self.nested)
        os.makedirs(os.path.join(self.repo, ".git"))

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_is_git_repo(self):
        self.assertTrue(is_git_repo(self.repo))
        self.assertFalse(is_git_repo(self.nested))

    def test_find_git_root_from_root(self):
        self.assertEqual(find_git_root(self.repo), Path(self.repo).resolve())

    def test_find_git_root_from_subdirectory(self):
        self.assertEqual(find_git_root(self.nested), Path(self.repo).resolve())

    def test_find_git_root_outside_repo(self):
        outside = os.path.join(self.temp_dir, "elsewhere")
        os.makedirs(outside)
        # The temp dir itself could sit inside a checkout; only assert we do not find `repo`
        self.assertNotEqual(find_git_root(outside), Path(self.repo).resolve())


@requires_git
def test_context_of_fresh_repository(git_repo):
    """An unborn branch still has a name"""
    assert get_current_branch(git_repo) == "master"
    assert get_remote_names(git_repo) == []
    assert get_repository_context(git_repo) == RepositoryContext("master", False)


@requires_git
def test_context_with_remote(git_repo):
    git("checkout", "-b", "develop", cwd=git_repo)
    git("remote", "add", "upstream", "test.com", cwd=git_repo)

    assert get_remote_names(git_repo) == ["upstream"]
    assert get_repository_context(git_repo) == RepositoryContext("develop", True)


if __name__ == '__main__':
    unittest.main()
