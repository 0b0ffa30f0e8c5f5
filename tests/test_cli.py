"""Tests for CLI functionality."""
import pytest
from pathlib import Path
from unittest.mock import AsyncMock, Mock, patch
from click.testing import CliRunner
from git import Repo

from prguard.cli import main
from prguard.config import Config
from prguard.models import ReviewReport

@pytest.fixture
def cli_runner():
    """Fixture for testing CLI commands."""
    return CliRunner()

@pytest.fixture
def clean_pr_repo(temp_git_repo):
    """Repository with one well-formed commit ahead of `base`."""
    repo = Repo(temp_git_repo)
    (Path(temp_git_repo) / "README.md").write_text("# demo\n\nMore docs.\n")
    repo.index.add(["README.md"])
    repo.index.commit("docs(readme): expand introduction")
    return temp_git_repo

def test_review_passes(cli_runner, clean_pr_repo):
    result = cli_runner.invoke(main, ['--path', clean_pr_repo, '--base', 'base', '--assignee', 'octocat'])

    assert result.exit_code == 0
    assert "Review passed" in result.output

def test_review_fails_on_bad_commit(cli_runner, pr_git_repo):
    result = cli_runner.invoke(main, ['--path', pr_git_repo, '--base', 'base'])

    assert result.exit_code == 1
    assert "Fail: Commit" in result.output
    assert "Please assign someone" in result.output
    assert "Review failed" in result.output

def test_fail_on_error_disabled(cli_runner, pr_git_repo, monkeypatch):
    monkeypatch.setenv("PRGUARD_FAIL_ON_ERROR", "false")
    result = cli_runner.invoke(main, ['--path', pr_git_repo, '--base', 'base'])
    assert result.exit_code == 0

def test_log_file_and_markdown_out(cli_runner, pr_git_repo, tmp_path):
    log_file = tmp_path / "review.log"
    markdown_file = tmp_path / "review.md"

    result = cli_runner.invoke(main, [
        '--path', pr_git_repo, '--base', 'base',
        '--log-file', str(log_file), '--markdown-out', str(markdown_file),
    ])

    assert result.exit_code == 1
    assert "FAIL: Commit" in log_file.read_text()
    assert "| :no_entry_sign: |" in markdown_file.read_text()

def test_unknown_base_aborts(cli_runner, clean_pr_repo):
    result = cli_runner.invoke(main, ['--path', clean_pr_repo, '--base', 'nope'])

    assert result.exit_code == 1
    assert "Error: Unknown revision 'nope'" in result.output

def test_github_requires_pr_number(cli_runner, tmp_path):
    result = cli_runner.invoke(main, ['--path', str(tmp_path), '--github-repo', 'acme/widgets'])
    assert result.exit_code == 2
    assert "--pr is required" in result.output

def test_github_mode_uses_github_source(cli_runner, tmp_path):
    source = Mock()
    source.aclose = AsyncMock()
    with patch('prguard.cli.GitHubSource', return_value=source) as source_cls, \
            patch('prguard.cli.ReviewRunner') as runner_cls:
        runner_cls.return_value.run = AsyncMock(return_value=ReviewReport())
        result = cli_runner.invoke(main, [
            '--path', str(tmp_path), '--github-repo', 'acme/widgets', '--pr', '7', '--token', 'secret',
        ])

    assert result.exit_code == 0
    source_cls.assert_called_once_with('acme/widgets', 7, token='secret')
    assert runner_cls.call_args[0][0] is source

def test_config_dir_flag_creates_config(cli_runner, tmp_path):
    """Test that --config-dir creates a config file if it doesn't exist."""
    with patch('pyperclip.copy') as mock_copy:
        with cli_runner.isolated_filesystem(temp_dir=tmp_path) as td:
            config_path = Path(td) / ".prguard.toml"
            assert not config_path.exists()

            result = cli_runner.invoke(main, ['--config-dir'])

            assert result.exit_code == 0
            assert config_path.exists()
            assert "Created new config file with default values" in result.output
            mock_copy.assert_called_once()
            assert mock_copy.call_args[0][0].endswith(".prguard.toml")

            config = Config.load(Path(td))
            assert config.base_branch == "main"
            assert config.lockfile == "yarn.lock"

def test_config_list(cli_runner, tmp_path):
    Config(big_pr_threshold=900).save(tmp_path)

    result = cli_runner.invoke(main, ['--path', str(tmp_path), '--config-list'])

    assert result.exit_code == 0
    assert "Current Configuration Settings" in result.output
    assert "big_pr_threshold" in result.output
    assert "900" in result.output

def test_version(cli_runner):
    result = cli_runner.invoke(main, ['--version'])
    assert result.exit_code == 0
    assert "prguard" in result.output
