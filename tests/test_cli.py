"""Tests for gitai.cli module."""

import subprocess

import pytest
from typer.testing import CliRunner

from gitai.cli import app
from gitai.config import Settings
from gitai.git import CommitError, ContentReadError, GitError, VCSQueryError
from gitai.global_config import GlobalConfigError
from gitai.llm import CompletionServiceError, MissingAPIKeyError
from gitai.workflow import Outcome, WorkflowResult

runner = CliRunner()


@pytest.fixture
def cli_env(mocker):
    """Stub configuration and repository discovery for the default command."""
    mocker.patch("gitai.cli.main.load_config", return_value=Settings(max_attempts=3))
    repo_cls = mocker.patch("gitai.cli.main.GitRepository")
    return repo_cls


@pytest.fixture
def config_dir(temp_dir, mocker):
    """Point the global config directory at a temporary location."""
    mock_dir = temp_dir / ".gitai"
    mocker.patch("gitai.global_config._CONFIG_DIR", mock_dir)
    return mock_dir


class TestHelp:
    """Tests for --help output."""

    def test_main_help(self):
        """Test that help lists the config group."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "AI-generated commit messages" in result.output
        assert "config" in result.output

    def test_config_help(self):
        """Test that config help lists its commands."""
        result = runner.invoke(app, ["config", "--help"])

        assert result.exit_code == 0
        for command in ("show", "set-key", "set-provider", "set-max-attempts", "list-providers"):
            assert command in result.output


class TestMainCommand:
    """Tests for the default commit command."""

    def test_no_changes(self, cli_env, mocker):
        """Test that a clean tree prints a message and exits 0."""
        mocker.patch("gitai.cli.main.run_workflow", return_value=WorkflowResult(Outcome.NO_CHANGES))

        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "No changes detected." in result.output

    def test_exhausted(self, cli_env, mocker):
        """Test that running out of attempts exits 0 without committing."""
        mocker.patch(
            "gitai.cli.main.run_workflow",
            return_value=WorkflowResult(Outcome.EXHAUSTED, attempts=3),
        )

        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "Maximum attempts reached. Exiting without committing." in result.output

    def test_committed(self, cli_env, mocker):
        """Test the success message with the short commit id."""
        mocker.patch(
            "gitai.cli.main.run_workflow",
            return_value=WorkflowResult(
                Outcome.COMMITTED,
                message="feat: add login",
                commit_id="abcdef1234567890",
                attempts=1,
            ),
        )

        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "Committed abcdef1: feat: add login" in result.output

    def test_passes_max_attempts(self, cli_env, mocker):
        """Test that configured max_attempts reaches the workflow."""
        workflow = mocker.patch(
            "gitai.cli.main.run_workflow",
            return_value=WorkflowResult(Outcome.NO_CHANGES),
        )

        runner.invoke(app, [])

        assert workflow.call_args.kwargs["max_attempts"] == 3
        assert workflow.call_args.args[0] is cli_env.return_value

    @pytest.mark.parametrize(
        "error, prefix",
        [
            (VCSQueryError("bad status"), "Error reading repository state"),
            (ContentReadError("a.txt", "denied"), "Error getting diff"),
            (CommitError("hook failed"), "Error committing changes"),
            (MissingAPIKeyError("no key"), "API key error"),
            (CompletionServiceError("timeout"), "Error generating commit message"),
        ],
    )
    def test_errors_exit_1(self, cli_env, mocker, error, prefix):
        """Test that each failure kind is reported and exits 1."""
        mocker.patch("gitai.cli.main.run_workflow", side_effect=error)

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert prefix in result.output
        assert str(error) in result.output

    def test_not_a_repository(self, mocker):
        """Test error when run outside a repository."""
        mocker.patch("gitai.cli.main.load_config", return_value=Settings())
        mocker.patch("gitai.cli.main.GitRepository", side_effect=GitError("Not in a git repository"))

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Error opening repository" in result.output

    def test_bad_configuration(self, mocker):
        """Test error when the config file cannot be read."""
        mocker.patch("gitai.cli.main.load_config", side_effect=GlobalConfigError("bad yaml"))
        workflow = mocker.patch("gitai.cli.main.run_workflow")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Error loading configuration" in result.output
        workflow.assert_not_called()

    def test_keyboard_interrupt(self, cli_env, mocker):
        """Test that Ctrl-C exits 130."""
        mocker.patch("gitai.cli.main.run_workflow", side_effect=KeyboardInterrupt())

        result = runner.invoke(app, [])

        assert result.exit_code == 130
        assert "Aborted" in result.output


class TestMainCommandEndToEnd:
    """Tests running the default command against a real repository."""

    @pytest.fixture
    def in_repo(self, git_repo, mocker, monkeypatch):
        monkeypatch.chdir(git_repo)
        mocker.patch("gitai.cli.main.load_config", return_value=Settings(max_attempts=2))
        return git_repo

    def test_clean_tree(self, in_repo, mocker):
        """Test that a clean repository never calls the model."""
        generate = mocker.patch("gitai.cli.main.generate_commit_message")

        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "No changes detected." in result.output
        generate.assert_not_called()

    def test_accept_commits_everything(self, in_repo, mocker):
        """Test that accepting after an invalid answer commits all changes."""
        mocker.patch("gitai.cli.main.generate_commit_message", return_value="docs: expand readme")
        (in_repo / "README.md").write_text("# Project\n\nHello\n\nMore\n")
        (in_repo / "notes.txt").write_text("todo\n")

        result = runner.invoke(app, [], input="maybe\ny\n")

        assert result.exit_code == 0
        assert "Generated commit message (Attempt 1/2):" in result.output
        assert "Invalid response" in result.output
        assert "docs: expand readme" in result.output
        log = subprocess.run(
            ["git", "log", "-1", "--format=%s"],
            cwd=in_repo,
            capture_output=True,
            text=True,
            check=True,
        ).stdout.strip()
        status = subprocess.run(
            ["git", "status", "--porcelain"],
            cwd=in_repo,
            capture_output=True,
            text=True,
            check=True,
        ).stdout
        assert log == "docs: expand readme"
        assert status == ""

    def test_reject_all_leaves_tree(self, in_repo, mocker):
        """Test that rejecting every proposal commits nothing."""
        generate = mocker.patch("gitai.cli.main.generate_commit_message", return_value="chore: x")
        (in_repo / "notes.txt").write_text("todo\n")

        result = runner.invoke(app, [], input="n\nno\n")

        assert result.exit_code == 0
        assert "Attempt 2/2" in result.output
        assert "Maximum attempts reached" in result.output
        assert generate.call_count == 2
        count = subprocess.run(
            ["git", "rev-list", "--count", "HEAD"],
            cwd=in_repo,
            capture_output=True,
            text=True,
            check=True,
        ).stdout.strip()
        assert count == "1"


class TestConfigCommands:
    """Tests for gitai config subcommands."""

    def test_show_defaults(self, config_dir):
        """Test show with no config file."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "using defaults" in result.output
        assert "Provider: groq" in result.output
        assert "Max Attempts: 5" in result.output
        assert "GROQ_API_KEY): not set" in result.output

    def test_set_key_and_show_masked(self, config_dir):
        """Test that a saved key is shown masked."""
        result = runner.invoke(app, ["config", "set-key", "groq"], input="gsk_1234567890abcdef\n")

        assert result.exit_code == 0
        assert "API key saved for groq" in result.output

        result = runner.invoke(app, ["config", "show"])
        assert "gsk_1234...cdef" in result.output
        assert "gsk_1234567890abcdef" not in result.output

    def test_set_key_invalid_provider(self, config_dir):
        """Test that an unknown provider is rejected."""
        result = runner.invoke(app, ["config", "set-key", "nope"])

        assert result.exit_code == 1
        assert "Invalid provider" in result.output

    def test_set_provider_with_model(self, config_dir):
        """Test setting a known model directly."""
        result = runner.invoke(app, ["config", "set-provider", "openai", "-m", "gpt-4o"])

        assert result.exit_code == 0
        assert "Provider set to: openai" in result.output
        assert "Model set to: gpt-4o" in result.output

    def test_set_provider_interactive(self, config_dir):
        """Test choosing a model from the list."""
        result = runner.invoke(app, ["config", "set-provider", "groq"], input="2\n")

        assert result.exit_code == 0
        assert "Model set to: llama-3.1-8b-instant" in result.output

    def test_set_provider_unknown_model_declined(self, config_dir):
        """Test declining an unknown model leaves config untouched."""
        result = runner.invoke(app, ["config", "set-provider", "openai", "-m", "mystery"], input="n\n")

        assert result.exit_code == 0
        assert "Warning" in result.output
        assert not (config_dir / "config.yaml").exists()

    def test_set_max_attempts(self, config_dir):
        """Test setting the attempt bound."""
        result = runner.invoke(app, ["config", "set-max-attempts", "3"])

        assert result.exit_code == 0
        assert "Max attempts set to: 3" in result.output

        result = runner.invoke(app, ["config", "show"])
        assert "Max Attempts: 3" in result.output

    def test_set_max_attempts_rejects_zero(self, config_dir):
        """Test that a zero bound is refused."""
        result = runner.invoke(app, ["config", "set-max-attempts", "0"])

        assert result.exit_code == 1
        assert "at least 1" in result.output

    def test_list_providers(self):
        """Test listing providers and models."""
        result = runner.invoke(app, ["config", "list-providers"])

        assert result.exit_code == 0
        assert "groq:" in result.output
        assert "anthropic:" in result.output
        assert "gpt-4o-mini" in result.output
