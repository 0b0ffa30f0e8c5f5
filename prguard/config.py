"""Configuration management for prguard."""
from pathlib import Path
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from rich.console import Console
import tomli
import tomli_w
import os
import re

DEFAULT_CONFIG_FILENAME = ".prguard.toml"
CONFIG_SECTION = "prguard"

console = Console(stderr=True)

def _sanitize_string(value: str) -> str:
    """Sanitize string values read from files or the environment."""
    if not value:
        return value

    # Remove control characters and null bytes
    value = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', value)

    # Limit length
    if len(value) > 1000:
        value = value[:1000]

    return value.strip()

def _is_safe_path(path: str) -> bool:
    """Check if a path is safe (no path traversal)."""
    if not path:
        return False

    if '..' in path or path.startswith('/') or '\\' in path:
        return False

    if os.path.isabs(path):
        return False

    return True

class Config(BaseModel):
    """Configuration settings for prguard.

    Values come from the ``[prguard]`` table of ``.prguard.toml``, from
    ``PRGUARD_*`` environment variables, or from command line options.
    """

    base_branch: str = Field(
        default="main",
        description="Branch pull requests are compared against when reading local git"
    )

    manifest_file: str = Field(
        default="package.json",
        description="Dependency manifest whose changes are reported"
    )

    lockfile: str = Field(
        default="yarn.lock",
        description="Lockfile expected to change together with the manifest"
    )

    lockfile_hint: str = Field(
        default="Perhaps you need to run `yarn install`?",
        description="Hint shown when the manifest changed without the lockfile"
    )

    big_pr_threshold: int = Field(
        default=600,
        description="Additions plus deletions above which a pull request is considered big"
    )

    require_assignee: bool = Field(
        default=True,
        description="Whether to warn about pull requests without an assignee"
    )

    dependency_sections: List[str] = Field(
        default_factory=lambda: ["dependencies", "devDependencies"],
        description="Manifest sections whose added, removed and updated entries are reported"
    )

    fail_on_error: bool = Field(
        default=True,
        description="Whether failures make the command exit with a non-zero status"
    )

    always_log: bool = Field(
        default=False,
        description="Whether to always generate log files"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file (if not using automatic log file generation)"
    )

    log_directory: Optional[str] = Field(
        default=None,
        description="Directory for automatically generated log files"
    )

    @classmethod
    def load(cls, repo_path: Path) -> 'Config':
        """Load configuration from the config file.

        Args:
            repo_path: Path to the repository root

        Returns:
            Config: Configuration object with values from file or defaults
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with config_path.open('rb') as f:
                config_data = tomli.load(f)

            config_section = config_data.get(CONFIG_SECTION, config_data)

            for key, value in list(config_section.items()):
                if isinstance(value, str):
                    config_section[key] = _sanitize_string(value)

            if config_section.get('log_file') and not _is_safe_path(config_section['log_file']):
                console.print(f"[yellow]Warning: Unsafe log file path '{config_section['log_file']}', using default[/yellow]")
                config_section['log_file'] = None

            return cls(**config_section)
        except Exception as e:
            # If there's any error reading the config, use defaults
            console.print(f"[yellow]Warning: Error reading config file: {e}[/yellow]")
            return cls()

    def save(self, repo_path: Path) -> None:
        """Save configuration to the config file.

        Args:
            repo_path: Path to the repository root
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        # Convert to dict and remove None values
        config_dict = {k: v for k, v in self.model_dump().items() if v is not None}

        if config_dict.get('log_file') and not _is_safe_path(config_dict['log_file']):
            console.print(f"[yellow]Warning: Unsafe log file path '{config_dict['log_file']}', not saving[/yellow]")
            del config_dict['log_file']

        with config_path.open('wb') as f:
            tomli_w.dump({CONFIG_SECTION: config_dict}, f)

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the log file.

        If always_log is True, generates a timestamped log file name inside
        log_directory. Otherwise, returns the configured log_file path if set.

        Returns:
            Optional[Path]: Path to the log file, or None if logging is disabled
        """
        if self.always_log:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            directory = Path(".")
            if self.log_directory:
                if _is_safe_path(self.log_directory):
                    directory = Path(self.log_directory)
                else:
                    console.print(f"[yellow]Warning: Unsafe log directory '{self.log_directory}', using repository root[/yellow]")
            return directory / f"prguard_log-{timestamp}.log"
        elif self.log_file:
            if _is_safe_path(self.log_file):
                return Path(self.log_file)
            console.print(f"[yellow]Warning: Unsafe log file path '{self.log_file}', logging disabled[/yellow]")
        return None

    def __init__(self, **data):
        """Initialize config with environment variable support and sanitization."""
        env_data = {}

        # Map environment variables to config fields
        env_mapping = {
            'PRGUARD_BASE_BRANCH': 'base_branch',
            'PRGUARD_MANIFEST_FILE': 'manifest_file',
            'PRGUARD_LOCKFILE': 'lockfile',
            'PRGUARD_BIG_PR_THRESHOLD': 'big_pr_threshold',
            'PRGUARD_REQUIRE_ASSIGNEE': 'require_assignee',
            'PRGUARD_FAIL_ON_ERROR': 'fail_on_error',
            'PRGUARD_ALWAYS_LOG': 'always_log',
            'PRGUARD_LOG_FILE': 'log_file',
            'PRGUARD_LOG_DIRECTORY': 'log_directory',
        }

        for env_var, field_name in env_mapping.items():
            if env_var in os.environ:
                value = _sanitize_string(os.environ[env_var])

                # Convert boolean values
                if field_name in ['require_assignee', 'fail_on_error', 'always_log']:
                    value = value.lower() in ['true', '1', 'yes', 'on']

                env_data[field_name] = value

        # Explicit values win over the environment
        merged_data = {**env_data, **data}

        super().__init__(**merged_data)
