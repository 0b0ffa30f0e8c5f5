import json
import pytest
import tempfile
from pathlib import Path
from git import Repo

MANIFEST_BEFORE = {
    "name": "demo",
    "dependencies": {"react": "17.0.0", "@scope/old": "1.0.0"},
    "devDependencies": {"jest": "26.0.0"},
}

MANIFEST_AFTER = {
    "name": "demo",
    "dependencies": {"react": "18.0.0", "lodash": "4.17.21"},
    "devDependencies": {"jest": "26.0.0", "@types/node": "20.0.0"},
}

def _write(repo_dir: Path, name: str, content: str) -> None:
    (repo_dir / name).write_text(content)

@pytest.fixture
def temp_git_repo():
    """Create a temporary git repository with a `base` branch at its first commit."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        repo_dir = Path(tmp_dir)
        repo = Repo.init(tmp_dir)

        _write(repo_dir, "package.json", json.dumps(MANIFEST_BEFORE, indent=2))
        _write(repo_dir, "yarn.lock", "# yarn lockfile v1\n")
        _write(repo_dir, "README.md", "# demo\n")
        repo.index.add(["package.json", "yarn.lock", "README.md"])
        repo.index.commit("chore: initial commit")

        repo.create_head("base")

        yield tmp_dir

@pytest.fixture
def pr_git_repo(temp_git_repo):
    """Repository whose HEAD is two commits ahead of `base`."""
    repo_dir = Path(temp_git_repo)
    repo = Repo(temp_git_repo)

    _write(repo_dir, "package.json", json.dumps(MANIFEST_AFTER, indent=2))
    repo.index.add(["package.json"])
    repo.index.commit("feat(deps): upgrade react\n\nReact 18 brings concurrent rendering.")

    _write(repo_dir, "CHANGELOG.md", "# Changelog\n\n- upgraded react\n")
    repo.index.add(["CHANGELOG.md"])
    repo.index.commit("updated the changelog")

    return temp_git_repo

@pytest.fixture
def manifest_before():
    return MANIFEST_BEFORE

@pytest.fixture
def manifest_after():
    return MANIFEST_AFTER
