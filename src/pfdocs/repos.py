"""Git operations for cloning and updating source repositories."""

import logging
import subprocess
from pathlib import Path

from pfdocs.config import RepositoryConfig, get_repository
from pfdocs.exceptions import RepositoryError

logger = logging.getLogger(__name__)


class GitRepositoryProvider:
    """Clones sources with the git executable into one directory per repository.

    Clones are shallow and blob-filtered; sources that name sparse paths
    only check those paths out.
    """

    def __init__(self, repos_dir: Path | str, git: str = "git"):
        self.repos_dir = Path(repos_dir)
        self.git = git

    def _config(self, source_id: str) -> RepositoryConfig:
        config = get_repository(source_id)
        if config is None:
            raise RepositoryError(source_id, "unknown source")
        return config

    def repo_dir(self, source_id: str) -> Path:
        return self.repos_dir / self._config(source_id).dir_name

    def _run(self, source_id: str, *args: str, cwd: Path | None = None) -> str:
        try:
            result = subprocess.run(
                [self.git, *args],
                cwd=cwd,
                check=True,
                capture_output=True,
                text=True,
            )
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
            raise RepositoryError(source_id, f"git {args[0]} failed: {detail}") from e
        except OSError as e:
            raise RepositoryError(source_id, f"cannot run git: {e}") from e
        return result.stdout.strip()

    def is_acquired(self, source_id: str) -> bool:
        return self.repo_dir(source_id).exists()

    def acquire(self, source_id: str) -> None:
        """Clone a source. Does nothing if it is already cloned."""
        config = self._config(source_id)
        repo_dir = self.repos_dir / config.dir_name

        if repo_dir.exists():
            logger.info(f"  Repository already exists: {config.dir_name}")
            return

        self.repos_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"  Cloning {config.repo}...")

        clone_args = ["clone", "--depth", "1", "--filter=blob:none"]
        if config.sparse_paths:
            clone_args.append("--sparse")
        self._run(source_id, *clone_args, config.url, str(repo_dir))

        if config.sparse_paths:
            self._run(source_id, "sparse-checkout", "init", "--cone", cwd=repo_dir)
            self._run(source_id, "sparse-checkout", "set", *config.sparse_paths, cwd=repo_dir)

        logger.info(f"  Cloned {source_id}")

    def refresh(self, source_id: str) -> bool:
        """Pull the latest changes. Returns True if HEAD moved."""
        repo_dir = self.repo_dir(source_id)
        if not repo_dir.exists():
            raise RepositoryError(source_id, "not cloned; run 'pf-docs init' first")

        before = self._run(source_id, "rev-parse", "HEAD", cwd=repo_dir)
        self._run(source_id, "pull", "--ff-only", cwd=repo_dir)
        after = self._run(source_id, "rev-parse", "HEAD", cwd=repo_dir)

        changed = before != after
        if changed:
            logger.info(f"  Updated {source_id} ({before[:7]}..{after[:7]})")
        else:
            logger.info(f"  {source_id} is up to date")
        return changed
