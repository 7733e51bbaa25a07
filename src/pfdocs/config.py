"""Settings and the registry of indexable sources."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from pfdocs.models import SourceType

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Process-wide settings, overridable with PF_DOCS_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="PF_DOCS_")

    data_dir: Path = Path.home() / ".pf-docs"
    log_level: str = "INFO"
    search_limit: int = 10
    preview_lines: int = 50

    @property
    def repos_dir(self) -> Path:
        return self.data_dir / "repos"

    @property
    def index_path(self) -> Path:
        return self.data_dir / "index.db"

    @property
    def log_level_int(self) -> int:
        """Convert string log level to integer."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()


@dataclass(frozen=True)
class RepositoryConfig:
    """A remote repository and the subset of it to check out."""

    source_id: str
    dir_name: str
    repo: str
    sparse_paths: tuple[str, ...] = ()

    @property
    def url(self) -> str:
        return f"https://github.com/{self.repo}.git"


@dataclass(frozen=True)
class LibraryConfig:
    """A documentation library and where its DocC catalogs live."""

    name: str
    short_name: str
    repo: str
    docs_paths: tuple[str, ...]
    description: str

    @property
    def repository(self) -> RepositoryConfig:
        return RepositoryConfig(
            source_id=self.short_name,
            dir_name=self.name,
            repo=self.repo,
            sparse_paths=self.docs_paths,
        )


@dataclass(frozen=True)
class SourceConfig:
    """Everything an indexing run needs to know about one source."""

    library: str
    source_type: SourceType
    roots: tuple[Path, ...]
    patterns: tuple[str, ...]


def _docc(module: str) -> str:
    return f"Sources/{module}/Documentation.docc"


LIBRARIES: list[LibraryConfig] = [
    LibraryConfig(
        "swift-composable-architecture",
        "tca",
        "pointfreeco/swift-composable-architecture",
        (_docc("ComposableArchitecture"),),
        "The Composable Architecture",
    ),
    LibraryConfig(
        "swift-dependencies",
        "dependencies",
        "pointfreeco/swift-dependencies",
        (_docc("Dependencies"),),
        "Dependency injection library",
    ),
    LibraryConfig(
        "swift-navigation",
        "navigation",
        "pointfreeco/swift-navigation",
        (
            _docc("SwiftNavigation"),
            _docc("SwiftUINavigation"),
            _docc("UIKitNavigation"),
            _docc("AppKitNavigation"),
        ),
        "Navigation tools for Swift",
    ),
    LibraryConfig(
        "swift-perception",
        "perception",
        "pointfreeco/swift-perception",
        (_docc("Perception"),),
        "@Observable backported to iOS 16",
    ),
    LibraryConfig(
        "swift-sharing",
        "sharing",
        "pointfreeco/swift-sharing",
        (_docc("Sharing"),),
        "Persistence & data sharing",
    ),
    LibraryConfig(
        "swift-identified-collections",
        "identified-collections",
        "pointfreeco/swift-identified-collections",
        (_docc("IdentifiedCollections"),),
        "Identifiable-aware collections",
    ),
    LibraryConfig(
        "swift-case-paths",
        "case-paths",
        "pointfreeco/swift-case-paths",
        (_docc("CasePaths"),),
        "Key paths for enum cases",
    ),
    LibraryConfig(
        "swift-custom-dump",
        "custom-dump",
        "pointfreeco/swift-custom-dump",
        (_docc("CustomDump"),),
        "Debugging/diffing tools",
    ),
    LibraryConfig(
        "swift-concurrency-extras",
        "concurrency-extras",
        "pointfreeco/swift-concurrency-extras",
        (_docc("ConcurrencyExtras"),),
        "Testable async/await",
    ),
    LibraryConfig(
        "swift-clocks",
        "clocks",
        "pointfreeco/swift-clocks",
        (_docc("Clocks"),),
        "Testable Swift concurrency clocks",
    ),
    LibraryConfig(
        "swift-snapshot-testing",
        "snapshot-testing",
        "pointfreeco/swift-snapshot-testing",
        (_docc("SnapshotTesting"), _docc("InlineSnapshotTesting")),
        "Snapshot testing library",
    ),
    LibraryConfig(
        "swift-issue-reporting",
        "issue-reporting",
        "pointfreeco/swift-issue-reporting",
        (_docc("IssueReporting"),),
        "Runtime warnings & assertions",
    ),
]

EXAMPLES = RepositoryConfig(
    source_id=SourceType.EXAMPLES.value,
    dir_name="swift-composable-architecture-examples",
    repo="pointfreeco/swift-composable-architecture",
    sparse_paths=(
        "Examples/CaseStudies",
        "Examples/Search",
        "Examples/SpeechRecognition",
        "Examples/SyncUps",
        "Examples/TicTacToe",
        "Examples/Todos",
        "Examples/VoiceMemos",
    ),
)

# Full (non-sparse) clone: episode directories are the top level of the repo
EPISODES = RepositoryConfig(
    source_id=SourceType.EPISODES.value,
    dir_name="episode-code-samples",
    repo="pointfreeco/episode-code-samples",
)

DOC_PATTERNS = ("**/*.md",)
CODE_PATTERNS = ("**/*.swift",)


def get_library(name: str) -> Optional[LibraryConfig]:
    """Find a library by short name or full repository name."""
    for lib in LIBRARIES:
        if name in (lib.short_name, lib.name):
            return lib
    return None


def get_library_names() -> list[str]:
    return [lib.short_name for lib in LIBRARIES]


def get_repository(source_id: str) -> Optional[RepositoryConfig]:
    """Resolve a source id ("examples", "episodes" or a library name)."""
    if source_id == EXAMPLES.source_id:
        return EXAMPLES
    if source_id == EPISODES.source_id:
        return EPISODES
    lib = get_library(source_id)
    return lib.repository if lib else None


def library_source(lib: LibraryConfig, repos_dir: Path) -> SourceConfig:
    root = repos_dir / lib.name
    return SourceConfig(
        library=lib.short_name,
        source_type=SourceType.DOCS,
        roots=tuple(root / docs_path for docs_path in lib.docs_paths),
        patterns=DOC_PATTERNS,
    )


def examples_source(repos_dir: Path) -> SourceConfig:
    root = repos_dir / EXAMPLES.dir_name
    return SourceConfig(
        library=SourceType.EXAMPLES.value,
        source_type=SourceType.EXAMPLES,
        roots=tuple(root / path for path in EXAMPLES.sparse_paths),
        patterns=CODE_PATTERNS,
    )


def episodes_source(repos_dir: Path) -> SourceConfig:
    return SourceConfig(
        library=SourceType.EPISODES.value,
        source_type=SourceType.EPISODES,
        roots=(repos_dir / EPISODES.dir_name,),
        patterns=CODE_PATTERNS,
    )
