"""Tests for the indexing pipeline."""

from pathlib import Path

from pfdocs.config import CODE_PATTERNS, DOC_PATTERNS, SourceConfig
from pfdocs.indexer import index_source, load_documents
from pfdocs.models import SourceType
from pfdocs.storage import IndexStore

TESTING_ARTICLE = """@Metadata {
  @PageImage(purpose: card, source: "testing-card")
}

# ``Store``

Use a ``TestStore`` to assert how state changes. See <doc:GettingStarted>.




More detail.
"""


def _docs_source(root: Path) -> SourceConfig:
    return SourceConfig(
        library="tca",
        source_type=SourceType.DOCS,
        roots=(root,),
        patterns=DOC_PATTERNS,
    )


class TestIndexSource:
    """Test suite for index_source."""

    def test_end_to_end_documentation(self, store: IndexStore, tmp_path: Path, write_file):
        root = tmp_path / "Documentation.docc"
        write_file(root, "Articles/Testing.md", TESTING_ARTICLE)

        assert index_source(store, _docs_source(root)) == 1

        doc = store.get_document("tca/Articles/Testing")
        assert doc is not None
        assert doc.title == "Store"
        assert doc.library == "tca"
        assert doc.source_type is SourceType.DOCS
        assert doc.content == (
            "# Store\n\nUse a TestStore to assert how state changes. "
            "See [GettingStarted].\n\nMore detail."
        )

        results = store.search("Store")
        assert [r.path for r in results] == ["tca/Articles/Testing"]
        assert "**" in results[0].snippet

    def test_reindexing_is_idempotent(self, store: IndexStore, tmp_path: Path, write_file):
        root = tmp_path / "Documentation.docc"
        write_file(root, "Articles/Testing.md", TESTING_ARTICLE)
        write_file(root, "Articles/Performance.md", "Performance notes")

        index_source(store, _docs_source(root))
        index_source(store, _docs_source(root))

        assert store.stats().total_docs == 2
        assert store.get_document("tca/Articles/Performance").title == "Performance"

    def test_reindexing_picks_up_changes(self, store: IndexStore, tmp_path: Path, write_file):
        root = tmp_path / "Documentation.docc"
        write_file(root, "Articles/Testing.md", "# Testing\n\nzebracorn")
        index_source(store, _docs_source(root))

        write_file(root, "Articles/Testing.md", "# Testing Again\n\nquasarfish")
        index_source(store, _docs_source(root))

        assert store.get_document("tca/Articles/Testing").title == "Testing Again"
        assert store.search("zebracorn") == []
        assert len(store.search("quasarfish")) == 1

    def test_unreadable_file_is_skipped(self, store: IndexStore, tmp_path: Path, write_file):
        root = tmp_path / "Documentation.docc"
        write_file(root, "Articles/Good.md", "# Good")
        broken = root / "Articles" / "Broken.md"
        broken.write_bytes(b"\xff\xfe\xfa not utf-8")

        assert index_source(store, _docs_source(root)) == 1
        assert store.get_document("tca/Articles/Broken") is None
        assert store.get_document("tca/Articles/Good") is not None

    def test_missing_roots_are_skipped(self, store: IndexStore, tmp_path: Path, write_file):
        present = tmp_path / "SwiftUINavigation.docc"
        write_file(present, "Articles/Alerts.md", "# Alerts")
        source = SourceConfig(
            library="navigation",
            source_type=SourceType.DOCS,
            roots=(tmp_path / "UIKitNavigation.docc", present),
            patterns=DOC_PATTERNS,
        )

        assert index_source(store, source) == 1

    def test_records_indexing_time(self, store: IndexStore, tmp_path: Path):
        index_source(store, _docs_source(tmp_path / "empty"))
        assert store.get_metadata("indexed_at:tca") is not None

    def test_examples_and_episodes(self, store: IndexStore, tmp_path: Path, write_file):
        examples_root = tmp_path / "Examples" / "SyncUps"
        write_file(
            examples_root,
            "SyncUps/SyncUpsList.swift",
            "import SwiftUI\n\n@Reducer\nstruct SyncUpsList {\n  // meetingtimer\n}\n",
        )
        episodes_root = tmp_path / "episode-code-samples"
        write_file(episodes_root, "0156-testable-state/Main.swift", "let episodeonlyterm = 1\n")

        index_source(
            store,
            SourceConfig("examples", SourceType.EXAMPLES, (examples_root,), CODE_PATTERNS),
        )
        index_source(
            store,
            SourceConfig("episodes", SourceType.EPISODES, (episodes_root,), CODE_PATTERNS),
        )

        example = store.get_document("examples/SyncUps/SyncUps/SyncUpsList.swift")
        assert example is not None
        assert example.title == "SyncUpsList"
        assert example.content.startswith("import SwiftUI\n\n@Reducer\n")

        episode = store.get_document("episodes/0156-testable-state/Main.swift")
        assert episode is not None
        assert episode.title == "Ep156: Testable State (Main.swift)"

        assert store.search("meetingtimer") == []
        assert len(store.search("meetingtimer", source_type=None)) == 1
        assert store.stats().by_source == {"episodes": 1, "examples": 1}


class TestLoadDocuments:
    """Test suite for load_documents."""

    def test_code_content_is_not_cleaned(self, tmp_path: Path, write_file):
        raw = "let s = \"``not a symbol``\"\n\n\n\n\nlet t = 1\n"
        root = tmp_path / "Examples" / "Todos"
        write_file(root, "Todos/Todos.swift", raw)

        (doc,) = load_documents(SourceConfig("examples", SourceType.EXAMPLES, (root,), CODE_PATTERNS))
        assert doc.content == raw
