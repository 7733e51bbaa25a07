"""Tests for the pf-docs command line."""

import json
from pathlib import Path

import pytest

from pfdocs import cli
from pfdocs.config import Settings, get_library, get_repository
from pfdocs.exceptions import RepositoryError
from pfdocs.models import Document, SourceType
from pfdocs.storage import IndexStore

TCA_DOCS = "Sources/ComposableArchitecture/Documentation.docc"


class FakeProvider:
    """In-memory repository provider that writes fixture files on acquire."""

    def __init__(self, repos_dir: Path, files: dict[str, dict[str, str]], failing=()):
        self.repos_dir = repos_dir
        self.files = files
        self.failing = set(failing)
        self.acquired: list[str] = []
        self.refreshed: list[str] = []
        self.changed: set[str] = set()

    def is_acquired(self, source_id: str) -> bool:
        return source_id in self.acquired

    def acquire(self, source_id: str) -> None:
        if source_id in self.failing:
            raise RepositoryError(source_id, "git clone failed: network down")
        root = self.repos_dir / get_repository(source_id).dir_name
        for relative, text in self.files.get(source_id, {}).items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        self.acquired.append(source_id)

    def refresh(self, source_id: str) -> bool:
        self.refreshed.append(source_id)
        return source_id in self.changed


@pytest.fixture
def indexed(settings: Settings) -> Settings:
    store = IndexStore(settings.index_path)
    store.initialize()
    store.upsert_many(
        [
            cli_doc("tca", "tca/Articles/Testing", "Testing", "Use a TestStore to test reducers."),
            cli_doc("sharing", "sharing/Articles/Persistence", "Persistence", "fileStorage"),
            cli_doc(
                "examples",
                "examples/SyncUps/SyncUps/App.swift",
                "App",
                "\n".join(f"// TestStore line {i}" for i in range(80)),
                SourceType.EXAMPLES,
            ),
        ]
    )
    return settings


def cli_doc(library, path, title, content, source_type=SourceType.DOCS):
    return Document(library=library, path=path, title=title, content=content, source_type=source_type)


@pytest.fixture
def run(monkeypatch, indexed: Settings):
    """Invoke main() against the indexed fixture settings."""
    monkeypatch.setattr(cli, "get_settings", lambda: indexed)

    def _run(*argv: str) -> None:
        cli.main(list(argv))

    return _run


class TestSearchCommand:
    """Test suite for `pf-docs search`."""

    def test_json_output(self, run, capsys):
        run("search", "TestStore", "--json")

        payload = json.loads(capsys.readouterr().out)
        assert payload["query"] == "TestStore"
        assert payload["source"] == "docs"
        assert [r["path"] for r in payload["results"]] == ["tca/Articles/Testing"]
        assert payload["results"][0]["source_type"] == "docs"

    def test_all_sources(self, run, capsys):
        run("search", "TestStore", "--source", "all")

        out = capsys.readouterr().out
        assert "[DOC]" in out
        assert "[EXAMPLE]" in out

    def test_no_results(self, run, capsys):
        run("search", "nothingmatchesthis", "--lib", "tca")

        out = capsys.readouterr().out
        assert 'No results found for: "nothingmatchesthis"' in out
        assert "--source all" in out

    def test_invalid_source_exits(self, run):
        with pytest.raises(SystemExit) as exc_info:
            run("search", "TestStore", "--source", "videos")
        assert exc_info.value.code == 1


class TestGetCommand:
    """Test suite for `pf-docs get`."""

    def test_document_with_header(self, run, capsys):
        run("get", "tca/Articles/Testing")

        out = capsys.readouterr().out
        assert out.startswith("# Testing\n")
        assert "> Path: tca/Articles/Testing" in out

    def test_code_is_previewed(self, run, capsys):
        run("get", "examples/SyncUps/SyncUps/App.swift")
        assert "50 of 80 lines shown" in capsys.readouterr().out

    def test_raw_code(self, run, capsys):
        run("get", "examples/SyncUps/SyncUps/App.swift", "--raw")

        out = capsys.readouterr().out
        assert "lines shown" not in out
        assert "// TestStore line 79" in out

    def test_json(self, run, capsys):
        run("get", "sharing/Articles/Persistence", "--json")

        payload = json.loads(capsys.readouterr().out)
        assert payload["title"] == "Persistence"
        assert payload["library"] == "sharing"
        assert payload["content"] == "fileStorage"

    def test_missing_document_exits(self, run):
        with pytest.raises(SystemExit) as exc_info:
            run("get", "tca/Nope")
        assert exc_info.value.code == 1

    def test_missing_document_json(self, run, capsys):
        with pytest.raises(SystemExit):
            run("get", "tca/Nope", "--json")
        assert json.loads(capsys.readouterr().out)["error"] == "Document not found"


class TestListAndStats:
    """Test suite for `pf-docs list` and `pf-docs stats`."""

    def test_list_by_source(self, run, capsys):
        run("list", "--source", "examples", "--json")

        docs = json.loads(capsys.readouterr().out)["docs"]
        assert [d["path"] for d in docs] == ["examples/SyncUps/SyncUps/App.swift"]

    def test_list_tree(self, run, capsys):
        run("list", "tca", "--tree")

        out = capsys.readouterr().out
        assert "tca/" in out
        assert "└── Articles/Testing" in out
        assert "Total: 1 documents" in out

    def test_list_available(self, run, capsys):
        run("list", "--available")
        assert "Total: 12 libraries" in capsys.readouterr().out

    def test_stats_json(self, run, capsys):
        run("stats", "--json")

        payload = json.loads(capsys.readouterr().out)
        assert payload["total_docs"] == 3
        assert payload["by_source"] == {"docs": 2, "examples": 1}
        assert payload["by_library"]["tca"] == 1

    def test_stats_lists_missing_libraries(self, run, capsys):
        run("stats")

        out = capsys.readouterr().out
        assert "Total indexed documents: 3" in out
        assert "Available libraries (not indexed):" in out
        assert "  dependencies:" in out


class TestInitAndUpdate:
    """Test suite for `pf-docs init` and `pf-docs update`."""

    def test_init_clones_and_indexes(self, settings: Settings):
        provider = FakeProvider(
            settings.repos_dir,
            {
                "tca": {f"{TCA_DOCS}/Articles/Testing.md": "# ``Store``\n\nTesting guide"},
                "episodes": {"0156-testable-state/Main.swift": "let x = 1\n"},
            },
        )

        cli.init(settings, ["tca"], episodes=True, provider=provider)

        store = IndexStore(settings.index_path)
        assert provider.acquired == ["tca", "episodes"]
        assert store.get_document("tca/Articles/Testing").title == "Store"
        assert store.stats().by_source == {"docs": 1, "episodes": 1}

    def test_init_skips_failed_sources(self, settings: Settings):
        provider = FakeProvider(
            settings.repos_dir,
            {"tca": {f"{TCA_DOCS}/Articles/Testing.md": "# Testing"}},
            failing={"dependencies"},
        )

        cli.init(settings, ["tca", "dependencies"], provider=provider)

        assert IndexStore(settings.index_path).stats().by_library == {"tca": 1}

    def test_init_defaults_to_all_libraries(self, settings: Settings):
        provider = FakeProvider(settings.repos_dir, {})
        cli.init(settings, provider=provider)
        assert len(provider.acquired) == 12

    def test_init_with_only_unknown_libraries_exits(self, settings: Settings):
        with pytest.raises(SystemExit):
            cli.init(settings, ["not-a-library"], provider=FakeProvider(settings.repos_dir, {}))

    def test_update_reindexes_changed_sources(self, settings: Settings):
        article = settings.repos_dir / get_library("tca").name / TCA_DOCS / "Articles/Testing.md"
        provider = FakeProvider(settings.repos_dir, {"tca": {f"{TCA_DOCS}/Articles/Testing.md": "# Old"}})
        cli.init(settings, ["tca"], provider=provider)

        article.write_text("# New", encoding="utf-8")
        provider.changed.add("tca")
        cli.update(settings, provider=provider)

        assert provider.refreshed == ["tca"]
        assert IndexStore(settings.index_path).get_document("tca/Articles/Testing").title == "New"

    def test_update_leaves_unchanged_sources(self, settings: Settings):
        article = settings.repos_dir / get_library("tca").name / TCA_DOCS / "Articles/Testing.md"
        provider = FakeProvider(settings.repos_dir, {"tca": {f"{TCA_DOCS}/Articles/Testing.md": "# Old"}})
        cli.init(settings, ["tca"], provider=provider)

        article.write_text("# New", encoding="utf-8")
        cli.update(settings, provider=provider)

        assert IndexStore(settings.index_path).get_document("tca/Articles/Testing").title == "Old"

    def test_update_without_clones_is_a_no_op(self, settings: Settings):
        provider = FakeProvider(settings.repos_dir, {})
        cli.update(settings, provider=provider)
        assert provider.refreshed == []


class TestMain:
    """Test suite for argument parsing and error handling."""

    def test_requires_a_command(self):
        with pytest.raises(SystemExit):
            cli.main([])

    def test_store_errors_exit(self, monkeypatch, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        monkeypatch.setattr(cli, "get_settings", lambda: Settings(data_dir=blocker / "data"))

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["stats"])
        assert exc_info.value.code == 1
