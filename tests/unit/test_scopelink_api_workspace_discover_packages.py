import logging

from scopelink.api.workspace import discover_packages
from tests.conftest import write_package


def test_discovers_root_and_nested_packages(workspace):
    write_package(workspace, "@acme/root")
    write_package(workspace / "packages" / "a", "@acme/a")
    write_package(workspace / "packages" / "b", "@acme/b")

    records = discover_packages([workspace])

    assert [r.name for r in records] == ["@acme/root", "@acme/a", "@acme/b"]
    assert records[1].directory == workspace / "packages" / "a"


def test_skips_node_modules_and_hidden_directories(workspace):
    write_package(workspace / "a", "@acme/a")
    write_package(workspace / "node_modules" / "lodash", "lodash")
    write_package(workspace / "a" / "node_modules" / "@acme" / "b", "@acme/b")
    write_package(workspace / ".cache" / "c", "@acme/c")

    assert [r.name for r in discover_packages([workspace])] == ["@acme/a"]


def test_invalid_manifest_is_logged_and_skipped(workspace, caplog):
    write_package(workspace / "a", "@acme/a")
    broken = workspace / "broken"
    broken.mkdir()
    (broken / "package.json").write_text("{ not json")

    with caplog.at_level(logging.WARNING, logger="scopelink"):
        records = discover_packages([workspace])

    assert [r.name for r in records] == ["@acme/a"]
    assert any("PACKAGE_JSON_PARSE_FAILED" in r.getMessage() and str(broken) in r.getMessage() for r in caplog.records)


def test_manifest_with_undecodable_bytes_is_logged_and_skipped(workspace, caplog):
    write_package(workspace / "good", "@acme/good")
    bad = workspace / "bad"
    bad.mkdir()
    (bad / "package.json").write_bytes(b'{"name": "\xff"}')

    with caplog.at_level(logging.WARNING, logger="scopelink"):
        records = discover_packages([workspace])

    assert [r.name for r in records] == ["@acme/good"]
    assert any("PACKAGE_JSON_PARSE_FAILED" in r.getMessage() and str(bad) in r.getMessage() for r in caplog.records)


def test_manifest_without_name_is_skipped(workspace):
    write_package(workspace / "a", "@acme/a")
    write_package(workspace / "tooling", None)

    assert [r.name for r in discover_packages([workspace])] == ["@acme/a"]


def test_overlapping_roots_report_each_package_once(workspace):
    write_package(workspace / "packages" / "a", "@acme/a")
    write_package(workspace / "packages" / "b", "@acme/b")

    records = discover_packages([workspace, workspace / "packages", workspace / "packages" / "a"])

    assert [r.name for r in records] == ["@acme/a", "@acme/b"]


def test_multiple_roots_are_merged_and_sorted(tmp_path):
    second = write_package(tmp_path / "second" / "z", "@other/z").parent
    first = write_package(tmp_path / "first" / "y", "@acme/y").parent

    records = discover_packages([second, first])

    assert [r.name for r in records] == ["@acme/y", "@other/z"]


def test_missing_root_is_logged(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="scopelink"):
        assert discover_packages([tmp_path / "nope"]) == []
    assert any("WORKSPACE_ROOT_MISSING" in r.getMessage() for r in caplog.records)


def test_records_carry_all_dependency_sections(workspace):
    write_package(
        workspace / "a",
        "@acme/a",
        dependencies={"@acme/b": "^1.0.0"},
        devDependencies={"@acme/c": "^1.0.0"},
        peerDependencies={"@acme/d": "*"},
        optionalDependencies={"@acme/e": "*"},
    )

    (record,) = discover_packages([workspace])

    assert record.all_dependency_names() == {"@acme/b", "@acme/c", "@acme/d", "@acme/e"}
    assert record.version == "1.0.0"
