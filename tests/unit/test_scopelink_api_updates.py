import logging

import pytest

from scopelink.api.updates import update_dependencies, update_inter_project_dependencies
from scopelink.api.updates.cmd_updates import cmd_updates
from scopelink.api.workspace import ArgumentInvalid, UpdateFailed
from tests.conftest import FakePackageManager, read_package, run_cmd, write_config, write_package

NCU = "npx npm-check-updates /^@acme\\// -u"


@pytest.fixture
def app(workspace):
    write_package(workspace / "a", "@acme/a", version="1.4.0")
    write_package(workspace / "b", "@not-acme/b", version="9.9.9")
    return write_package(
        workspace / "app",
        "@acme/app",
        dependencies={"@acme/a": "^1.0.0", "@acme/b": "^0.1.0", "lodash": "^4.17.0"},
        devDependencies={"@acme/c": "^2.0.0"},
    )


@pytest.mark.parametrize("scope", [None, ""])
def test_scope_is_required(scope):
    with pytest.raises(ArgumentInvalid, match="Scope parameter is required"):
        update_dependencies(scope, package_manager=FakePackageManager())


def test_scope_must_start_with_at():
    with pytest.raises(ArgumentInvalid, match='Invalid scope "acme"'):
        update_inter_project_dependencies("acme", package_manager=FakePackageManager())


# =============================================================================
# Inter-project mode
# =============================================================================


def test_inter_project_pins_sibling_and_published_versions(app):
    pm = FakePackageManager()
    pm.versions = {"@acme/b": "0.3.1", "@acme/c": "2.1.0"}

    updated = update_inter_project_dependencies("@acme", cwd=app, package_manager=pm)

    assert updated == [
        "@acme/a: ^1.0.0 → ^1.4.0",
        "@acme/b: ^0.1.0 → ^0.3.1",
        "@acme/c: ^2.0.0 → ^2.1.0",
    ]
    manifest = read_package(app)
    assert manifest["dependencies"] == {"@acme/a": "^1.4.0", "@acme/b": "^0.3.1", "lodash": "^4.17.0"}
    assert manifest["devDependencies"] == {"@acme/c": "^2.1.0"}
    assert pm.commands() == ["npm view @acme/b version", "npm view @acme/c version", "npm install"]
    assert pm.commands_in(app) == ["npm install"]


def test_inter_project_skips_unresolvable_versions(app, caplog):
    pm = FakePackageManager()
    pm.fail("npm view @acme/b version")

    with caplog.at_level(logging.WARNING, logger="scopelink"):
        updated = update_inter_project_dependencies("@acme", cwd=app, package_manager=pm)

    assert updated == ["@acme/a: ^1.0.0 → ^1.4.0"]
    assert read_package(app)["dependencies"]["@acme/b"] == "^0.1.0"
    assert sum("UPDATES_VERSION_NOT_FOUND" in r.getMessage() for r in caplog.records) == 2


def test_inter_project_up_to_date_does_nothing(workspace):
    write_package(workspace / "a", "@acme/a", version="1.4.0")
    app = write_package(workspace / "app", "@acme/app", dependencies={"@acme/a": "^1.4.0"})
    before = (app / "package.json").read_text()
    pm = FakePackageManager()

    assert update_inter_project_dependencies("@acme", cwd=app, package_manager=pm) == []
    assert (app / "package.json").read_text() == before
    assert pm.calls == []


def test_inter_project_dry_run_writes_nothing(app):
    before = (app / "package.json").read_text()
    pm = FakePackageManager()
    pm.versions = {"@acme/b": "0.3.1", "@acme/c": "2.1.0"}

    updated = update_inter_project_dependencies("@acme", cwd=app, dry_run=True, package_manager=pm)

    assert len(updated) == 3
    assert (app / "package.json").read_text() == before
    assert "npm install" not in pm.commands()


def test_inter_project_install_failure(app):
    pm = FakePackageManager()
    pm.versions = {"@acme/b": "0.3.1", "@acme/c": "2.1.0"}
    pm.fail("npm install")

    with pytest.raises(UpdateFailed, match="Failed to update lock file"):
        update_inter_project_dependencies("@acme", cwd=app, package_manager=pm)
    assert read_package(app)["dependencies"]["@acme/a"] == "^1.4.0"


# =============================================================================
# Scope mode
# =============================================================================


def test_scope_update_runs_ncu_and_installs(app):
    pm = FakePackageManager()
    pm.ncu_output = " @acme/a  ^1.0.0  →  ^1.4.0\n"

    assert update_dependencies("@acme", cwd=app, package_manager=pm) == "Updated dependencies matching @acme scope"
    assert pm.commands_in(app) == [NCU, "npm install"]


def test_scope_update_skips_install_when_current(app):
    pm = FakePackageManager()
    pm.ncu_output = "All dependencies match the latest package versions :)\n"

    update_dependencies("@acme", cwd=app, package_manager=pm)

    assert pm.commands() == [NCU]


def test_scope_update_ncu_failure(app):
    pm = FakePackageManager()
    pm.fail(NCU)

    with pytest.raises(UpdateFailed, match="Failed to update dependencies"):
        update_dependencies("@acme", cwd=app, package_manager=pm)


def test_scope_update_dry_run(app):
    pm = FakePackageManager()

    assert update_dependencies("@acme", cwd=app, dry_run=True, package_manager=pm) == "Would update dependencies matching @acme scope"
    assert pm.calls == []


# =============================================================================
# Command
# =============================================================================


def test_cmd_updates_inter_project(app, monkeypatch):
    monkeypatch.chdir(app)
    pm = FakePackageManager()
    pm.versions = {"@acme/b": "0.3.1", "@acme/c": "2.1.0"}

    result = run_cmd(cmd_updates, "@acme", inter_project=True, package_manager=pm)

    assert result.success is True
    assert result.result == "Updated 3 inter-project dependencies"
    assert result.output["updated"][0] == "@acme/a: ^1.0.0 → ^1.4.0"


def test_cmd_updates_scope_from_config(app, monkeypatch, scopelink_home):
    monkeypatch.chdir(app)
    write_config(scopelink_home, {"updates": {"scope": "@acme"}})

    result = run_cmd(cmd_updates, dry_run=True, package_manager=FakePackageManager())

    assert result.success is True
    assert result.output["scope"] == "@acme"
    assert result.result == "Would update dependencies matching @acme scope"


def test_cmd_updates_missing_scope(app, monkeypatch):
    monkeypatch.chdir(app)

    result = run_cmd(cmd_updates, package_manager=FakePackageManager())

    assert result.success is False
    assert result.result.startswith("updates failed: Scope parameter is required")
    assert result.output["errors"]
