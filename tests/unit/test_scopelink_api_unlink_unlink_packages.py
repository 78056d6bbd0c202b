import json
import logging
import os

import pytest

from scopelink.api.unlink import unlink_packages
from scopelink.api.workspace import ArgumentInvalid, ReinstallFailed
from tests.conftest import FakePackageManager, write_package


@pytest.fixture
def app(workspace):
    return write_package(
        workspace / "app",
        "@acme/app",
        dependencies={"@acme/a": "^1.0.0", "@vendor/ui": "^2.0.0"},
        devDependencies={"@vendor/icons": "^1.0.0"},
    )


# =============================================================================
# Smart mode
# =============================================================================


def test_smart_unlink_removes_global_link_and_checks(app):
    pm = FakePackageManager()

    assert unlink_packages(cwd=app, package_manager=pm) == "Successfully unlinked @acme/app"
    assert pm.commands_in(app) == ["npm unlink -g", "npm ls --link --json"]


def test_smart_unlink_global_failure_is_tolerated(app, caplog):
    pm = FakePackageManager()
    pm.fail("npm unlink -g")

    with caplog.at_level(logging.WARNING, logger="scopelink"):
        assert unlink_packages(cwd=app, package_manager=pm) == "Successfully unlinked @acme/app"
    assert any("UNLINK_GLOBAL_SKIP" in r.getMessage() for r in caplog.records)


def test_smart_unlink_removes_external_symlinks(app, workspace):
    vendor = write_package(workspace / "vendor-ui", "@vendor/ui")
    node_modules = app / "node_modules"
    (node_modules / "@vendor").mkdir(parents=True)
    (node_modules / "@vendor" / "ui").symlink_to(os.path.relpath(vendor, node_modules / "@vendor"))
    (node_modules / "@vendor" / "icons").mkdir()
    (node_modules / "@acme").mkdir()
    (node_modules / "@acme" / "a").symlink_to("../../../a")

    unlink_packages(cwd=app, externals=["@vendor/"], package_manager=FakePackageManager())

    assert not (node_modules / "@vendor" / "ui").is_symlink()
    assert (node_modules / "@vendor" / "icons").is_dir()
    assert (node_modules / "@acme" / "a").is_symlink()


def test_smart_unlink_clean_reinstalls(app):
    (app / "node_modules" / "@acme").mkdir(parents=True)
    (app / "package-lock.json").write_text("{}")
    pm = FakePackageManager()

    result = unlink_packages(cwd=app, clean_node_modules=True, package_manager=pm)

    assert result == "Successfully unlinked @acme/app"
    assert pm.commands_in(app) == ["npm unlink -g", "npm install", "npm ls --link --json"]
    assert not (app / "node_modules").exists()
    assert not (app / "package-lock.json").exists()


def test_smart_unlink_install_failure_raises(app):
    pm = FakePackageManager()
    pm.fail("npm install")
    before = os.getcwd()

    with pytest.raises(ReinstallFailed):
        unlink_packages(cwd=app, clean_node_modules=True, package_manager=pm)
    assert os.getcwd() == before


def test_smart_unlink_dry_run_plan(app):
    pm = FakePackageManager()

    plan = unlink_packages(cwd=app, dry_run=True, package_manager=pm)

    assert plan.splitlines() == [
        "DRY RUN: Would execute unlink steps for @acme/app:",
        "  1. npm unlink -g",
        "  2. Check for remaining links with npm ls --link",
        "  Note: Use --clean-node-modules flag to also clean and reinstall dependencies",
    ]
    assert pm.calls == []


def test_smart_unlink_dry_run_plan_with_externals_and_clean(app):
    vendor_slot = app / "node_modules" / "@vendor" / "ui"
    vendor_slot.parent.mkdir(parents=True)
    vendor_slot.symlink_to("/elsewhere/ui")
    pm = FakePackageManager()

    plan = unlink_packages(cwd=app, dry_run=True, externals=["@vendor/"], clean_node_modules=True, package_manager=pm)

    assert plan.splitlines() == [
        "DRY RUN: Would execute unlink steps for @acme/app:",
        "  0. Unlink external dependencies matching patterns: @vendor/",
        "  1. npm unlink -g",
        "  2. rm -rf node_modules package-lock.json",
        "  3. npm install",
        "  4. Check for remaining links with npm ls --link",
    ]
    assert vendor_slot.is_symlink()
    assert pm.calls == []


def test_smart_unlink_missing_manifest(workspace):
    pm = FakePackageManager()

    assert unlink_packages(cwd=workspace, package_manager=pm) == f"No package.json found in current directory: {workspace}"
    assert pm.calls == []


def test_smart_unlink_invalid_manifest(workspace):
    (workspace / "package.json").write_text("{not json")

    assert unlink_packages(cwd=workspace, package_manager=FakePackageManager()).startswith("Failed to parse package.json:")


def test_smart_unlink_manifest_without_name(workspace):
    app = write_package(workspace / "app", None)

    result = unlink_packages(cwd=app, package_manager=FakePackageManager())

    assert result == "Failed to parse package.json: package.json has no name field"


def test_remaining_same_scope_links_are_reported(app, caplog):
    pm = FakePackageManager()
    pm.links_json = json.dumps({"dependencies": {"@acme/a": {"version": "1.0.0"}, "@vendor/ui": {}}})

    with caplog.at_level(logging.WARNING, logger="scopelink"):
        unlink_packages(cwd=app, package_manager=pm)

    (warning,) = [r for r in caplog.records if "UNLINK_REMAINING_LINKS" in r.getMessage()]
    assert "@acme/a" in warning.getMessage()
    assert "@vendor/ui" not in warning.getMessage()


def test_remaining_links_fall_back_to_text_search(app, caplog):
    pm = FakePackageManager()
    pm.links_json = "@acme/app@1.0.0 -> ./linked/@acme/a"

    with caplog.at_level(logging.WARNING, logger="scopelink"):
        unlink_packages(cwd=app, package_manager=pm)

    assert any("UNLINK_REMAINING_LINKS_BASIC" in r.getMessage() for r in caplog.records)


def test_remaining_links_check_failure_is_ignored(app, caplog):
    pm = FakePackageManager()
    pm.fail("npm ls --link --json")

    with caplog.at_level(logging.WARNING, logger="scopelink"):
        assert unlink_packages(cwd=app, package_manager=pm) == "Successfully unlinked @acme/app"
    assert caplog.records == []


# =============================================================================
# Explicit mode
# =============================================================================


@pytest.fixture
def acme(workspace):
    a = write_package(workspace / "a", "@acme/a")
    b = write_package(workspace / "b", "@acme/b", dependencies={"@acme/a": "^1.0.0"})
    consumer = write_package(workspace / "consumer", "@other/consumer", devDependencies={"@acme/b": "^1.0.0"})
    return workspace, a, b, consumer


def test_explicit_unlink_consumers_then_sources(acme):
    workspace, a, b, consumer = acme
    pm = FakePackageManager()

    result = unlink_packages("@acme", roots=[workspace], package_manager=pm)

    assert result == "Successfully unlinked 2 package(s): @acme/a, @acme/b"
    assert pm.commands() == ["npm unlink @acme/a", "npm unlink", "npm unlink @acme/b", "npm unlink"]
    assert pm.commands_in(a) == ["npm unlink"]
    assert pm.commands_in(b) == ["npm unlink @acme/a", "npm unlink"]
    assert pm.commands_in(consumer) == ["npm unlink @acme/b"]


def test_explicit_unlink_exact_name(acme):
    workspace, a, b, consumer = acme
    pm = FakePackageManager()

    assert unlink_packages("@acme/b", roots=[workspace], package_manager=pm) == "Successfully unlinked 1 package(s): @acme/b"
    assert pm.commands_in(consumer) == ["npm unlink @acme/b"]
    assert pm.commands_in(a) == []


def test_explicit_unlink_consumer_failure_continues(acme, caplog):
    workspace, a, b, consumer = acme
    pm = FakePackageManager()
    pm.fail("npm unlink @acme/a", b)
    pm.fail("npm unlink", a)

    with caplog.at_level(logging.WARNING, logger="scopelink"):
        result = unlink_packages("@acme", roots=[workspace], package_manager=pm)

    assert result == "Successfully unlinked 2 package(s): @acme/a, @acme/b"
    assert pm.commands_in(consumer) == ["npm unlink @acme/b"]
    messages = [r.getMessage() for r in caplog.records]
    assert any("UNLINK_CONSUMER_FAILED" in m for m in messages)
    assert any("UNLINK_SOURCE_FAILED" in m for m in messages)


def test_explicit_unlink_unreachable_consumer_continues(acme, caplog, monkeypatch):
    workspace, a, b, consumer = acme
    pm = FakePackageManager()
    real_chdir = os.chdir

    def chdir(path):
        if os.path.realpath(path) == os.path.realpath(consumer):
            raise PermissionError(13, "Permission denied", str(path))
        real_chdir(path)

    monkeypatch.setattr(os, "chdir", chdir)
    with caplog.at_level(logging.WARNING, logger="scopelink"):
        result = unlink_packages("@acme", roots=[workspace], package_manager=pm)

    assert result == "Successfully unlinked 2 package(s): @acme/a, @acme/b"
    assert pm.commands_in(consumer) == []
    assert pm.commands_in(b) == ["npm unlink @acme/a", "npm unlink"]
    assert any("UNLINK_CONSUMER_FAILED" in r.getMessage() and "@other/consumer" in r.getMessage() for r in caplog.records)


def test_explicit_unlink_dry_run(acme):
    pm = FakePackageManager()

    result = unlink_packages("@acme", roots=[acme[0]], dry_run=True, package_manager=pm)

    assert result == "Successfully unlinked 2 package(s): @acme/a, @acme/b"
    assert pm.calls == []


def test_explicit_unlink_no_matches(acme):
    assert unlink_packages("@nope", roots=[acme[0]], package_manager=FakePackageManager()) == "No packages found in scope: @nope"


def test_explicit_unlink_argument_must_be_scoped(acme):
    with pytest.raises(ArgumentInvalid):
        unlink_packages("acme/a", roots=[acme[0]], package_manager=FakePackageManager())


def test_unlink_status(acme):
    assert unlink_packages("status", roots=[acme[0]]) == "No linked dependencies found in workspace."
