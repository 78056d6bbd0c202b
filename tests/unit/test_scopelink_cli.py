import json

import pytest
import yaml
from typer.testing import CliRunner

from scopelink.cli import main
from scopelink.cli._create_app import _create_app
from scopelink.cli._parse_scope_roots import _parse_scope_roots
from tests.conftest import write_package


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def app_dir(workspace, monkeypatch):
    write_package(workspace / "a", "@acme/a")
    app = write_package(workspace / "app", "@acme/app", dependencies={"@acme/a": "^1.2.3"})
    monkeypatch.chdir(app)
    return app


def test_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.startswith("scopelink ")


def test_help_lists_domains(runner):
    result = runner.invoke(_create_app(), ["--help"])

    assert result.exit_code == 0
    for name in ("link", "unlink", "versions", "updates", "config"):
        assert name in result.stdout


def test_invalid_display_format(runner):
    result = runner.invoke(_create_app(), ["--display", "xml", "config"])

    assert result.exit_code == 1


def test_config_lists_sections(runner):
    result = runner.invoke(_create_app(), ["config"])

    assert result.exit_code == 0
    output = yaml.safe_load(result.stdout)
    assert output["content"]["sections"] == ["dry_run", "workspace", "link", "unlink", "versions", "updates"]


def test_config_unknown_section_exits_nonzero(runner):
    result = runner.invoke(_create_app(), ["--display", "json", "config", "nope"])

    assert result.exit_code == 1
    assert json.loads(result.stdout)["errors"] == ["Unknown section: nope"]


def test_link_dry_run_smart_mode(runner, app_dir):
    result = runner.invoke(_create_app(), ["--display", "json", "link", "--dry-run"])

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output["mode"] == "smart"
    assert output["dry_run"] is True
    assert output["summary"] == "DRY RUN: Would self-link and attempt to link 1 dependencies"
    assert not (app_dir / "node_modules").exists()


def test_link_dry_run_explicit_mode_with_trailing_options(runner, workspace, app_dir):
    result = runner.invoke(_create_app(), ["-d", "json", "link", "@acme/a", "--dry-run", "-D", str(workspace)])

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output["argument"] == "@acme/a"
    assert output["summary"] == "Successfully linked 1 package(s): @acme/a"


def test_link_status(runner, workspace, app_dir):
    slot = app_dir / "node_modules" / "@acme" / "a"
    slot.parent.mkdir(parents=True)
    slot.symlink_to("../../../a")

    result = runner.invoke(_create_app(), ["-d", "json", "link", "status", "-D", str(workspace)])

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output["package_count"] == 1
    assert output["packages"][0]["name"] == "@acme/app"


def test_link_invalid_argument_fails(runner, workspace, app_dir):
    result = runner.invoke(_create_app(), ["-d", "json", "link", "acme", "--dry-run", "-D", str(workspace)])

    assert result.exit_code == 1
    assert "must start with @" in json.loads(result.stdout)["errors"][0]


def test_link_unscoped_package_exits_nonzero(runner, workspace, monkeypatch):
    monkeypatch.chdir(write_package(workspace / "plain", "plain"))

    result = runner.invoke(_create_app(), ["-d", "json", "link", "--dry-run"])

    assert result.exit_code == 1
    assert json.loads(result.stdout)["errors"][0].startswith("PACKAGE_SCOPE_MISSING:")


def test_link_bad_scope_root(runner, app_dir):
    result = runner.invoke(_create_app(), ["link", "--dry-run", "--scope-root", "vendor"])

    assert result.exit_code == 2


def test_unlink_dry_run_prints_plan(runner, app_dir):
    result = runner.invoke(_create_app(), ["-d", "json", "unlink", "--dry-run", "--clean-node-modules"])

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output["clean_node_modules"] is True
    assert output["summary"].splitlines()[0] == "DRY RUN: Would execute unlink steps for @acme/app:"


def test_versions_minor_dry_run(runner, workspace, app_dir):
    result = runner.invoke(_create_app(), ["-d", "json", "versions", "minor", "--dry-run", "-D", str(workspace)])

    assert result.exit_code == 0
    output = json.loads(result.stdout)
    assert output["changes"] == ["@acme/app dependencies @acme/a: ^1.2.3 -> ^1.2"]
    assert json.loads((app_dir / "package.json").read_text())["dependencies"]["@acme/a"] == "^1.2.3"


def test_updates_dry_run(runner, app_dir):
    result = runner.invoke(_create_app(), ["-d", "json", "updates", "@acme", "--dry-run"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["summary"] == "Would update dependencies matching @acme scope"


def test_updates_requires_scope(runner, app_dir):
    result = runner.invoke(_create_app(), ["-d", "json", "updates", "--dry-run"])

    assert result.exit_code == 1
    assert json.loads(result.stdout)["success"] is False


def test_parse_scope_roots():
    assert _parse_scope_roots(["@vendor=../vendor", "@other=/abs/other"]) == {
        "@vendor": "../vendor",
        "@other": "/abs/other",
    }
    with pytest.raises(ValueError):
        _parse_scope_roots(["vendor=../vendor"])
    with pytest.raises(ValueError):
        _parse_scope_roots(["@vendor"])
