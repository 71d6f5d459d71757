import json

import pytest
from sqlalchemy import Column, Index, Integer, MetaData, String, Table, create_engine
from typer.testing import CliRunner

from uqcheck.cli.cli import app
from uqcheck.core.report import HEADER

runner = CliRunner()


@pytest.fixture()
def database_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'app.db'}"
    engine = create_engine(url)
    metadata = MetaData()
    users = Table(
        "users",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("email", String(255)),
        Column("handle", String(64)),
        Column("company_id", Integer),
    )
    Index("ix_users_email", users.c.email)
    Index("ux_users_handle", users.c.handle, unique=True)
    Table("audit_log", metadata, Column("id", Integer, primary_key=True), Column("ref", String))
    metadata.create_all(engine)
    engine.dispose()
    return url


def _rules(tmp_path, models):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"models": models}))
    return str(path)


def _users_rules(tmp_path):
    return _rules(
        tmp_path,
        [
            {
                "name": "User",
                "table": "users",
                "validations": [
                    {"attributes": ["email"], "scope": ["company_id"]},
                    {"attributes": ["handle"]},
                    {"attributes": ["email"], "case_sensitive": False},
                ],
            },
            {
                "name": "AuditLog",
                "table": "audit_log",
                "validations": [{"attributes": ["ref"]}],
            },
        ],
    )


def test_check_reports_missing_indexes_and_exits_non_zero(tmp_path, database_url):
    result = runner.invoke(
        app, ["check", "-d", database_url, "-r", _users_rules(tmp_path)]
    )

    assert result.exit_code == 1
    assert HEADER in result.output
    assert "  users: company_id, email\n" in result.output
    assert "  audit_log: ref\n" in result.output
    assert "users: handle" not in result.output


def test_check_clean_run_exits_zero(tmp_path, database_url):
    rules = _rules(
        tmp_path,
        [{"table": "users", "validations": [{"attributes": ["handle"]}]}],
    )

    result = runner.invoke(app, ["check", "-d", database_url, "-r", rules])

    assert result.exit_code == 0
    assert HEADER not in result.output


def test_check_reads_settings_from_environment(tmp_path, database_url):
    result = runner.invoke(
        app,
        ["check"],
        env={"UQCHECK_DATABASE_URL": database_url, "UQCHECK_RULES": _users_rules(tmp_path)},
    )

    assert result.exit_code == 1
    assert "users: company_id, email" in result.output


def test_check_ignores_tables_and_rules(tmp_path, database_url):
    result = runner.invoke(
        app,
        [
            "check",
            "-d",
            database_url,
            "-r",
            _users_rules(tmp_path),
            "--ignore-table",
            "^audit_",
            "--ignore",
            "users:email,company_id",
        ],
    )

    assert result.exit_code == 0
    assert HEADER not in result.output


def test_check_json_output(tmp_path, database_url):
    result = runner.invoke(
        app,
        [
            "check",
            "-d",
            database_url,
            "-r",
            _users_rules(tmp_path),
            "--format",
            "json",
            "--table",
            "users",
        ],
    )

    assert result.exit_code == 1
    start = result.output.index("{")
    payload, _ = json.JSONDecoder().raw_decode(result.output[start:])
    assert payload["violations"] == {"users": [["company_id", "email"]]}
    assert payload["counts"] == {
        "satisfied": 1,
        "violated": 1,
        "unverifiable": 1,
        "errored": 0,
    }


def test_check_unknown_table_is_a_configuration_error(tmp_path, database_url):
    rules = _rules(
        tmp_path, [{"table": "ghosts", "validations": [{"attributes": ["name"]}]}]
    )

    result = runner.invoke(app, ["check", "-d", database_url, "-r", rules])

    assert result.exit_code == 2
    assert "ghosts" in result.output


def test_check_invalid_rules_file(tmp_path, database_url):
    path = tmp_path / "rules.json"
    path.write_text("[]")

    result = runner.invoke(app, ["check", "-d", database_url, "-r", str(path)])

    assert result.exit_code == 2


def test_check_invalid_ignore_rule(tmp_path, database_url):
    result = runner.invoke(
        app,
        ["check", "-d", database_url, "-r", _users_rules(tmp_path), "--ignore", "users"],
    )

    assert result.exit_code == 2


def test_check_unknown_format(tmp_path, database_url):
    result = runner.invoke(
        app,
        ["check", "-d", database_url, "-r", _users_rules(tmp_path), "-f", "xml"],
    )

    assert result.exit_code == 2


def test_check_without_rules_warns_and_exits_zero(tmp_path, database_url):
    rules = _rules(tmp_path, [{"table": "users", "validations": [{"validator": "Custom"}]}])

    result = runner.invoke(app, ["check", "-d", database_url, "-r", rules])

    assert result.exit_code == 0
    assert HEADER not in result.output


def test_schema_indexes_list(database_url):
    result = runner.invoke(
        app, ["schema", "-d", database_url, "indexes-list", "--name", "^users$"]
    )

    assert result.exit_code == 0
    assert "ux_users_handle" in result.output
    assert "audit_log" not in result.output


def test_check_unknown_table_option_is_a_configuration_error(tmp_path, database_url):
    result = runner.invoke(
        app,
        ["check", "-d", database_url, "-r", _users_rules(tmp_path), "--table", "ghosts"],
    )

    assert result.exit_code == 2
    assert "ghosts" in result.output


def test_check_table_option_is_normalized(tmp_path, database_url):
    result = runner.invoke(
        app,
        ["check", "-d", database_url, "-r", _users_rules(tmp_path), "--table", "USERS"],
    )

    assert result.exit_code == 1
    assert "  users: company_id, email\n" in result.output
    assert "USERS:" not in result.output
