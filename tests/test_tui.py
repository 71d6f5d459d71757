from uqcheck.cli.tui import _MAX_TABLE_NAME_WIDTH, _table_choice_title, _truncate


def test_table_choice_title_shows_name_before_count_and_aligns_column():
    first = _table_choice_title("users", 3, name_width=12)
    second = _table_choice_title("accounts", 1, name_width=12)

    assert first.startswith("users")
    assert second.startswith("accounts")
    assert first.index("(rules: ") == second.index("(rules: ")


def test_table_choice_title_truncates_long_names():
    long_name = "x" * (_MAX_TABLE_NAME_WIDTH + 10)
    rendered = _table_choice_title(long_name, 2, name_width=_MAX_TABLE_NAME_WIDTH)

    assert "..." in rendered
    assert "(rules: 2)" in rendered
    assert _truncate(long_name, _MAX_TABLE_NAME_WIDTH).endswith("...")
