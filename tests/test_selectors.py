import pytest

from uqcheck.core.models import UniquenessRule
from uqcheck.core.rules import StaticRuleCatalog
from uqcheck.core.selectors import (
    AnySelector,
    ColumnsSelector,
    TableRegexSelector,
    filter_rules,
)


def test_table_regex_selector_matches():
    selector = TableRegexSelector(r"^audit_")

    assert selector.matches("audit_events", UniquenessRule.of("id")) is True
    assert selector.matches("users", UniquenessRule.of("id")) is False


def test_table_regex_selector_rejects_invalid_regex():
    with pytest.raises(ValueError, match="Invalid regex"):
        TableRegexSelector("(")


def test_columns_selector_ignores_column_order():
    selector = ColumnsSelector("users", ["company_id", "email"])

    assert selector.matches("users", UniquenessRule.of("email", ["company_id"]))
    assert selector.matches("USERS", UniquenessRule.of("company_id", ["email"]))
    assert not selector.matches("accounts", UniquenessRule.of("email", ["company_id"]))
    assert not selector.matches("users", UniquenessRule.of("email"))


def test_columns_selector_requires_columns():
    with pytest.raises(ValueError):
        ColumnsSelector("users", [])


def test_any_selector():
    selector = AnySelector([TableRegexSelector("^audit_"), ColumnsSelector("users", ["email"])])

    assert selector.matches("audit_log", UniquenessRule.of("id"))
    assert selector.matches("users", UniquenessRule.of("email"))
    assert not selector.matches("users", UniquenessRule.of("handle"))


def test_filter_rules_drops_ignored_rules_and_empty_tables():
    catalog = StaticRuleCatalog(
        {
            "users": [UniquenessRule.of("email"), UniquenessRule.of("handle")],
            "audit_log": [UniquenessRule.of("id")],
        }
    )

    filtered = filter_rules(
        catalog,
        AnySelector([TableRegexSelector("^audit_"), ColumnsSelector("users", ["email"])]),
    )

    assert filtered.table_names() == ["users"]
    assert filtered.rules_for("users") == (UniquenessRule.of("handle"),)


def test_filter_rules_without_selector_keeps_everything():
    catalog = StaticRuleCatalog({"users": [UniquenessRule.of("email")]})

    assert filter_rules(catalog, None).rules_for("users") == (UniquenessRule.of("email"),)
