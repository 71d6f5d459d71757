from uqcheck.core.models import Satisfied, Unverifiable, Violated
from uqcheck.core.report import HEADER, build_report, render_report, report_to_dict


def test_build_report_keeps_only_violations():
    report = build_report(
        {
            "users": [Satisfied(), Violated(("email",)), Unverifiable("conditional")],
            "accounts": [Satisfied()],
        }
    )

    assert dict(report) == {"users": (("email",),)}


def test_build_report_accepts_pairs_and_keeps_first_seen_table_order():
    report = build_report(
        [
            ("users", Violated(("email",))),
            ("accounts", Violated(("slug", "org_id"))),
            ("users", Violated(("handle", "tenant_id"))),
        ]
    )

    assert list(report) == ["users", "accounts"]
    assert report["users"] == (("email",), ("handle", "tenant_id"))


def test_build_report_does_not_repeat_a_column_set():
    report = build_report(
        [
            ("users", Violated(("email", "company_id"))),
            ("users", Violated(("company_id", "email"))),
        ]
    )

    assert report["users"] == (("email", "company_id"),)


def test_render_empty_report_is_empty_string():
    assert render_report(build_report({"users": [Satisfied()]})) == ""


def test_render_report_single_violation():
    report = build_report({"users": [Violated(("email",))]})

    assert render_report(report) == (
        "The following indexes should be created to back model-level "
        "uniqueness validations:\n"
        "  users: email\n"
    )


def test_render_report_lists_each_set_with_its_table():
    report = build_report(
        [
            ("users", Violated(("company_id", "department_id", "email"))),
            ("accounts", Violated(("slug",))),
            ("users", Violated(("handle",))),
        ]
    )

    assert render_report(report).splitlines() == [
        HEADER,
        "  users: company_id, department_id, email",
        "  users: handle",
        "  accounts: slug",
    ]


def test_report_to_dict_is_json_ready():
    report = build_report([("users", Violated(("email", "tenant_id")))])

    assert report_to_dict(report) == {"users": [["email", "tenant_id"]]}
