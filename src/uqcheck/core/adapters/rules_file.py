from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from uqcheck.core.models import UniquenessRule
from uqcheck.core.rules import StaticRuleCatalog, rules_from_validation
from uqcheck.core.schema import CatalogError

# Keys that make a validation apply to a subset of rows only.
_CONDITION_KEYS = ("conditions", "if", "unless")


class RulesFileError(CatalogError):
    """Raised when a rules file cannot be read or has an invalid structure."""


def _as_str_list(value: Any, *, where: str, key: str) -> list[str | None]:
    """Accept a single name or a list of names."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(v is None or isinstance(v, str) for v in value):
        return list(value)
    raise RulesFileError(f"{where}: `{key}` must be a string or a list of strings.")


def _is_conditional(validation: dict[str, Any], *, where: str) -> bool:
    """A condition is a non-empty string or true; null, false and "" mean none."""
    conditional = False
    for key in _CONDITION_KEYS:
        value = validation.get(key)
        if value is not None and not isinstance(value, (str, bool)):
            raise RulesFileError(
                f"{where}: `{key}` must be a string, true/false or null."
            )
        if value not in (None, False, ""):
            conditional = True
    return conditional


def _parse_validation(
    validation: Any, *, model: str | None, where: str
) -> list[UniquenessRule]:
    if not isinstance(validation, dict):
        raise RulesFileError(f"{where}: validation must be an object.")

    case_sensitive = validation.get("case_sensitive", True)
    if not isinstance(case_sensitive, bool):
        raise RulesFileError(f"{where}: `case_sensitive` must be true or false.")

    attributes = _as_str_list(validation.get("attributes"), where=where, key="attributes")
    scope = _as_str_list(validation.get("scope"), where=where, key="scope")
    if any(s is None or not s.strip() for s in scope):
        raise RulesFileError(f"{where}: `scope` must not contain empty names.")

    return rules_from_validation(
        attributes,
        scope=[s for s in scope if s is not None],
        conditional=_is_conditional(validation, where=where),
        case_sensitive=case_sensitive,
        model=model,
    )


def parse_rules(payload: Any) -> StaticRuleCatalog:
    """
    Build a rule catalog from a decoded rules document.

    Expected shape:
        {"models": [{"name": "User", "table": "users",
                     "validations": [{"attributes": ["email"],
                                      "scope": ["company_id"],
                                      "case_sensitive": true,
                                      "conditions": null}]}]}

    Validations without attributes are accepted and produce no rules.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("models"), list):
        raise RulesFileError("Rules file must be an object with a `models` list.")

    rules: dict[str, list[UniquenessRule]] = {}
    for i, model in enumerate(payload["models"]):
        where = f"models[{i}]"
        if not isinstance(model, dict):
            raise RulesFileError(f"{where}: model must be an object.")

        table = model.get("table")
        if not isinstance(table, str) or not table.strip():
            raise RulesFileError(f"{where}: `table` is required.")
        name = model.get("name")
        if name is not None and not isinstance(name, str):
            raise RulesFileError(f"{where}: `name` must be a string.")
        if name:
            where = f"{where} ({name})"

        validations = model.get("validations")
        if validations is None:
            validations = []
        if not isinstance(validations, list):
            raise RulesFileError(f"{where}: `validations` must be a list.")

        table_rules: list[UniquenessRule] = []
        for j, validation in enumerate(validations):
            table_rules.extend(
                _parse_validation(
                    validation, model=name, where=f"{where}.validations[{j}]"
                )
            )
        if table_rules:
            rules.setdefault(table, []).extend(table_rules)

    return StaticRuleCatalog(rules)


def load_rules_file(path: str | Path) -> StaticRuleCatalog:
    """Read and parse a JSON rules file."""
    path = Path(path)
    try:
        payload = json.loads(path.read_text())
    except OSError as exc:
        raise RulesFileError(f"Cannot read rules file '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RulesFileError(f"Rules file '{path}' is not valid JSON: {exc}") from exc
    return parse_rules(payload)
