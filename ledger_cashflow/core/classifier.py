"""Rule-table driven classification of balance sheet accounts."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ledger_cashflow.models import SKIP, Classification
from ledger_cashflow.rules import BUILTIN_TABLES

logger = logging.getLogger(__name__)


class RuleTableError(ValueError):
    """Raised when a rule table document cannot be loaded."""


def _lower_keywords(values) -> List[str]:
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    return [str(v).strip().lower() for v in values if str(v).strip()]


class ClassificationRule(BaseModel):
    """
    One ordered entry of a rule table.

    The predicate holds when the account name contains any ``match`` keyword,
    any ``also_match`` keyword (when given), no ``exclude`` keyword, and the
    account-type hint contains any ``account_type`` keyword (when given).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    match: List[str] = Field(default_factory=list)
    also_match: List[str] = Field(default_factory=list)
    exclude: List[str] = Field(default_factory=list)
    account_type: List[str] = Field(default_factory=list)
    classification: Classification

    @field_validator("match", "also_match", "exclude", "account_type", mode="before")
    @classmethod
    def _normalize_keywords(cls, value):
        return _lower_keywords(value)

    @field_validator("classification", mode="before")
    @classmethod
    def _expand_shorthand(cls, value):
        if isinstance(value, str):
            return {"kind": value.strip().lower()}
        if isinstance(value, dict) and "kind" not in value:
            return {"kind": "categorized", **value}
        return value

    @model_validator(mode="after")
    def _require_predicate(self):
        if not self.match and not self.account_type:
            raise ValueError(f"rule '{self.name}' needs 'match' or 'account_type' keywords")
        return self

    def matches(self, name: str, account_type: str) -> bool:
        """Evaluate the predicate against lowercased name and type hint."""
        if self.match and not any(k in name for k in self.match):
            return False
        if self.also_match and not any(k in name for k in self.also_match):
            return False
        if self.exclude and any(k in name for k in self.exclude):
            return False
        if self.account_type and not any(k in account_type for k in self.account_type):
            return False
        return True


class RuleTable(BaseModel):
    """Versioned, ordered list of classification rules."""

    model_config = ConfigDict(frozen=True)

    version: str
    name: str
    rules: List[ClassificationRule] = Field(default_factory=list)

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_text(cls, value):
        return str(value)


def load_rule_table(source: Union[str, Path] = "default") -> RuleTable:
    """
    Load a rule table by builtin name ("default", "legacy") or YAML path.

    Args:
        source: Builtin table name or path to a YAML document

    Returns:
        Parsed RuleTable

    Raises:
        RuleTableError: If the document is missing or malformed
    """
    path = BUILTIN_TABLES.get(str(source), Path(source))
    if not path.exists():
        raise RuleTableError(f"Rule table not found: {source}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise RuleTableError(f"Invalid YAML in rule table {path}: {exc}") from exc

    if not isinstance(document, dict):
        raise RuleTableError(f"Rule table {path} must be a mapping")

    try:
        table = RuleTable.model_validate(document)
    except ValidationError as exc:
        raise RuleTableError(f"Invalid rule table {path}: {exc}") from exc

    logger.debug("Loaded rule table %s v%s (%d rules)", table.name, table.version, len(table.rules))
    return table


class AccountClassifier:
    """
    Maps free-text account names to cash flow classifications.

    Rules are evaluated in table order and the first match wins; an account no
    rule matches is skipped.
    """

    def __init__(self, rule_table: Optional[RuleTable] = None):
        """
        Initialize the classifier.

        Args:
            rule_table: Rule table to apply; the builtin default when omitted
        """
        self.rule_table = rule_table if rule_table is not None else load_rule_table("default")

    def match_rule(
        self, account_name: Optional[str], account_type: Optional[str] = None
    ) -> Optional[ClassificationRule]:
        """Return the first rule matching the account, or None."""
        name = (account_name or "").strip().lower()
        if not name:
            return None
        type_hint = (account_type or "").strip().lower()
        for rule in self.rule_table.rules:
            if rule.matches(name, type_hint):
                return rule
        return None

    def classify(
        self, account_name: Optional[str], account_type: Optional[str] = None
    ) -> Classification:
        rule = self.match_rule(account_name, account_type)
        if rule is None:
            logger.debug("No rule matched %r; skipping", account_name)
            return SKIP
        logger.debug("Account %r matched rule %s", account_name, rule.name)
        return rule.classification


@lru_cache(maxsize=1)
def _default_classifier() -> AccountClassifier:
    return AccountClassifier(load_rule_table("default"))


def classify(account_name: Optional[str], account_type: Optional[str] = None) -> Classification:
    """Classify one account with the builtin default rule table."""
    return _default_classifier().classify(account_name, account_type)
