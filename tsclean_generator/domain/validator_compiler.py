"""
Rule-to-validator compiler.

Turns a rule token from the field DSL into a Zod validator expression:

    ============  ===============================
    rule          expression
    ============  ===============================
    (none)        base
    email         base.email()
    minlength=N   base.min(N)
    maxlength=N   base.max(N)
    min=N         base.min(N)
    max=N         base.max(N)
    enum=a|b|c    z.enum(["a", "b", "c"])
    ============  ===============================

Unrecognized tokens, malformed payloads and refinements the base validator
cannot carry are ignored and the base expression is returned unchanged.
"""

import json
import logging
import re
from typing import Optional, Union

from ..constants import FieldDSL, RuleTokens, ValidatorTypes
from .models import RuleKind, ValidatorRule

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")

_BOUND_KINDS = {
    RuleTokens.MIN_LENGTH: RuleKind.MIN_LENGTH,
    RuleTokens.MAX_LENGTH: RuleKind.MAX_LENGTH,
    RuleTokens.MIN: RuleKind.MIN,
    RuleTokens.MAX: RuleKind.MAX,
}


def _parse_number(text: str) -> Optional[Union[int, float]]:
    """Parse a bound payload; None when it is not a plain decimal number."""
    text = text.strip()
    if not _NUMBER_RE.match(text):
        return None
    return float(text) if "." in text else int(text)


def format_number(value: Union[int, float]) -> str:
    """Render a bound as a TypeScript numeric literal."""
    return repr(value)


def parse_rule(token: Optional[str]) -> ValidatorRule:
    """
    Parse a rule token into a ValidatorRule.

    Args:
        token: Rule segment of a field entry; empty or None means no rule

    Returns:
        ValidatorRule whose kind is UNKNOWN when the token is not understood

    Example:
        >>> parse_rule("enum=credit|debit").literals
        ('credit', 'debit')
        >>> parse_rule("min=0").value
        0
    """
    token = (token or "").strip()
    if not token:
        return ValidatorRule(kind=RuleKind.NONE)

    if token == RuleTokens.EMAIL:
        return ValidatorRule(kind=RuleKind.EMAIL, token=token)

    key, separator, payload = token.partition(FieldDSL.RULE_VALUE_SEPARATOR)
    if not separator:
        return ValidatorRule(kind=RuleKind.UNKNOWN, token=token)

    if key == RuleTokens.ENUM:
        literals = tuple(
            literal for literal in payload.split(FieldDSL.ENUM_SEPARATOR) if literal
        )
        if not literals:
            return ValidatorRule(kind=RuleKind.UNKNOWN, token=token)
        return ValidatorRule(kind=RuleKind.ENUM, literals=literals, token=token)

    kind = _BOUND_KINDS.get(key)
    value = _parse_number(payload)
    if kind is None or value is None:
        return ValidatorRule(kind=RuleKind.UNKNOWN, token=token)
    return ValidatorRule(kind=kind, value=value, token=token)


def is_applicable(base: str, rule: ValidatorRule) -> bool:
    """Whether the rule refines ``base`` (as opposed to being ignored)."""
    if rule.kind in (RuleKind.NONE, RuleKind.UNKNOWN):
        return False
    if rule.kind is RuleKind.ENUM:
        return True
    if rule.kind is RuleKind.EMAIL:
        return base == ValidatorTypes.STRING
    return base in ValidatorTypes.BOUNDED


def render_enum(literals) -> str:
    """Render a z.enum expression over the given literals, in order."""
    members = ", ".join(json.dumps(literal) for literal in literals)
    return f"z.enum([{members}])"


def compile_validator(base: str, rule: Union[ValidatorRule, str, None]) -> str:
    """
    Compile a rule into a validator expression on top of ``base``.

    Args:
        base: Zod base validator of the field type (e.g. 'z.string()')
        rule: Parsed rule, or the raw rule token

    Returns:
        The validator expression text
    """
    if not isinstance(rule, ValidatorRule):
        rule = parse_rule(rule)

    if not is_applicable(base, rule):
        if rule.kind is not RuleKind.NONE:
            logger.debug(f"Ignoring rule '{rule.token}' for validator {base}")
        return base

    if rule.kind is RuleKind.ENUM:
        return render_enum(rule.literals)
    if rule.kind is RuleKind.EMAIL:
        return f"{base}.email()"
    if rule.kind.is_lower_bound:
        return f"{base}.min({format_number(rule.value)})"
    return f"{base}.max({format_number(rule.value)})"


def enum_sample(rule: Union[ValidatorRule, str, None]) -> Optional[str]:
    """First literal of an enum rule, or None for any other rule."""
    if not isinstance(rule, ValidatorRule):
        rule = parse_rule(rule)
    if rule.kind is RuleKind.ENUM:
        return rule.literals[0]
    return None
