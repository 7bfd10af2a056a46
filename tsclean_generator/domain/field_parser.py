"""
Parser for the compact field DSL.

A field specification is a comma-separated list of ``name:type[:rule]``
entries, e.g. ``name:string:minlength=3,price:number:min=0``. Splitting is
purely positional and there is no escaping: a comma or a colon inside a name
or a rule breaks the entry apart.
"""

import logging
from typing import Iterable, List, Optional

from ..constants import DefaultConfig, FieldDSL
from .models import FieldSpec

logger = logging.getLogger(__name__)


def parse_field(entry: str) -> FieldSpec:
    """
    Parse a single ``name:type[:rule]`` entry.

    The entry is split on ':' into at most three parts, so everything after
    the second colon belongs to the rule. A missing type or rule becomes an
    empty string; surrounding whitespace of each part is stripped.

    Example:
        >>> parse_field("price:number:min=0")
        FieldSpec(name='price', type_name='number', rule='min=0')
    """
    parts = [part.strip() for part in entry.split(FieldDSL.PART_SEPARATOR, FieldDSL.MAX_PARTS - 1)]
    parts += [""] * (FieldDSL.MAX_PARTS - len(parts))
    name, type_name, rule = parts
    return FieldSpec(name=name, type_name=type_name, rule=rule)


def parse_fields(spec: str) -> List[FieldSpec]:
    """
    Parse a field specification into an ordered list of FieldSpec.

    Empty entries (for instance from a trailing comma) are skipped. The order
    of the returned fields is the order they were declared in.

    Args:
        spec: Comma-separated ``name:type[:rule]`` entries

    Returns:
        The fields in declaration order
    """
    fields: List[FieldSpec] = []
    for entry in spec.split(FieldDSL.FIELD_SEPARATOR):
        if not entry.strip():
            logger.debug(f"Skipping empty field entry in '{spec}'")
            continue
        fields.append(parse_field(entry))
    return fields


def serialize_fields(fields: Iterable[FieldSpec]) -> str:
    """Write fields back in the canonical ``name:type[:rule],...`` form."""
    return FieldDSL.FIELD_SEPARATOR.join(f.to_token() for f in fields)


def canonicalize(spec: str) -> str:
    """Canonical form of a field specification (parse, then serialize)."""
    return serialize_fields(parse_fields(spec))


def resolve_fields(spec: Optional[str], default: str = DefaultConfig.DEFAULT_FIELDS) -> List[FieldSpec]:
    """
    Parse ``spec``, substituting the default field set when none is given.

    Used by the CLI for ``--feature`` flags without a ``--fields`` value. A
    specification that contains no entries at all (e.g. ``","``) is treated
    the same as a missing one.
    """
    fields = parse_fields(spec) if spec else []
    if not fields:
        logger.debug(f"No fields given, using default fields '{default}'")
        fields = parse_fields(default)
    return fields
