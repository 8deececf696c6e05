"""Canonicalize raw repetition-rule text for the RRULE evaluator."""

import logging

from .exceptions import RRuleParseError

logger = logging.getLogger(__name__)

RRULE_PREFIX = "RRULE:"


def normalize_rrule(rule_text: str) -> str:
    """Return ``rule_text`` carrying the ``RRULE:`` property prefix.

    Args:
        rule_text: Raw rule, e.g. ``"FREQ=DAILY;COUNT=5"`` or
            ``"RRULE:FREQ=DAILY;COUNT=5"``

    Returns:
        Rule text accepted by ``dateutil.rrule.rrulestr``

    Raises:
        RRuleParseError: If the rule text is empty
    """
    if not rule_text or not rule_text.strip():
        raise RRuleParseError("Empty RRULE string")

    text = rule_text.strip()
    if text.upper().startswith(RRULE_PREFIX):
        return text

    logger.debug("Adding %s prefix to rule %r", RRULE_PREFIX, text)
    return f"{RRULE_PREFIX}{text}"
