from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Set

from .rules.base import Rule


@dataclass(slots=True)
class RuleActivation:
    """Session-wide rule switches.

    ``enabled_rules`` only turns on rules that are off by default; it never
    overrides an entry in ``disabled_rules`` or ``disabled_categories``.
    """

    disabled_rules: Set[str] = field(default_factory=set)
    disabled_categories: Set[str] = field(default_factory=set)
    enabled_rules: Set[str] = field(default_factory=set)


def is_active(rule: Rule, activation: RuleActivation) -> bool:
    """Decide whether a rule takes part in a check. Unknown ids are ignored."""
    if rule.id in activation.disabled_rules:
        return False
    if rule.category is not None and rule.category.id in activation.disabled_categories:
        return False
    if rule.default_off and rule.id not in activation.enabled_rules:
        return False
    return True


def active_rules(rules: Iterable[Rule], activation: RuleActivation) -> List[Rule]:
    """Filter rules down to the active ones, keeping their order."""
    return [rule for rule in rules if is_active(rule, activation)]
