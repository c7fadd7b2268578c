from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional, Type, Union

from .errors import UnknownRuleType, ValidationError
from .models import RuleType
from .rule import PricingRule


def _coerce_rule_type(value: Union[RuleType, str]) -> RuleType:
    if isinstance(value, RuleType):
        return value
    try:
        return RuleType(str(value).strip().lower())
    except ValueError:
        raise UnknownRuleType(value) from None


class RuleFactory:
    """Maps rule type tags to rule classes. Unknown tags are always an error."""

    def __init__(self):
        self._rules: Dict[RuleType, Type[PricingRule]] = {}

    def register(self, rule_cls: Type[PricingRule]) -> None:
        rule_type = getattr(rule_cls, "rule_type", None)
        if not isinstance(rule_type, RuleType):
            raise ValueError(f"Rule class {rule_cls.__name__} missing rule_type")
        if rule_type in self._rules:
            raise ValueError(f"Duplicate rule_type registered: {rule_type.value}")
        self._rules[rule_type] = rule_cls

    def get(self, rule_type: Union[RuleType, str]) -> Type[PricingRule]:
        resolved = _coerce_rule_type(rule_type)
        if resolved not in self._rules:
            raise UnknownRuleType(rule_type)
        return self._rules[resolved]

    def create(
        self,
        rule_type: Union[RuleType, str],
        options: Optional[Mapping[str, Any]] = None,
    ) -> PricingRule:
        rule_cls = self.get(rule_type)
        if options is None:
            options = {}
        if not isinstance(options, Mapping):
            raise ValidationError(f"Options for rule type '{rule_cls.rule_type.value}' must be a mapping.")
        return rule_cls(**{str(key): value for key, value in options.items()})

    def types(self) -> Iterable[RuleType]:
        return self._rules.keys()


rule_factory = RuleFactory()


def register_rule(rule_cls: Type[PricingRule]) -> Type[PricingRule]:
    rule_factory.register(rule_cls)
    return rule_cls
