"""Deny-list policy engine for automatic approvals.

Every rule is evaluated (no short-circuit) so the operator sees all
violations of a proposed action, not just the first one.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Tuple, Union

from remote_signer.schemas.action import ProposedAction

MessagePayload = Union[str, Dict[str, Any]]


@dataclass(frozen=True)
class DenyRule:
    """Blocks automatic approval of an action when ``check`` returns True."""

    id: str
    description: str
    check: Callable[[ProposedAction, FrozenSet[str]], bool]

    @property
    def reason(self) -> str:
        return f"{self.id}: {self.description}"


@dataclass(frozen=True)
class MessageDenyRule:
    """Blocks automatic signing of an off-chain message."""

    id: str
    description: str
    check: Callable[[MessagePayload], bool]

    @property
    def reason(self) -> str:
        return f"{self.id}: {self.description}"


@dataclass
class PolicyDecision:
    """Outcome of a deny-list evaluation."""

    denied: bool = False
    matched_rules: List[str] = field(default_factory=list)
    reasons: List[str] = field(default_factory=list)

    @classmethod
    def from_matches(cls, rules: Iterable[Union[DenyRule, MessageDenyRule]]) -> "PolicyDecision":
        rules = list(rules)
        return cls(
            denied=bool(rules),
            matched_rules=[rule.id for rule in rules],
            reasons=[rule.reason for rule in rules],
        )


# Safe management selectors, keyed by rule id.
SELECTOR_RULES: Dict[str, Tuple[str, Tuple[str, ...]]] = {
    "SAFE_OWNERSHIP_TRANSFER": (
        "Prevent Safe ownership transfer operations",
        (
            "0x0d582f13",  # addOwnerWithThreshold(address,uint256)
            "0xf8dc5dd9",  # removeOwner(address,address,uint256)
            "0xe318b52b",  # swapOwner(address,address,address)
        ),
    ),
    "SAFE_THRESHOLD_CHANGE": (
        "Prevent Safe threshold change operations",
        ("0x694e80c3",),  # changeThreshold(uint256)
    ),
    "SAFE_MODULE_MANAGEMENT": (
        "Prevent Safe module management operations",
        (
            "0x610b5925",  # enableModule(address)
            "0xe009cfde",  # disableModule(address,address)
        ),
    ),
}


def matches_selector(data: str, selectors: Iterable[str]) -> bool:
    """Case-insensitive prefix match of call data against function selectors."""
    if not data:
        return False
    data = data.lower()
    return any(data.startswith(selector.lower()) for selector in selectors)


def selector_rule(rule_id: str, description: str, selectors: Iterable[str]) -> DenyRule:
    """Build a rule denying calls whose data starts with any of the selectors."""
    selectors = tuple(selectors)
    return DenyRule(
        id=rule_id,
        description=description,
        check=lambda action, _trusted: matches_selector(action.data, selectors),
    )


def _untrusted_delegate_call(action: ProposedAction, trusted: FrozenSet[str]) -> bool:
    if not action.is_delegate_call:
        return False
    # No trusted targets configured: every delegate call is denied.
    if not trusted:
        return True
    return action.to.lower() not in trusted


DELEGATE_CALL_RULE = DenyRule(
    id="DELEGATE_CALL_RESTRICTION",
    description="Prevent delegate calls to untrusted contracts",
    check=_untrusted_delegate_call,
)

DEFAULT_RULES: Tuple[DenyRule, ...] = tuple(
    selector_rule(rule_id, description, selectors)
    for rule_id, (description, selectors) in SELECTOR_RULES.items()
) + (DELEGATE_CALL_RULE,)


class DenyListChecker:
    """Ordered deny rules plus the trusted delegate call allowlist."""

    def __init__(
        self,
        trusted_delegate_contracts: Iterable[str] = (),
        custom_rules: Iterable[DenyRule] = (),
        message_rules: Iterable[MessageDenyRule] = (),
    ):
        self.trusted_delegate_contracts: FrozenSet[str] = frozenset(
            address.strip().lower() for address in trusted_delegate_contracts if address.strip()
        )
        self._rules: List[DenyRule] = [*DEFAULT_RULES, *custom_rules]
        self._message_rules: List[MessageDenyRule] = list(message_rules)

    def evaluate(self, action: ProposedAction) -> PolicyDecision:
        """Check a proposed action against every rule."""
        return PolicyDecision.from_matches(
            rule for rule in self._rules if rule.check(action, self.trusted_delegate_contracts)
        )

    def evaluate_message(self, message: MessagePayload) -> PolicyDecision:
        """Check an off-chain message payload against the message rules."""
        return PolicyDecision.from_matches(
            rule for rule in self._message_rules if rule.check(message)
        )

    def add_rule(self, rule: DenyRule) -> None:
        """Append a rule. Ids are not unique; a duplicate id fires alongside the existing one."""
        self._rules.append(rule)

    def remove_rule(self, rule_id: str) -> None:
        """Remove every rule with the given id."""
        self._rules = [rule for rule in self._rules if rule.id != rule_id]

    @property
    def rules(self) -> List[DenyRule]:
        return list(self._rules)

    def add_message_rule(self, rule: MessageDenyRule) -> None:
        self._message_rules.append(rule)

    def remove_message_rule(self, rule_id: str) -> None:
        self._message_rules = [rule for rule in self._message_rules if rule.id != rule_id]

    @property
    def message_rules(self) -> List[MessageDenyRule]:
        return list(self._message_rules)
