"""
Tree to flat rule conversion

flatten_tree() turns every root-to-bid path of a rule tree into a
ConditionedRule, so rule listings and "show all rules" views can iterate
a convention without a live context. On each path the condition of a
taken yes-branch is kept as is; a no-branch contributes a negated copy.

Conditions are split into auction and hand conditions by name.
"""

import re

from condition_evaluator import ConditionedRule, build_explanation, is_conditioned_rule
from conditions import AUCTION, Condition, ConditionResult
from rule_tree import BidNode, DecisionNode, FallbackNode, MalformedTreeError

NEGATION_PREFIX = 'not-'

AUCTION_CONDITION_NAMES = frozenset([
    'auction',
    'is-opener',
    'is-responder',
    'partner opened',
    'opponent-bid',
    'no-prior-bid',
    'bidding-round',
    'seat-has-bid',
    'advance-after-double',
    'opponent-acted',
    'partner-opened-major',
    'partner-opened-minor',
])

# partner_opened_at / partner_bid_at names carry the bid: partner-opened-1H, partner-bid-3C
AUCTION_NAME_PATTERNS = [re.compile(r'^partner-opened-\d'), re.compile(r'^partner-bid-\d')]

# partner_opened(strain) names: "partner opened H"
AUCTION_NAME_PREFIXES = ['partner opened']


def is_auction_condition(name):
    """True if a condition name (or a negation of one) is a pure auction check"""
    if name in AUCTION_CONDITION_NAMES:
        return True
    if any(pattern.match(name) for pattern in AUCTION_NAME_PATTERNS):
        return True
    if any(name.startswith(prefix) for prefix in AUCTION_NAME_PREFIXES):
        return True
    if name.startswith(NEGATION_PREFIX):
        return is_auction_condition(name[len(NEGATION_PREFIX):])
    return False


def negate_condition(condition):
    """
    The no-branch form of a decision's condition. Inference metadata stays
    on the positive form only.
    """
    return Condition(
        f"{NEGATION_PREFIX}{condition.name}",
        f"Not: {condition.label}",
        lambda ctx: not condition.test(ctx),
        lambda ctx: f"Not: {condition.describe(ctx)}",
        category=condition.category,
    )


def flatten_tree(tree):
    """
    One ConditionedRule per path ending in a BidNode, in depth-first
    yes-before-no order. Paths ending in a FallbackNode produce nothing.
    The tree must not share nodes between branches.
    """
    rules = []
    stack = [(tree, [])]
    while stack:
        node, conditions = stack.pop()
        if isinstance(node, FallbackNode):
            continue
        if isinstance(node, BidNode):
            auction_conds = [c for c in conditions if is_auction_condition(c.name)]
            hand_conds = [c for c in conditions if not is_auction_condition(c.name)]
            rules.append(ConditionedRule(node.name, auction_conds, hand_conds, node.call,
                                         explanation=node.explanation))
        elif isinstance(node, DecisionNode):
            stack.append((node.no, conditions + [negate_condition(node.condition)]))
            stack.append((node.yes, conditions + [node.condition]))
        else:
            raise MalformedTreeError(node)
    return rules


def count_bid_paths(tree):
    """Number of root-to-leaf paths that end in a BidNode"""
    count = 0
    stack = [tree]
    while stack:
        node = stack.pop()
        if isinstance(node, DecisionNode):
            stack.extend([node.yes, node.no])
        elif isinstance(node, BidNode):
            count += 1
        elif not isinstance(node, FallbackNode):
            raise MalformedTreeError(node)
    return count


def audit_rule_classification(rules, convention_id=''):
    """
    Check flattened rules against the classification rules:
    - every auction condition name classifies as auction
    - no hand condition name classifies as auction
    - no hand condition is tagged category 'auction'
    - no auction condition carries inference metadata
    Returns a list of violation messages (empty when clean).
    """
    prefix = f"{convention_id}/" if convention_id else ''
    violations = []
    for rule in rules:
        if not is_conditioned_rule(rule):
            continue
        for cond in rule.auction_conditions:
            if not is_auction_condition(cond.name):
                violations.append(f"{prefix}{rule.name}: {cond.name!r} in auction conditions")
            if cond.inference:
                violations.append(f"{prefix}{rule.name}: {cond.name!r} has inference in auction conditions")
        for cond in rule.hand_conditions:
            if is_auction_condition(cond.name):
                violations.append(f"{prefix}{rule.name}: {cond.name!r} in hand conditions")
            if cond.category == AUCTION:
                violations.append(f"{prefix}{rule.name}: {cond.name!r} tagged auction in hand conditions")
    return violations


class BiddingRuleResult:
    """A recommended call together with the reasoning that produced it"""

    def __init__(self, call, rule_name, explanation, condition_results, raw_tree_result=None):
        self.call = call
        self.rule_name = rule_name
        self.explanation = explanation
        self.condition_results = condition_results
        self.raw_tree_result = raw_tree_result

    def __repr__(self):
        return f"BiddingRuleResult({self.call}, {self.rule_name!r})"


def tree_result_to_rule_result(result, context, call=None):
    """
    Map a full tree evaluation onto a BiddingRuleResult, or None if nothing
    matched. Every visited decision appears in the explanation, in order.
    """
    if result.matched is None:
        return None

    condition_results = [
        ConditionResult(entry.node.condition, entry.passed, entry.description)
        for entry in result.visited
    ]
    if call is None:
        call = result.matched.call(context)
    return BiddingRuleResult(call, result.matched.name, build_explanation(condition_results),
                             condition_results, raw_tree_result=result)
