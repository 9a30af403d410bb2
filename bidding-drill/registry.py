"""
Convention registry and evaluation entry points

Callers (the drill strategy, the CLI) look a convention up by id and ask
for a bid without knowing how its rule tree is laid out:

    registry = ConventionRegistry()
    registry.register(stayman_config)
    result = registry.evaluate(ctx, registry.get('stayman'))

evaluate() returns None when no rule applies or when the matched call
would be illegal in the current auction.
"""

import threading
import weakref

from auction import is_legal_call
from condition_evaluator import build_explanation, evaluate_conditions, is_conditioned_rule
from rule_tree import is_tree_convention
from tree_compat import BiddingRuleResult, flatten_tree, tree_result_to_rule_result
from tree_evaluator import evaluate_tree, evaluate_tree_fast


class ConventionError(Exception):
    """Base class for registry configuration errors"""


class DuplicateConventionError(ConventionError):
    def __init__(self, convention_id):
        super().__init__(f"Convention {convention_id!r} is already registered.")
        self.convention_id = convention_id


class UnknownConventionError(ConventionError, KeyError):
    def __init__(self, convention_id, known_ids):
        self.convention_id = convention_id
        self.known_ids = list(known_ids)
        available = ', '.join(self.known_ids) or '(none)'
        super().__init__(f"Unknown convention {convention_id!r}. Available: {available}")

    def __str__(self):
        return self.args[0]


class NotTreeConventionError(ConventionError):
    def __init__(self, convention_id):
        super().__init__(f"Convention {convention_id!r} has no rule tree; "
                         "only tree conventions can be evaluated.")
        self.convention_id = convention_id


class DebugRuleResult:
    """One flattened rule's outcome for the "show all rules" view"""

    def __init__(self, rule_name, matched, is_legal, call=None, condition_results=None):
        self.rule_name = rule_name
        self.matched = matched
        self.is_legal = is_legal
        self.call = call
        self.condition_results = condition_results

    def __repr__(self):
        return (f"DebugRuleResult({self.rule_name!r}, matched={self.matched}, "
                f"is_legal={self.is_legal}, call={self.call})")


def get_effective_rules(config):
    """Flat rules for a convention: flattened from its tree, or its own flat list"""
    if is_tree_convention(config):
        return flatten_tree(config.rule_tree)
    return list(config.bidding_rules)


def evaluate_bidding_rules(context, config):
    """
    Suggest a call for `context` under `config`.
    Fast walk first; the described walk only runs once the call is known to be legal.
    """
    if not is_tree_convention(config):
        raise NotTreeConventionError(config.id)

    matched = evaluate_tree_fast(config.rule_tree, context)
    if matched is None:
        return None

    call = matched.call(context)
    if not is_legal_call(context.auction, call, context.seat):
        return None

    full = evaluate_tree(config.rule_tree, context)
    return tree_result_to_rule_result(full, context, call=call)


def evaluate_flat_rules(rules, context):
    """
    First rule, in list order, that matches and produces a legal call.
    Conditioned rules explain themselves from their condition results.
    """
    for rule in rules:
        if not rule.matches(context):
            continue
        call = rule.call(context)
        if not is_legal_call(context.auction, call, context.seat):
            continue
        if is_conditioned_rule(rule):
            results = evaluate_conditions(rule, context)
            return BiddingRuleResult(call, rule.name, build_explanation(results), results)
        return BiddingRuleResult(call, rule.name, rule.explanation, None)
    return None


def evaluate_all_rules(rules, context):
    """Evaluate every rule independently; a rule that did not match is never legal"""
    results = []
    for rule in rules:
        matched = bool(rule.matches(context))
        call = None
        is_legal = False
        if matched:
            call = rule.call(context)
            is_legal = is_legal_call(context.auction, call, context.seat)
        condition_results = evaluate_conditions(rule, context) if is_conditioned_rule(rule) else None
        results.append(DebugRuleResult(rule.name, matched, is_legal, call, condition_results))
    return results


def evaluate_all_bidding_rules(context, config):
    return evaluate_all_rules(get_effective_rules(config), context)


class ConventionRegistry:
    """
    Maps convention ids to configs. Build one per process (or per test);
    register/clear are serialised with a lock, lookups are not.
    """

    def __init__(self, configs=()):
        self._conventions = {}
        self._lock = threading.Lock()
        self._rule_cache = weakref.WeakKeyDictionary()
        for config in configs:
            self.register(config)

    def register(self, config):
        with self._lock:
            if config.id in self._conventions:
                raise DuplicateConventionError(config.id)
            self._conventions[config.id] = config

    def get(self, convention_id):
        config = self._conventions.get(convention_id)
        if config is None:
            raise UnknownConventionError(convention_id, self.list_ids())
        return config

    def __contains__(self, convention_id):
        return convention_id in self._conventions

    def __len__(self):
        return len(self._conventions)

    def list(self):
        """Registered configs in registration order"""
        return list(self._conventions.values())

    def list_ids(self):
        return list(self._conventions.keys())

    def clear(self):
        with self._lock:
            self._conventions.clear()
            self._rule_cache.clear()

    def get_effective_rules(self, config):
        """Flat rules for `config`, flattened once per config and reused"""
        rules = self._rule_cache.get(config)
        if rules is None:
            rules = get_effective_rules(config)
            self._rule_cache[config] = rules
        return list(rules)

    def evaluate(self, context, config):
        return evaluate_bidding_rules(context, config)

    def evaluate_all(self, context, config):
        return evaluate_all_rules(self.get_effective_rules(config), context)

