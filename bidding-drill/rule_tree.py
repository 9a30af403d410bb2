"""
Rule trees for bidding conventions

A convention's logic is a strict binary tree:
- DecisionNode asks a Condition and continues down `yes` or `no`
- BidNode is a leaf that computes the recommended call
- FallbackNode is a leaf meaning "no rule applies here"

Trees are built once when a convention module is imported and never modified.
"""

from enum import Enum


class MalformedTreeError(TypeError):
    """A tree walker met something that is not a rule node"""

    def __init__(self, node):
        super().__init__(f"Unknown rule node: {node!r}")
        self.node = node


class NodeMetadata:
    """Optional teaching text attached to a node"""

    def __init__(self, description=None):
        self.description = description


class DecisionNode:
    def __init__(self, name, condition, yes, no, metadata=None):
        self.name = name
        self.condition = condition
        self.yes = yes
        self.no = no
        self.metadata = metadata

    def __repr__(self):
        return f"DecisionNode({self.name!r}, {self.condition.name!r})"


class BidNode:
    def __init__(self, name, call, metadata=None):
        self.name = name
        self.call = call
        self.metadata = metadata

    @property
    def explanation(self):
        """Static explanation template, if the author supplied one"""
        if self.metadata is not None and self.metadata.description:
            return self.metadata.description
        return ''

    def __repr__(self):
        return f"BidNode({self.name!r})"


class FallbackNode:
    def __init__(self, reason=None):
        self.reason = reason

    def __repr__(self):
        return f"FallbackNode({self.reason!r})"


def decision(name, condition, yes, no, metadata=None):
    return DecisionNode(name, condition, yes, no, metadata)


def bid(name, call_fn, metadata=None):
    """
    Bid leaf. `call_fn(ctx)` returns the Call to make; pass a Call directly
    for a fixed bid.
    """
    if callable(call_fn):
        return BidNode(name, call_fn, metadata)

    def fixed_call(ctx):
        return call_fn

    return BidNode(name, fixed_call, metadata)


def fallback(reason=None):
    return FallbackNode(reason)


def iter_nodes(tree):
    """Yield every node, depth-first, yes-branch first"""
    stack = [tree]
    while stack:
        node = stack.pop()
        if isinstance(node, DecisionNode):
            yield node
            stack.append(node.no)
            stack.append(node.yes)
        elif isinstance(node, (BidNode, FallbackNode)):
            yield node
        else:
            raise MalformedTreeError(node)


def bid_nodes(tree):
    return [node for node in iter_nodes(tree) if isinstance(node, BidNode)]


class ConventionCategory(Enum):
    ASKING = 'Asking'
    DEFENSIVE = 'Defensive'
    CONSTRUCTIVE = 'Constructive'
    COMPETITIVE = 'Competitive'


class ConventionConfig:
    """
    A registered convention. Tree conventions set `rule_tree`; legacy
    conventions carry a flat `bidding_rules` list instead.
    default_auction(seat) returns the auction a drill starts from, or None.
    """

    def __init__(self, id, name, description, category, rule_tree=None, bidding_rules=None,
                 default_auction=None):
        self.id = id
        self.name = name
        self.description = description
        self.category = category
        self.rule_tree = rule_tree
        self.bidding_rules = list(bidding_rules) if bidding_rules is not None else []
        self.default_auction = default_auction

    def __repr__(self):
        kind = 'tree' if self.rule_tree is not None else 'flat'
        return f"ConventionConfig({self.id!r}, {kind})"


def is_tree_convention(config):
    return config.rule_tree is not None
