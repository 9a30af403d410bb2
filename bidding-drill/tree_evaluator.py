"""
Rule tree evaluation

Two walks over the same tree:
- evaluate_tree_fast: tests conditions only and returns the matched BidNode (or None)
- evaluate_tree: also describes every visited decision, for explanations

Both walk iteratively and must visit the same nodes for the same context.
"""

from rule_tree import BidNode, DecisionNode, FallbackNode, MalformedTreeError


class PathEntry:
    """A visited decision node, whether its condition passed, and why"""

    def __init__(self, node, passed, description):
        self.node = node
        self.passed = passed
        self.description = description

    def __eq__(self, other):
        if not isinstance(other, PathEntry):
            return NotImplemented
        return (self.node is other.node and self.passed == other.passed
                and self.description == other.description)

    def __repr__(self):
        return f"PathEntry({self.node.name!r}, passed={self.passed})"


class TreeEvalResult:
    """
    matched: the BidNode reached, or None
    path: decisions that passed
    rejected_decisions: decisions that failed (visited ones only)
    visited: every decision in traversal order
    """

    def __init__(self, matched, path, rejected_decisions, visited):
        self.matched = matched
        self.path = path
        self.rejected_decisions = rejected_decisions
        self.visited = visited


def evaluate_tree_fast(tree, context):
    """Walk the tree calling only condition.test; return the BidNode reached or None"""
    node = tree
    while True:
        if isinstance(node, DecisionNode):
            node = node.yes if node.condition.test(context) else node.no
        elif isinstance(node, BidNode):
            return node
        elif isinstance(node, FallbackNode):
            return None
        else:
            raise MalformedTreeError(node)


def evaluate_tree(tree, context):
    """Walk the tree recording every decision; returns a TreeEvalResult"""
    path = []
    rejected = []
    visited = []

    node = tree
    while True:
        if isinstance(node, DecisionNode):
            passed = bool(node.condition.test(context))
            entry = PathEntry(node, passed, node.condition.describe(context))
            visited.append(entry)
            if passed:
                path.append(entry)
                node = node.yes
            else:
                rejected.append(entry)
                node = node.no
        elif isinstance(node, BidNode):
            return TreeEvalResult(node, path, rejected, visited)
        elif isinstance(node, FallbackNode):
            return TreeEvalResult(None, path, rejected, visited)
        else:
            raise MalformedTreeError(node)
