"""Parsing subsystem for Subrayado.

Provides the span resolver, which turns scanner tokens into a tree of
resolved spans one paragraph at a time.

Public API:
SpanResolver: Stack-based delimiter matching for one paragraph
ResolvedParagraph: Resolver output (children + consumed paragraph break)

"""

from subrayado.parsing.resolver import PendingSpan, ResolvedParagraph, SpanResolver

__all__ = ["PendingSpan", "ResolvedParagraph", "SpanResolver"]
