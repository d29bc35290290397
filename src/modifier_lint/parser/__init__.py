"""Source extractors — turn source text into ``ModifierChain`` objects."""

from modifier_lint.parser.kotlin import extract_chains, parse_chain_expression

__all__ = ["extract_chains", "parse_chain_expression"]
