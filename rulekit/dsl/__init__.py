from .parse import parse_rule

__all__ = ["parse_rule"]
