"""Deterministic ATECO lookups."""

from forfettario.decoders.ateco import find_seed_code, load_seed_codes, resolve_coefficient

__all__ = ["find_seed_code", "load_seed_codes", "resolve_coefficient"]
