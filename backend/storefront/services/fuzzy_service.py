"""
Storefront API - Fuzzy Title Matching
=====================================

What:  Approximate string matching used to narrow a product page by title.
How:   RapidFuzzMatcher scores each item with rapidfuzz's partial_ratio, the
       best alignment of the search term against any part of the field, and
       keeps items scoring at or above the cutoff. A field shorter than the
       term is scored with the plain ratio over both whole strings instead.

Threshold:
    Expressed the Fuse.js way: 0.0 demands an exact match, 1.0 accepts
    anything. The rapidfuzz score cutoff is (1 - threshold) * 100, so the
    default 0.3 keeps titles whose best-aligned part is at least 70% similar.

    "fone" vs "iPhone"     → aligns with "hone", score 75 → kept
    "fone" vs "Headphone"  → aligns with "hone", score 75 → kept
    "fone" vs "Laptop"     → best alignment scores far below 70 → dropped
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

from rapidfuzz import fuzz, utils


class FuzzyMatcher(ABC):
    """Narrows a sequence of records to those whose `key` field resembles `term`."""

    @abstractmethod
    def match(
        self,
        items: Sequence[Dict[str, Any]],
        term: str,
        key: str,
        threshold: float,
    ) -> List[Dict[str, Any]]:
        """
        Return the matching items as a subsequence of `items`.

        Contract:
            - relative order of survivors is preserved
            - items whose `key` is missing or not a string never match
            - `items` is not modified
        """
        ...


class RapidFuzzMatcher(FuzzyMatcher):
    """FuzzyMatcher backed by rapidfuzz.fuzz.partial_ratio."""

    def match(
        self,
        items: Sequence[Dict[str, Any]],
        term: str,
        key: str,
        threshold: float,
    ) -> List[Dict[str, Any]]:
        cutoff = (1.0 - threshold) * 100.0
        query = utils.default_process(term)
        if not query:
            return []

        matched = []
        for item in items:
            value = item.get(key)
            if not isinstance(value, str):
                continue
            title = utils.default_process(value)
            # partial_ratio slides the shorter string over the longer one, so a
            # short title inside a long term would score 100
            if len(title) >= len(query):
                score = fuzz.partial_ratio(query, title)
            else:
                score = fuzz.ratio(query, title)
            if score >= cutoff:
                matched.append(item)
        return matched


fuzzy_matcher = RapidFuzzMatcher()
