from __future__ import annotations

from enum import Enum
from typing import Iterable

from arxivsearch.arxiv import SearchResult


class MatchRule(Enum):
    MATCH_ALL = "match_all"
    ANY_PHYSICS = "any_physics"
    CONTAINS = "contains"


class ArxivCategory(Enum):
    ALL = ("All", "")
    PHYSICS = ("Physics", "phys")
    MATHEMATICS = ("Mathematics", "math")
    COMPUTER_SCIENCE = ("Computer Science", "cs")
    QUANTITATIVE_BIOLOGY = ("Quantitative Biology", "q-bio")
    QUANTITATIVE_FINANCE = ("Quantitative Finance", "q-fin")
    STATISTICS = ("Statistics", "stat")
    ELECTRICAL_ENGINEERING = ("Electrical Engineering and Systems Science", "eess")
    ECONOMICS = ("Economics", "econ")

    def __init__(self, label: str, code: str) -> None:
        self.label = label
        self.code = code

    @property
    def rule(self) -> MatchRule:
        return CATEGORY_RULES[self]

    @classmethod
    def from_value(cls, value: str | None) -> "ArxivCategory":
        """Look up a category by code, member name or label (case-insensitive)."""
        text = str(value or "").strip()
        lowered = text.lower()
        for member in cls:
            if text == member.code or lowered in {member.name.lower(), member.label.lower()}:
                return member
        raise ValueError(f"Unknown arXiv category: {value!r}")


CATEGORY_RULES: dict[ArxivCategory, MatchRule] = {
    ArxivCategory.ALL: MatchRule.MATCH_ALL,
    ArxivCategory.PHYSICS: MatchRule.ANY_PHYSICS,
    ArxivCategory.MATHEMATICS: MatchRule.CONTAINS,
    ArxivCategory.COMPUTER_SCIENCE: MatchRule.CONTAINS,
    ArxivCategory.QUANTITATIVE_BIOLOGY: MatchRule.CONTAINS,
    ArxivCategory.QUANTITATIVE_FINANCE: MatchRule.CONTAINS,
    ArxivCategory.STATISTICS: MatchRule.CONTAINS,
    ArxivCategory.ELECTRICAL_ENGINEERING: MatchRule.CONTAINS,
    ArxivCategory.ECONOMICS: MatchRule.CONTAINS,
}

PHYSICS_ARCHIVES = frozenset(
    {
        "astro-ph",
        "cond-mat",
        "gr-qc",
        "hep-ex",
        "hep-lat",
        "hep-ph",
        "hep-th",
        "math-ph",
        "nlin",
        "nucl-ex",
        "nucl-th",
        "physics",
        "quant-ph",
    }
)

# Colour names per top-level archive, used to tint list icons.
CATEGORY_COLOURS: dict[str, str] = {
    "phys": "purple",
    "math": "blue",
    "cs": "red",
    "q-bio": "green",
    "q-fin": "yellow",
    "stat": "orange",
    "eess": "magenta",
    "econ": "primary",
}
DEFAULT_COLOUR = "secondary"


def first_category(category: str) -> str:
    return str(category or "").split(".", 1)[0].strip()


def category_colour(category: str) -> str:
    archive = first_category(category)
    if archive in PHYSICS_ARCHIVES:
        return CATEGORY_COLOURS["phys"]
    return CATEGORY_COLOURS.get(archive, DEFAULT_COLOUR)


def matches_category(result: SearchResult, category: ArxivCategory) -> bool:
    rule = category.rule
    if rule is MatchRule.MATCH_ALL:
        return True
    if rule is MatchRule.ANY_PHYSICS:
        # Broad match: physics spans many archives, every record is admitted.
        return True
    return category.code in result.category


def filter_results(results: Iterable[SearchResult], category: ArxivCategory) -> list[SearchResult]:
    return [result for result in results if matches_category(result, category)]
