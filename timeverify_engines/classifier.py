"""
Time Code Classifier (``timeverify_engines.classifier``).

Responsibility
--------------
Map a time code to its aggregation category from the single classification
letter on its reference record.

Letter sets overlap (TOUR contains every CODE_DIRECT and OVERHEAD letter),
so the classifier answers two questions:

* ``classify`` -- the code's one *primary* category, resolved in the order
  ADJUSTMENT, SCHEDULE, CODE_DIRECT, OVERHEAD, TOUR, INFO.
* ``memberships`` -- every category whose sum the code's hours feed.  A
  letter-M code feeds both TOUR and CODE_DIRECT.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O.  The code table and
the letter sets are injected; nothing is looked up at call time.

Failure modes
-------------
* Unknown, inactive or non-time-type codes are *excluded* (``None`` /
  empty set), never an error.
"""

from __future__ import annotations

from collections.abc import Mapping

from timeverify_engines.rules import ClassificationRules
from timeverify_kernel.domain.dtos import TimeCodeInfo
from timeverify_kernel.domain.values import Category, DisplayCategory


class CodeClassifier:
    """
    Classifies time codes against an injected code table.

    Contract:
        Stateless after construction.  Safe to share across threads.

    Non-goals:
        - Does not read the database; the caller supplies the table.
    """

    def __init__(
        self,
        codes: Mapping[str, TimeCodeInfo],
        rules: ClassificationRules | None = None,
    ):
        self._codes = dict(codes)
        self._rules = rules or ClassificationRules()
        r = self._rules
        # Primary resolution order
        self._primary_order: tuple[tuple[Category, frozenset[str]], ...] = (
            (Category.ADJUSTMENT, r.adjustment_letters),
            (Category.SCHEDULE, r.schedule_letters),
            (Category.CODE_DIRECT, r.code_direct_letters),
            (Category.OVERHEAD, r.overhead_letters),
            (Category.TOUR, r.tour_letters),
        )

    @property
    def rules(self) -> ClassificationRules:
        return self._rules

    def letter(self, code: str) -> str | None:
        """Classification letter regardless of active marker."""
        info = self._codes.get(code)
        return info.letter if info is not None else None

    def active_info(self, code: str) -> TimeCodeInfo | None:
        """The code's reference record when it participates, else None."""
        info = self._codes.get(code)
        if info is None:
            return None
        if info.code_type != self._rules.time_code_type:
            return None
        if info.active not in self._rules.active_markers:
            return None
        return info

    def is_active(self, code: str) -> bool:
        return self.active_info(code) is not None

    def classify(self, code: str) -> Category | None:
        info = self.active_info(code)
        if info is None:
            return None
        for category, letters in self._primary_order:
            if info.letter in letters:
                return category
        return Category.INFO

    def memberships(self, code: str) -> frozenset[Category]:
        info = self.active_info(code)
        if info is None:
            return frozenset()
        found = {
            category
            for category, letters in self._primary_order
            if info.letter in letters
        }
        return frozenset(found) if found else frozenset({Category.INFO})

    def display_category(self, code: str) -> DisplayCategory:
        letter = self.letter(code)
        r = self._rules
        if letter in r.adjustment_letters or letter in r.schedule_letters:
            return DisplayCategory.ADJUSTMENT
        if letter in r.info_display_letters:
            return DisplayCategory.INFO
        return DisplayCategory.TIME

    def is_adjustment_letter(self, code: str) -> bool:
        """True when the code's letter is an ADJUSTMENT letter (active or not)."""
        return self.letter(code) in self._rules.adjustment_letters
