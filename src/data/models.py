"""
Finalissima Goal Tracker — Data Models.

The checklist is the only structured record the bot keeps: three
preparation flags plus the amount saved so far. Notes are a plain list of
strings and the log is plain text, so neither needs a model.
"""

from __future__ import annotations

from dataclasses import dataclass

# Checklist items in display order
CHECKLIST_ITEMS: tuple[str, ...] = ("visa", "flight", "ticket")


@dataclass
class Checklist:
    """The singleton preparation checklist.

    Persisted as JSON with the key ``savedBudget`` for the budget field,
    so existing checklist.json files stay readable.
    """

    visa: bool = False
    flight: bool = False
    ticket: bool = False
    saved_budget: int = 0

    @property
    def completed(self) -> int:
        """Number of checked items."""
        return sum(1 for item in CHECKLIST_ITEMS if getattr(self, item))

    @property
    def percent(self) -> int:
        """Completion percent, floored (1/3 → 33)."""
        return self.completed * 100 // len(CHECKLIST_ITEMS)

    def to_dict(self) -> dict:
        return {
            "visa": self.visa,
            "flight": self.flight,
            "ticket": self.ticket,
            "savedBudget": self.saved_budget,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Checklist:
        """Build a checklist from its JSON form; missing keys take defaults.

        Raises ValueError when a present field has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Checklist must be an object, got {type(data).__name__}")

        checklist = cls()
        for item in CHECKLIST_ITEMS:
            if item in data:
                value = data[item]
                if not isinstance(value, bool):
                    raise ValueError(f"{item} must be a boolean, got {value!r}")
                setattr(checklist, item, value)

        if "savedBudget" in data:
            budget = data["savedBudget"]
            if isinstance(budget, bool) or not isinstance(budget, int) or budget < 0:
                raise ValueError(f"savedBudget must be a non-negative integer, got {budget!r}")
            checklist.saved_budget = budget

        return checklist
