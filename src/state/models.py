from __future__ import annotations

from typing import Dict

from pydantic import RootModel


class Snapshot(RootModel[Dict[str, str]]):
    """
    Persisted choice state: option key -> selected value.

    Notes
    - This is the whole persisted document; it is serialized as a single
      JSON object with string values only.
    - Insertion order carries no meaning. A key holds at most one value
      and the most recent trigger wins.
    """

    root: Dict[str, str] = {}

    @classmethod
    def empty(cls) -> "Snapshot":
        """Convenience constructor for a fresh, empty snapshot."""
        return cls({})

    def as_dict(self) -> Dict[str, str]:
        return dict(self.root)
