"""
Result tab selection. UI-local and independent of the request lifecycle.
"""

from enum import Enum
from typing import Union


class ResultTab(str, Enum):
    FINDINGS = "findings"
    RECOMMENDATIONS = "recommendations"


class TabSelector:
    """Which result sub-section is visible."""

    def __init__(self, initial: ResultTab = ResultTab.FINDINGS) -> None:
        self._active = ResultTab(initial)

    @property
    def active(self) -> ResultTab:
        return self._active

    def select(self, tab: Union[ResultTab, str]) -> ResultTab:
        """
        Make a tab active.

        Raises:
            ValueError: If tab is not a known result tab
        """
        self._active = ResultTab(tab)
        return self._active

    def toggle(self) -> ResultTab:
        if self._active is ResultTab.FINDINGS:
            return self.select(ResultTab.RECOMMENDATIONS)
        return self.select(ResultTab.FINDINGS)
