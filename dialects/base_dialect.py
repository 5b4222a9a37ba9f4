"""
Defines the abstract base class for a code dialect.

A dialect is a "database" of command codes mapped to human-readable
descriptions. Codes are stored uppercased.
"""
from abc import ABC, abstractmethod
from typing import Dict


class BaseDialect(ABC):
    def __init__(self):
        self.code_map: Dict[str, str] = {}
        self._populate_code_map()
        self.code_map = {code.upper(): text for code, text in self.code_map.items()}

    @abstractmethod
    def _populate_code_map(self):
        """Fill ``self.code_map`` with code -> description entries."""

