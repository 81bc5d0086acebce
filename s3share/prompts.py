#!/usr/bin/env python3
"""
Interactive prompts used by the setup flow.

ConfigStore receives a prompter instead of calling input() itself, so the
setup logic can run unattended in tests.
"""

from typing import Optional, Sequence

from .utils import confirm_action, select_from_list


class ConsolePrompter:
    """Prompter that asks the user on the terminal."""

    def confirm(self, message: str) -> bool:
        return confirm_action(message, require_yes=False)

    def select(self, label: str, items: Sequence[str]) -> Optional[str]:
        return select_from_list(label, items)
