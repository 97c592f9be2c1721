"""
Preferences Panel

A modal NSAlert with a single tone selector bound to the PreferencesStore.
"""

import logging
from typing import Optional

from AppKit import (
    NSAlert,
    NSAlertFirstButtonReturn,
    NSApp,
    NSPopUpButton,
)
from Foundation import NSMakeRect

from clipboard_ai.preferences import PreferencesStore, Tone

logger = logging.getLogger(__name__)

PANEL_TITLE = "Preferences"
PANEL_INFO = (
    "Controls the writing tone used when rephrasing.\n"
    "Copy & Rephrase shortcut: ⇧⌘C (fixed)"
)


class PreferencesPanel:
    """Shows the tone selector and saves the choice."""

    def __init__(self, store: PreferencesStore):
        self.store = store

    def tone_titles(self) -> list:
        return [tone.value for tone in Tone]

    def apply_selection(self, title: Optional[str]) -> Optional[Tone]:
        """
        Save the selected popup title.

        Returns:
            The stored Tone, or None if the title is not one of the choices.
        """
        if title not in self.tone_titles():
            logger.warning(f"Ignoring unknown tone selection: {title}")
            return None
        self.store.tone = title
        return self.store.tone

    def show(self) -> Optional[Tone]:
        """
        Run the panel modally. Must be called on the main thread.

        Returns:
            The newly stored Tone, or None if cancelled.
        """
        alert = NSAlert.alloc().init()
        alert.setMessageText_(PANEL_TITLE)
        alert.setInformativeText_(PANEL_INFO)
        alert.addButtonWithTitle_("Save")
        alert.addButtonWithTitle_("Cancel")

        popup = NSPopUpButton.alloc().initWithFrame_pullsDown_(
            NSMakeRect(0, 0, 180, 26), False
        )
        popup.addItemsWithTitles_(self.tone_titles())
        popup.selectItemWithTitle_(self.store.tone.value)
        alert.setAccessoryView_(popup)

        # Accessory apps have no focus; bring the panel forward
        NSApp.activateIgnoringOtherApps_(True)
        response = alert.runModal()

        if response != NSAlertFirstButtonReturn:
            logger.debug("Preferences cancelled")
            return None

        return self.apply_selection(popup.titleOfSelectedItem())
