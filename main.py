"""
main.py - Application entry point for the password checker.

This is the orchestrator. It:
1. Sets up logging and reads the environment
2. Builds the validator (bundled dictionary, or a file named by
   PASSVAL_DICTIONARY)
3. Shows the checker screen
4. Opens the generator dialog on request and swaps in the new policy

Environment:
    PASSVAL_LOG_LEVEL   logging level name (default WARNING)
    PASSVAL_DICTIONARY  path to a newline-delimited common-passwords file
"""

import logging
import os
import sys
import customtkinter as ctk

from passval.config import ValidatorConfig
from passval.dictionary import Dictionary, default_dictionary
from passval.validator import PasswordValidator
from passval_gui.checker_window import CheckerWindow
from passval_gui.generator import PolicyGeneratorDialog
from passval_gui.theme import get_colors, get_mode


APP_VERSION = "1.0.0"

# Starting policy: the common "8+ chars, mixed classes" rule of thumb
DEFAULT_POLICY = ValidatorConfig(
    min_length=8,
    max_length=64,
    require_lower=True,
    require_upper=True,
    require_numbers=True,
    require_symbols=True,
    complexity=60,
)

logger = logging.getLogger("passval.app")


def load_dictionary_from_env() -> Dictionary:
    """Use PASSVAL_DICTIONARY if set, otherwise the bundled list."""
    path = os.environ.get("PASSVAL_DICTIONARY")
    if not path:
        return default_dictionary()

    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        dictionary = Dictionary.from_text(f.read())
    logger.info("Using custom dictionary %s (%d entries)", path, len(dictionary))
    return dictionary


class PasswordCheckerApp(ctk.CTk):
    """Main application window."""

    def __init__(self, dictionary: Dictionary):
        super().__init__()

        # Window setup
        self.title(f"Password Checker {APP_VERSION}")
        self.geometry("560x680")
        self.minsize(480, 580)
        self.configure(fg_color=get_colors()["bg_primary"])

        self.validator = PasswordValidator.from_config(DEFAULT_POLICY, dictionary)

        # Track current view
        self.current_frame = None

        self._show_checker()

    def _show_checker(self):
        """(Re)build the checker screen for the current validator and theme."""
        if self.current_frame:
            self.current_frame.destroy()

        self.configure(fg_color=get_colors()["bg_primary"])
        self.current_frame = CheckerWindow(
            parent=self,
            validator=self.validator,
            on_generate=self._open_generator,
            on_theme_change=self._show_checker,
        )
        self.current_frame.pack(fill="both", expand=True)

    def _open_generator(self):
        PolicyGeneratorDialog(parent=self, validator=self.validator, on_accept=self._use_generated)

    def _use_generated(self, password: str, config: ValidatorConfig):
        """Adopt the dialog's policy and show its password on the checker."""
        self.validator = PasswordValidator.from_config(config, self.validator.dictionary)
        self._show_checker()
        self.current_frame.set_password(password)


def main():
    logging.basicConfig(
        level=os.environ.get("PASSVAL_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctk.set_appearance_mode(get_mode())

    try:
        app = PasswordCheckerApp(load_dictionary_from_env())
        app.mainloop()
    except KeyboardInterrupt:
        print("\nShutting down...")
        sys.exit(0)
    except OSError as e:
        logger.error("Could not start: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
