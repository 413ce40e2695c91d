"""
checker_window.py - Live password checker.

The main screen of the app. As the user types, the password is run through
PasswordValidator.evaluate() and the screen shows:
- a strength meter (score 0-100, colored by band)
- the score before and after penalties
- every rule the password breaks
- every pattern penalty that was applied

Nothing typed here is stored or logged. The entry is masked by default.
"""

import customtkinter as ctk
from typing import Callable, Optional

from passval.entropy import strength_label
from passval.validator import PasswordValidator
from passval_gui.theme import get_colors, get_score_color, toggle_mode


class CheckerWindow(ctk.CTkFrame):
    """
    Password checker frame.

    Args:
        parent: The parent widget (main app window)
        validator: Validator holding the current policy
        on_generate: Callback when the user asks for a generated password
        on_theme_change: Callback after the theme is toggled
    """

    def __init__(
        self,
        parent: ctk.CTk,
        validator: PasswordValidator,
        on_generate: Callable,
        on_theme_change: Optional[Callable] = None,
    ):
        C = get_colors()
        super().__init__(parent, fg_color=C["bg_primary"])
        self.validator = validator
        self.on_generate = on_generate
        self.on_theme_change = on_theme_change
        self.password_visible = False

        self._build_ui()

    def _build_ui(self):
        """Build the checker interface."""
        C = get_colors()

        container = ctk.CTkFrame(self, fg_color="transparent")
        container.pack(fill="both", expand=True, padx=24, pady=24)

        # --- Header ---
        header = ctk.CTkFrame(container, fg_color="transparent")
        header.pack(fill="x", pady=(0, 16))

        ctk.CTkLabel(
            header,
            text="Password Checker",
            font=ctk.CTkFont(size=22, weight="bold"),
            text_color=C["text_primary"],
        ).pack(side="left")

        ctk.CTkButton(
            header,
            text="◐",
            width=36,
            height=32,
            fg_color=C["bg_card"],
            hover_color=C["border"],
            text_color=C["text_primary"],
            command=self._toggle_theme,
        ).pack(side="right")

        # --- Policy summary ---
        self.policy_label = ctk.CTkLabel(
            container,
            text=self._policy_text(),
            font=ctk.CTkFont(size=11),
            text_color=C["text_secondary"],
            anchor="w",
            justify="left",
        )
        self.policy_label.pack(fill="x", pady=(0, 12))

        # --- Password entry ---
        pw_frame = ctk.CTkFrame(container, fg_color="transparent")
        pw_frame.pack(fill="x", pady=(0, 8))

        self.password_entry = ctk.CTkEntry(
            pw_frame,
            placeholder_text="Type a password to check",
            show="•",
            font=ctk.CTkFont(size=14),
            height=42,
            fg_color=C["bg_input"],
            border_color=C["border"],
            text_color=C["text_primary"],
            placeholder_text_color=C["text_muted"],
        )
        self.password_entry.pack(side="left", fill="x", expand=True, padx=(0, 8))
        self.password_entry.bind("<KeyRelease>", self._update_result)

        self.toggle_pw_btn = ctk.CTkButton(
            pw_frame,
            text="👁",
            width=42,
            height=42,
            fg_color=C["bg_input"],
            hover_color=C["border"],
            command=self._toggle_password_visibility,
            font=ctk.CTkFont(size=16),
        )
        self.toggle_pw_btn.pack(side="right")

        # --- Strength meter ---
        self.strength_bar = ctk.CTkProgressBar(
            container,
            height=8,
            corner_radius=4,
            fg_color=C["border"],
            progress_color=C["text_muted"],
        )
        self.strength_bar.pack(fill="x", pady=(4, 2))
        self.strength_bar.set(0)

        self.strength_label = ctk.CTkLabel(
            container,
            text="",
            font=ctk.CTkFont(size=12),
            text_color=C["text_muted"],
            anchor="w",
        )
        self.strength_label.pack(fill="x", pady=(0, 12))

        # --- Details card ---
        card = ctk.CTkFrame(
            container,
            fg_color=C["bg_card"],
            corner_radius=10,
            border_width=1,
            border_color=C["border"],
        )
        card.pack(fill="both", expand=True, pady=(0, 16))

        self.details_box = ctk.CTkTextbox(
            card,
            font=ctk.CTkFont(size=12),
            fg_color="transparent",
            text_color=C["text_secondary"],
            wrap="word",
        )
        self.details_box.pack(fill="both", expand=True, padx=12, pady=12)
        self.details_box.configure(state="disabled")

        # --- Actions ---
        ctk.CTkButton(
            container,
            text="🎲 Generate Password",
            font=ctk.CTkFont(size=13, weight="bold"),
            height=40,
            fg_color=C["accent"],
            hover_color=C["accent_hover"],
            command=self.on_generate,
        ).pack(fill="x")

    def _policy_text(self) -> str:
        config = self.validator.config
        required = [
            name for name, on in (
                ("lowercase", config.require_lower),
                ("uppercase", config.require_upper),
                ("number", config.require_numbers),
                ("symbol", config.require_symbols),
            ) if on
        ]
        return (
            f"Policy: {config.min_length}-{config.max_length} characters  •  "
            f"requires: {', '.join(required) or 'nothing'}  •  "
            f"minimum score {config.complexity}"
        )

    # ------------------------------------------------------------------
    # Event Handlers
    # ------------------------------------------------------------------

    def _toggle_password_visibility(self):
        self.password_visible = not self.password_visible
        self.password_entry.configure(show="" if self.password_visible else "•")
        self.toggle_pw_btn.configure(text="🙈" if self.password_visible else "👁")

    def _toggle_theme(self):
        new_mode = toggle_mode()
        ctk.set_appearance_mode(new_mode)
        if self.on_theme_change:
            self.on_theme_change()

    def _update_result(self, event=None):
        """Re-validate on every keystroke."""
        C = get_colors()
        password = self.password_entry.get()

        if not password:
            self.strength_bar.set(0)
            self.strength_bar.configure(progress_color=C["text_muted"])
            self.strength_label.configure(text="", text_color=C["text_muted"])
            self._set_details("")
            return

        outcome = self.validator.evaluate(password)

        color = get_score_color(outcome.score)
        self.strength_bar.set(outcome.score / 100.0)
        self.strength_bar.configure(progress_color=color)
        verdict = "Passes policy" if outcome.passed else "Does not pass"
        self.strength_label.configure(
            text=f"{strength_label(outcome.score)}  •  score {outcome.score}/100  •  {verdict}",
            text_color=color,
        )

        lines = [
            f"Entropy: {outcome.entropy_bits:.1f} bits",
            f"Score before penalties: {outcome.raw_score}",
            f"Final score: {outcome.score}",
        ]
        if outcome.rule_failures:
            lines.append("\nProblems:")
            lines.extend(f"  ✗ {failure}" for failure in outcome.rule_failures)
        if outcome.penalties:
            lines.append("\nPenalties:")
            lines.extend(
                f"  x{p.factor:.2f}  {p.description}" for p in outcome.penalties
            )
        self._set_details("\n".join(lines))

    def _set_details(self, text: str):
        self.details_box.configure(state="normal")
        self.details_box.delete("1.0", "end")
        self.details_box.insert("1.0", text)
        self.details_box.configure(state="disabled")

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def set_password(self, password: str):
        """Fill the entry (e.g. with a generated password) and re-check it."""
        self.password_entry.delete(0, "end")
        self.password_entry.insert(0, password)
        self._update_result()
