"""
generator.py - Policy editor and password generator dialog.

A popup that lets the user set the policy (length range, required character
classes, minimum score) and generate a password that passes it. "Use This"
hands both the password and the new policy back to the app, which rebuilds
its validator and checks the password on the main screen.
"""

import customtkinter as ctk
from typing import Callable

from passval.config import ValidatorConfig
from passval.errors import GenerationExhausted
from passval.validator import PasswordValidator
from passval_gui.theme import get_colors, get_score_color


class PolicyGeneratorDialog(ctk.CTkToplevel):
    """
    Popup dialog for generating passwords.

    Args:
        parent: Parent widget
        validator: Validator whose policy seeds the controls; its dictionary
            is reused for the new policy
        on_accept: Callback with (password, config) when user clicks "Use This"
    """

    def __init__(
        self,
        parent,
        validator: PasswordValidator,
        on_accept: Callable[[str, ValidatorConfig], None],
    ):
        super().__init__(parent)
        self.validator = validator
        self.on_accept = on_accept
        self.generated_password = ""

        C = get_colors()

        # Window setup
        self.title("Generate Password")
        self.geometry("460x600")
        self.minsize(400, 540)
        self.configure(fg_color=C["bg_primary"])
        self.resizable(False, False)

        # Make it modal (blocks interaction with parent)
        self.transient(parent)
        self.grab_set()

        self._build_ui()
        self._generate()  # Generate one immediately

    def _build_ui(self):
        """Build the generator interface."""
        C = get_colors()
        config = self.validator.config

        container = ctk.CTkFrame(self, fg_color="transparent")
        container.pack(fill="both", expand=True, padx=20, pady=20)

        # --- Title ---
        ctk.CTkLabel(
            container,
            text="Password Generator",
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=C["text_primary"],
        ).pack(pady=(0, 16))

        # --- Generated Password Display ---
        output_frame = ctk.CTkFrame(
            container,
            fg_color=C["bg_card"],
            corner_radius=10,
            border_width=1,
            border_color=C["border"],
        )
        output_frame.pack(fill="x", pady=(0, 8))

        self.output_label = ctk.CTkLabel(
            output_frame,
            text="",
            font=ctk.CTkFont(family="Courier", size=14),
            text_color=C["success"],
            wraplength=380,
        )
        self.output_label.pack(padx=16, pady=16)

        # Strength indicator
        self.strength_bar = ctk.CTkProgressBar(
            container,
            height=6,
            corner_radius=3,
            fg_color=C["border"],
            progress_color=C["text_muted"],
        )
        self.strength_bar.pack(fill="x", pady=(0, 2))
        self.strength_bar.set(0)

        self.strength_label = ctk.CTkLabel(
            container,
            text="",
            font=ctk.CTkFont(size=11),
            text_color=C["text_muted"],
            anchor="w",
        )
        self.strength_label.pack(fill="x", pady=(0, 12))

        # --- Options Card ---
        options_card = ctk.CTkFrame(
            container,
            fg_color=C["bg_card"],
            corner_radius=10,
            border_width=1,
            border_color=C["border"],
        )
        options_card.pack(fill="x", pady=(0, 16))

        options_inner = ctk.CTkFrame(options_card, fg_color="transparent")
        options_inner.pack(padx=16, pady=16, fill="x")

        self.min_slider, self.min_value_label = self._slider_row(
            options_inner, "Minimum length", 4, 64, config.min_length,
        )
        self.max_slider, self.max_value_label = self._slider_row(
            options_inner, "Maximum length", 4, 128, config.max_length,
        )
        self.complexity_slider, self.complexity_value_label = self._slider_row(
            options_inner, "Minimum score", 0, 100, config.complexity,
        )

        # Checkboxes
        self.use_lower = self._checkbox(options_inner, "Require lowercase (a-z)", config.require_lower)
        self.use_upper = self._checkbox(options_inner, "Require uppercase (A-Z)", config.require_upper)
        self.use_digits = self._checkbox(options_inner, "Require digits (0-9)", config.require_numbers)
        self.use_symbols = self._checkbox(options_inner, "Require symbols (!@#$%...)", config.require_symbols)

        # --- Action Buttons ---
        btn_frame = ctk.CTkFrame(container, fg_color="transparent")
        btn_frame.pack(fill="x")

        ctk.CTkButton(
            btn_frame,
            text="🔄 Regenerate",
            font=ctk.CTkFont(size=13),
            height=40,
            fg_color=C["bg_card"],
            hover_color=C["border"],
            border_width=1,
            border_color=C["border"],
            text_color=C["text_primary"],
            command=self._generate,
        ).pack(side="left", fill="x", expand=True, padx=(0, 8))

        self.accept_btn = ctk.CTkButton(
            btn_frame,
            text="✓ Use This",
            font=ctk.CTkFont(size=13, weight="bold"),
            height=40,
            fg_color=C["accent"],
            hover_color=C["accent_hover"],
            command=self._accept,
        )
        self.accept_btn.pack(side="right", fill="x", expand=True)

    def _slider_row(self, parent, label: str, low: int, high: int, initial: int):
        """A label/value row with an integer slider under it."""
        C = get_colors()

        row = ctk.CTkFrame(parent, fg_color="transparent")
        row.pack(fill="x", pady=(0, 4))

        ctk.CTkLabel(
            row,
            text=label,
            font=ctk.CTkFont(size=12),
            text_color=C["text_secondary"],
        ).pack(side="left")

        value_label = ctk.CTkLabel(
            row,
            text=str(initial),
            font=ctk.CTkFont(size=12, weight="bold"),
            text_color=C["text_primary"],
        )
        value_label.pack(side="right")

        slider = ctk.CTkSlider(
            parent,
            from_=low,
            to=high,
            number_of_steps=high - low,
            fg_color=C["border"],
            progress_color=C["accent"],
            button_color=C["accent"],
            button_hover_color=C["accent_hover"],
            command=lambda v: self._on_slider_change(value_label, v),
        )
        slider.set(max(low, min(high, initial)))
        slider.pack(fill="x", pady=(0, 10))
        return slider, value_label

    def _checkbox(self, parent, text: str, checked: bool):
        C = get_colors()
        box = ctk.CTkCheckBox(
            parent,
            text=text,
            font=ctk.CTkFont(size=12),
            text_color=C["text_secondary"],
            fg_color=C["accent"],
            hover_color=C["accent_hover"],
            command=self._generate,
        )
        if checked:
            box.select()
        box.pack(anchor="w", pady=2)
        return box

    # ------------------------------------------------------------------
    # Event Handlers
    # ------------------------------------------------------------------

    def _on_slider_change(self, value_label, value):
        """Update the value label and regenerate."""
        value_label.configure(text=str(int(value)))
        self._generate()

    def _current_config(self) -> ValidatorConfig:
        # ValidatorConfig clamps max below min, so no need to check here
        return ValidatorConfig(
            min_length=int(self.min_slider.get()),
            max_length=int(self.max_slider.get()),
            require_lower=bool(self.use_lower.get()),
            require_upper=bool(self.use_upper.get()),
            require_numbers=bool(self.use_digits.get()),
            require_symbols=bool(self.use_symbols.get()),
            complexity=int(self.complexity_slider.get()),
        )

    def _generate(self, *args):
        """Generate a new password with the current settings."""
        C = get_colors()
        validator = PasswordValidator.from_config(self._current_config(), self.validator.dictionary)

        try:
            self.generated_password = validator.generate()
        except GenerationExhausted as e:
            self.generated_password = ""
            self.output_label.configure(text=f"{e}. Try a longer length or a lower score.", text_color=C["error"])
            self.strength_bar.set(0)
            self.strength_label.configure(text="", text_color=C["text_muted"])
            return

        self.output_label.configure(text=self.generated_password, text_color=C["success"])

        _, score = validator.validate(self.generated_password)
        color = get_score_color(score)
        self.strength_bar.set(score / 100.0)
        self.strength_bar.configure(progress_color=color)
        self.strength_label.configure(text=f"Score {score}/100", text_color=color)

    def _accept(self):
        """Send the generated password and policy back and close."""
        if self.generated_password:
            self.on_accept(self.generated_password, self._current_config())
        self.destroy()
