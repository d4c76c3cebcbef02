"""Боковая панель: описание иконки, имя приложения, запуск генерации, статус.

Принципы:
- SRP: управляет только полями ввода, не содержит логики генерации.
- ISP: выдаёт значения через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

DEFAULT_PROMPT = "A minimalist logo of a blue rocket ship, vector style"


class Sidebar(ctk.CTkFrame):
    """Панель с блоками: описание, имя приложения, статус."""
    def __init__(self, master: ctk.CTk, app_name: str = "My App", **kwargs) -> None:
        super().__init__(master, width=300, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_generate: Optional[Callable[[], None]] = None

        self._title = ctk.CTkLabel(self, text="1. Опишите иконку", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._prompt = ctk.CTkTextbox(self, height=120, wrap="word")
        self._prompt.insert("1.0", DEFAULT_PROMPT)
        self._prompt.grid(row=1, column=0, padx=8, pady=(0, 8), sticky="ew")

        self._generate_btn = ctk.CTkButton(self, text="Сгенерировать иконку", command=self._emit_generate)
        self._generate_btn.grid(row=2, column=0, padx=8, pady=(0, 12), sticky="ew")

        # App name for the manifest
        self._name_title = ctk.CTkLabel(self, text="Имя приложения", font=ctk.CTkFont(size=16, weight="bold"))
        self._name_title.grid(row=3, column=0, padx=8, pady=(8, 4), sticky="w")
        self._app_name = ctk.StringVar(value=app_name)
        self._app_name_entry = ctk.CTkEntry(self, textvariable=self._app_name)
        self._app_name_entry.grid(row=4, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Status
        self._status_val = ctk.StringVar(value="")
        self._status = ctk.CTkLabel(self, textvariable=self._status_val, wraplength=270, anchor="w", justify="left")
        self._status.grid(row=5, column=0, padx=8, pady=(0, 8), sticky="ew")
        self._default_text_color = self._status.cget("text_color")

        # filler
        self.grid_rowconfigure(99, weight=1)

    # public API (sync from controller)
    def get_prompt(self) -> str:
        return self._prompt.get("1.0", "end").strip()

    def get_app_name(self) -> str:
        return self._app_name.get().strip()

    def set_busy(self, busy: bool) -> None:
        self._generate_btn.configure(
            state="disabled" if busy else "normal",
            text="Генерация…" if busy else "Сгенерировать иконку",
        )

    def set_status(self, text: str, error: bool = False) -> None:
        self._status_val.set(text)
        self._status.configure(text_color="#e05252" if error else self._default_text_color)

    # events
    def _emit_generate(self) -> None:
        if self.on_generate:
            self.on_generate()
