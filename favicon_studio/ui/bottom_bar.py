from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, snippet: str, **kwargs) -> None:
        super().__init__(master, **kwargs)

        # callbacks
        self.on_export: Optional[Callable[[], None]] = None
        self.on_save_again: Optional[Callable[[], None]] = None
        self.on_copy_snippet: Optional[Callable[[], None]] = None

        # layout
        self.grid_columnconfigure(0, weight=1)
        self.grid_columnconfigure(1, weight=0)

        # Export
        self._export_btn = ctk.CTkButton(
            self, text="Упаковать и сохранить ZIP", fg_color="#2e8b57", command=self._emit_export
        )
        self._export_btn.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="ew")
        self._export_btn.configure(state="disabled")

        self._save_again_btn = ctk.CTkButton(self, text="Сохранить снова", command=self._emit_save_again)

        # HTML snippet (hidden until an archive exists)
        self._snippet_title = ctk.CTkLabel(
            self, text="3. Добавьте в <head> вашего HTML", font=ctk.CTkFont(size=14, weight="bold")
        )
        self._snippet_box = ctk.CTkTextbox(self, height=110, wrap="none", font=ctk.CTkFont(family="Courier", size=12))
        self._snippet_box.insert("1.0", snippet)
        self._snippet_box.configure(state="disabled")
        self._copy_btn = ctk.CTkButton(self, text="Копировать", width=110, command=self._emit_copy)
        self._copied_val = ctk.StringVar(value="")
        self._copied_label = ctk.CTkLabel(self, textvariable=self._copied_val, text_color="#4caf50")
        self._toggle_result_controls(visible=False)

    # public API (sync from controller)
    def set_export_enabled(self, enabled: bool) -> None:
        self._export_btn.configure(state="normal" if enabled else "disabled")

    def set_exporting(self, exporting: bool) -> None:
        self._export_btn.configure(
            state="disabled" if exporting else "normal",
            text="Упаковка…" if exporting else "Упаковать и сохранить ZIP",
        )

    def show_result(self, visible: bool) -> None:
        self._toggle_result_controls(visible)

    def show_copied(self, copied: bool) -> None:
        self._copied_val.set("Скопировано в буфер обмена!" if copied else "")

    # events
    def _emit_export(self) -> None:
        if self.on_export:
            self.on_export()

    def _emit_save_again(self) -> None:
        if self.on_save_again:
            self.on_save_again()

    def _emit_copy(self) -> None:
        if self.on_copy_snippet:
            self.on_copy_snippet()

    # helpers
    def _toggle_result_controls(self, visible: bool) -> None:
        if visible:
            self._save_again_btn.grid(row=0, column=1, padx=(6, 10), pady=8, sticky="e")
            self._snippet_title.grid(row=1, column=0, columnspan=2, padx=10, pady=(4, 2), sticky="w")
            self._snippet_box.grid(row=2, column=0, padx=(10, 6), pady=(0, 4), sticky="ew")
            self._copy_btn.grid(row=2, column=1, padx=(6, 10), pady=(0, 4), sticky="n")
            self._copied_label.grid(row=3, column=0, columnspan=2, padx=10, pady=(0, 6), sticky="w")
        else:
            self._save_again_btn.grid_remove()
            self._snippet_title.grid_remove()
            self._snippet_box.grid_remove()
            self._copy_btn.grid_remove()
            self._copied_label.grid_remove()
