"""Виджет предпросмотра сгенерированной иконки.

Принципы:
- SRP: отвечает только за показ изображения, вписанного в доступную область.
- Чистый код: чёткое разделение публичного API и внутренних обработчиков событий.
"""
from __future__ import annotations

from typing import Optional

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk


class ImageViewer(ctk.CTkFrame):
    """Канва с изображением по центру либо с текстовой заглушкой."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._image: Optional[Image.Image] = None
        self._tk_image: Optional[ImageTk.PhotoImage] = None
        self._placeholder: str = "Здесь появится иконка"
        self._fit_scale_factor: float = 1.0

        self._canvas.bind("<Configure>", self._on_canvas_resize)

    # ---- Public API ----
    def set_image(self, image: Optional[Image.Image]) -> None:
        """Показывает изображение (None возвращает заглушку)."""
        self._image = image
        self._compute_fit_scale()
        self._render()

    def set_placeholder(self, text: str) -> None:
        """Текст, который виден, пока изображения нет (например, «Генерация…»)."""
        self._placeholder = text
        if self._image is None:
            self._render()

    # ---- Internals ----
    def _on_canvas_resize(self, _event: tk.Event) -> None:
        self._compute_fit_scale()
        self._render()

    def _render(self) -> None:
        self._canvas.delete("all")
        canvas_w = int(self._canvas.winfo_width())
        canvas_h = int(self._canvas.winfo_height())

        if self._image is None:
            self._tk_image = None
            self._canvas.create_text(
                canvas_w // 2, canvas_h // 2, text=self._placeholder, fill=self._get_text_color()
            )
            return

        img_w, img_h = self._image.size
        scaled_w = max(1, int(img_w * self._fit_scale_factor))
        scaled_h = max(1, int(img_h * self._fit_scale_factor))
        resized = self._image.resize((scaled_w, scaled_h), Image.Resampling.LANCZOS)

        x = (canvas_w - scaled_w) // 2
        y = (canvas_h - scaled_h) // 2
        self._tk_image = ImageTk.PhotoImage(resized)
        self._canvas.create_image(x, y, image=self._tk_image, anchor="nw")

    def _compute_fit_scale(self) -> None:
        if self._image is None:
            self._fit_scale_factor = 1.0
            return
        # small padding so the icon does not touch the frame
        canvas_w = max(1, int(self._canvas.winfo_width()) - 16)
        canvas_h = max(1, int(self._canvas.winfo_height()) - 16)
        img_w, img_h = self._image.size
        if img_w == 0 or img_h == 0:
            self._fit_scale_factor = 1.0
            return
        self._fit_scale_factor = max(0.05, min(4.0, min(canvas_w / img_w, canvas_h / img_h)))

    def _get_canvas_bg(self) -> str:
        # CTk does not expose canvas theme, so pick neutral
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    def _get_text_color(self) -> str:
        return "#9a9a9a"
