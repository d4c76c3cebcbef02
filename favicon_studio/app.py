import customtkinter as ctk

from favicon_studio.config import Settings
from favicon_studio.controllers.app_controller import AppController
from favicon_studio.services.snippet_service import get_snippet
from favicon_studio.ui.bottom_bar import BottomBar
from favicon_studio.ui.image_viewer import ImageViewer
from favicon_studio.ui.sidebar import Sidebar


class FaviconStudioApp(ctk.CTk):
    def __init__(self, settings: Settings) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title("AI Favicon Generator")
        self.minsize(900, 600)

        # root layout: left prompt panel, right preview, export bar below
        self.grid_columnconfigure(0, weight=0)
        self.grid_columnconfigure(1, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._sidebar = Sidebar(self, app_name=settings.app_name)
        self._sidebar.grid(row=0, column=0, sticky="ns", padx=(12, 6), pady=(12, 6))

        self._viewer = ImageViewer(self)
        self._viewer.grid(row=0, column=1, sticky="nsew", padx=(6, 12), pady=(12, 6))

        self._bottom = BottomBar(self, snippet=get_snippet(settings.sizes))
        self._bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(
            viewer=self._viewer, sidebar=self._sidebar, bottom=self._bottom, window=self, settings=settings
        )
        self._controller.bind_events()
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _on_close(self) -> None:
        self._controller.shutdown()
        self.destroy()
