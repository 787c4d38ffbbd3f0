from __future__ import annotations

from dataclasses import dataclass

DEFAULT_GLOBAL_SELECTORS = ("body", "html", "*", ":root")


@dataclass(frozen=True)
class SyncConfig:
    db_path: str = "figsync.db"
    api_token: str = ""
    api_base_url: str = "https://api.figma.com/v1"
    timeout: float = 30.0
    root_selector: str = "body"
    global_selectors: tuple[str, ...] = DEFAULT_GLOBAL_SELECTORS
    ignore_internal_layers: bool = False
    internal_layer_prefix: str = "_"  # e.g. "_Background" is hidden when ignoring
    # Top-level frames read when generating a whole stylesheet.
    tokens_frame: str = "Tokens"
    colors_frame: str = "Colors"
    typography_frame: str = "Typography"
    component_frames: tuple[str, ...] = ()  # empty means every other top-level frame
