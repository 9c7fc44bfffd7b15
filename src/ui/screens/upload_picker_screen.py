"""
Upload picker screen - Choose local files to send to the device.
"""

import pygame
from typing import Any, Dict

from state import UploadPickerState
from ui.theme import Theme, default_theme
from ui.atoms.text import Text
from ui.atoms.checkbox import Checkbox
from utils.formatting import format_size, truncate_text


class UploadPickerScreen:
    """Folder listing with checkboxes on files."""

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self.text = Text(theme)
        self.checkbox = Checkbox(theme)

    def visible_rows(self, screen: pygame.Surface) -> int:
        t = self.theme
        usable = screen.get_height() - 2 * t.toolbar_height - t.notice_height
        return max(1, usable // t.row_height)

    def render(self, screen: pygame.Surface, picker: UploadPickerState) -> Dict[str, Any]:
        t = self.theme
        sw, _ = screen.get_size()

        self.text.render(
            screen,
            truncate_text(f"Upload from {picker.current_path}", 80),
            (t.padding_md, t.padding_sm),
            color=t.primary,
        )
        self.text.render(
            screen,
            f"{len(picker.chosen)} chosen - Space: pick  Enter: open/upload  Esc: back",
            (t.padding_md, t.toolbar_height),
            color=t.text_secondary,
            size=t.font_size_sm,
        )

        rows = []
        visible = self.visible_rows(screen)
        first = max(0, picker.highlighted - visible + 1)
        y = 2 * t.toolbar_height
        for index in range(first, min(len(picker.items), first + visible)):
            item = picker.items[index]
            row = pygame.Rect(t.padding_sm, y, sw - 2 * t.padding_sm, t.row_height)
            if index == picker.highlighted:
                pygame.draw.rect(screen, t.surface_selected, row)

            label = item["name"]
            if item["type"] == "file":
                state = "checked" if item["path"] in picker.chosen else "unchecked"
                self.checkbox.render(screen, (row.left + t.checkbox_column // 2, row.centery), state)
                self.text.render(
                    screen,
                    format_size(item["size"]),
                    (row.right - t.padding_sm, row.top + t.padding_xs),
                    color=t.text_secondary,
                    size=t.font_size_sm,
                    align="right",
                )
            else:
                label = f"[{label}]"

            self.text.render(
                screen,
                label,
                (row.left + t.checkbox_column, row.top + t.padding_xs),
                size=t.font_size_sm,
                max_width=row.width - t.checkbox_column - t.size_column,
            )
            rows.append({"index": index, "row": row})
            y += t.row_height

        return {"picker_rows": rows}
