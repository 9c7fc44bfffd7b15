"""
File table organism - Draws a TableView from the projector.
"""

import pygame
from typing import Any, Dict, List

from ui.theme import Theme, default_theme
from ui.atoms.text import Text
from ui.atoms.checkbox import Checkbox
from ui.projector import TableView, RowView

SORT_MARKS = {"asc": " ^", "desc": " v", None: ""}


class FileTable:
    """
    Table of files with a select-all header, sortable columns and an
    inline edit control on the row being renamed.
    """

    def __init__(self, theme: Theme = default_theme):
        self.theme = theme
        self.text = Text(theme)
        self.checkbox = Checkbox(theme)

    def visible_rows(self, area: pygame.Rect) -> int:
        """Number of rows that fit below the header."""
        return max(1, (area.height - self.theme.header_height) // self.theme.row_height)

    def _column_rects(self, row_rect: pygame.Rect) -> List[pygame.Rect]:
        t = self.theme
        name_width = row_rect.width - t.checkbox_column - t.size_column - t.date_column
        x = row_rect.left
        rects = []
        for width in (t.checkbox_column, name_width, t.size_column, t.date_column):
            rects.append(pygame.Rect(x, row_rect.top, width, row_rect.height))
            x += width
        return rects

    def render(
        self,
        screen: pygame.Surface,
        view: TableView,
        area: pygame.Rect,
        scroll_offset: int = 0,
        cursor_visible: bool = True,
    ) -> Dict[str, Any]:
        """
        Render the table.

        Args:
            screen: Surface to render to
            view: Table description
            area: Rect available for header and rows
            scroll_offset: Index of the first visible row
            cursor_visible: Blink phase of the edit cursor

        Returns:
            Dict of clickable rects: "select_all", "headers" (field -> rect)
            and "rows" (list of dicts with entry_id, row, checkbox, name)
        """
        t = self.theme
        rects: Dict[str, Any] = {"headers": {}, "rows": []}

        # ---- Header ---- #
        header = pygame.Rect(area.left, area.top, area.width, t.header_height)
        pygame.draw.rect(screen, t.surface, header)
        pygame.draw.line(screen, t.primary_dark, header.bottomleft, header.bottomright)
        cells = self._column_rects(header)
        rects["select_all"] = self.checkbox.render(screen, cells[0].center, view.select_all)

        for cell, column in zip(cells[1:], view.columns):
            label = column.label + SORT_MARKS[column.sort_direction]
            color = t.primary if column.sort_direction else t.text_secondary
            self._cell_text(screen, label, cell, color)
            rects["headers"][column.field] = cell

        # ---- Rows ---- #
        y = header.bottom
        for row in view.rows[scroll_offset : scroll_offset + self.visible_rows(area)]:
            row_rect = pygame.Rect(area.left, y, area.width, t.row_height)
            rects["rows"].append(self._render_row(screen, row, row_rect, cursor_visible))
            y += t.row_height

        if not view.rows:
            self.text.render(
                screen,
                "No files",
                (area.centerx, header.bottom + t.padding_lg),
                color=t.text_secondary,
                align="center",
            )
        return rects

    def _render_row(
        self, screen: pygame.Surface, row: RowView, row_rect: pygame.Rect, cursor_visible: bool
    ) -> Dict[str, Any]:
        t = self.theme
        if row.highlighted:
            pygame.draw.rect(screen, t.surface_selected, row_rect)
        if row.focused:
            pygame.draw.rect(screen, t.primary_dark, row_rect, width=1)

        check_cell, name_cell, size_cell, date_cell = self._column_rects(row_rect)
        checkbox = self.checkbox.render(
            screen, check_cell.center, "checked" if row.checked else "unchecked"
        )

        if row.editing:
            box = name_cell.inflate(-t.padding_xs, -t.padding_xs)
            pygame.draw.rect(screen, t.background, box)
            pygame.draw.rect(screen, t.secondary, box, width=1)
            caret = "_" if cursor_visible else ""
            self._cell_text(screen, row.edit_value + caret, name_cell, t.secondary)
        else:
            self._cell_text(screen, row.display_name, name_cell, t.text_primary)

        self._cell_text(screen, row.size_text, size_cell, t.text_secondary)
        self._cell_text(screen, row.date_text, date_cell, t.text_secondary)
        return {"entry_id": row.entry_id, "row": row_rect, "checkbox": checkbox, "name": name_cell}

    def _cell_text(self, screen, text, cell: pygame.Rect, color) -> None:
        size = self.theme.font_size_sm
        _, text_h = self.text.measure(text or " ", size)
        self.text.render(
            screen,
            text,
            (cell.left + self.theme.padding_sm, cell.centery - text_h // 2),
            color=color,
            size=size,
            max_width=cell.width - self.theme.padding_md,
        )
