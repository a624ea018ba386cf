import logging
import textwrap
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config import CalendarConfig
from .errors import UnknownRenderer
from .grid import CalendarGrid
from .i18n import month_name, weekday_abbreviations

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateRenderer:
    def __init__(self, template_dir: Path = TEMPLATE_DIR):
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["svg", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_name: str, context: dict) -> str:
        template = self.env.get_template(template_name)
        return template.render(**context)


class Renderer(ABC):
    name: str = ""

    @abstractmethod
    def render_month(self, config: CalendarConfig, grid: CalendarGrid) -> Path:
        """Renders one month and returns the written file."""

    def render_year(self, config: CalendarConfig, grid: CalendarGrid) -> List[Path]:
        """Renders all twelve months of `grid.year`, one file each by default."""
        return [self.render_month(config, grid.clone_at(month)) for month in range(1, 13)]


class RendererRegistry:
    """Renderers by name. Built once at startup and handed to whoever renders."""

    def __init__(self, renderers: Iterable[Renderer] = ()):
        self._renderers: Dict[str, Renderer] = {}
        for renderer in renderers:
            self.register(renderer)

    def register(self, renderer: Renderer) -> None:
        self._renderers[renderer.name] = renderer

    def get(self, name: str) -> Renderer:
        key = name.strip().lower()
        if key not in self._renderers:
            raise UnknownRenderer(key, self.names())
        return self._renderers[key]

    def names(self) -> List[str]:
        return sorted(self._renderers)

    def __contains__(self, name: str) -> bool:
        return name.strip().lower() in self._renderers


def wrap_text(text: str, font_size: float, available_width: float) -> List[str]:
    # Rough monospace estimate; good enough for short notes.
    chars = max(1, int(available_width / (font_size * 0.6)))
    lines = []
    for paragraph in text.splitlines():
        lines.extend(textwrap.wrap(paragraph, width=chars) or [""])
    return lines or [""]


class SVGRenderer(Renderer):
    name = "svg"

    WIDTH = 800
    HEIGHT = 600
    MARGIN = 40
    DAY_BOX_HEIGHT = 36

    def __init__(self, templates: TemplateRenderer = None):
        self.templates = templates or TemplateRenderer()

    def render_month(self, config: CalendarConfig, grid: CalendarGrid) -> Path:
        path = config.month_output_path(grid.month, self.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render_svg(config, grid), encoding="utf-8")
        logger.info("wrote %s", path)
        return path

    def render_svg(self, config: CalendarConfig, grid: CalendarGrid) -> str:
        return self.templates.render("month.svg", self.layout(config, grid))

    def layout(self, config: CalendarConfig, grid: CalendarGrid) -> dict:
        """Positions of everything on the page, ready for the template."""
        title_y = self.MARGIN + 30
        header_y = title_y + 40
        grid_y = header_y + 20
        cell_w = (self.WIDTH - 2 * self.MARGIN) // 7
        row_h = (self.HEIGHT - grid_y - self.MARGIN) / len(grid.weeks)

        note_size = config.font_sizes.notes
        if len(grid.weeks) == 5:
            note_size -= 2
        elif len(grid.weeks) == 6:
            note_size -= 4

        headers = [
            {"x": self.MARGIN + i * cell_w + cell_w // 2, "text": name}
            for i, name in enumerate(weekday_abbreviations(config.language, grid.week_start))
        ]

        cells = []
        for row, week in enumerate(grid.weeks):
            for col, day in enumerate(week):
                x = self.MARGIN + col * cell_w
                y = grid_y + row * row_h
                cell = {"x": x, "y": round(y, 1), "visible": day.is_current_month or config.show_extra_days}
                cells.append(cell)
                if not cell["visible"]:
                    continue

                cell.update(
                    number=day.day_number,
                    color="rgb(0,0,0)" if day.is_current_month else "rgb(128,128,128)",
                    box=day.is_current_month,
                    fill="rgb(200,200,200)" if day.is_current_month and day.is_holiday else "white",
                )
                if day.icon:
                    size = cell_w // 3
                    cell["icon"] = {"href": day.icon, "x": x + cell_w - size - 5, "y": round(y + 5, 1), "size": size}

                note = day.note
                if note is not None and note.text:
                    size = note.size or note_size
                    line_height = (size / 2) - 1 if note.size else size
                    cell["note"] = {
                        "x": x + 5,
                        "y": round(y + self.DAY_BOX_HEIGHT + 24, 1),
                        "font": note.font or config.fonts.notes,
                        "size": size,
                        "line_height": line_height,
                        "lines": wrap_text(note.text, size, cell_w - 5),
                    }

        return {
            "width": self.WIDTH,
            "height": self.HEIGHT,
            "title": f"{month_name(config.language, grid.month)} {grid.year}",
            "title_y": title_y,
            "header_y": header_y,
            "headers": headers,
            "cells": cells,
            "cell_w": cell_w,
            "row_h": round(row_h, 1),
            "box_w": round(cell_w / 3, 1),
            "box_h": self.DAY_BOX_HEIGHT,
            "fonts": config.fonts,
            "font_sizes": config.font_sizes,
        }


def default_registry() -> RendererRegistry:
    return RendererRegistry([SVGRenderer()])
