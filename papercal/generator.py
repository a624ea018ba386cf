import logging
from typing import List, Optional

from .config import CalendarConfig
from .grid import build_grid
from .renderer import RendererRegistry, default_registry
from .special_days import SpecialDayStore

logger = logging.getLogger(__name__)


class CalendarGenerator:
    def __init__(self, config: CalendarConfig, registry: Optional[RendererRegistry] = None):
        from .utils import load_store

        self.config = config.resolved()
        self.registry = registry or default_registry()
        self.renderer = self.registry.get(self.config.renderer)
        self.store: SpecialDayStore = load_store(self.config.special_days, self.config.year, self.config.month)

    def generate(self) -> List:
        """Renders the configured month, or every month when none is set."""
        cfg = self.config
        first_month = 1 if cfg.is_whole_year else cfg.month
        grid = build_grid(cfg.year, first_month, cfg.week_start, self.store)

        if cfg.is_whole_year:
            logger.info("rendering %d with %s", cfg.year, self.renderer.name)
            return self.renderer.render_year(cfg, grid)

        logger.info("rendering %d-%02d with %s", cfg.year, cfg.month, self.renderer.name)
        return [self.renderer.render_month(cfg, grid)]
