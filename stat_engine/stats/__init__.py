"""
Stats: tagged, prioritized values and their aggregation.

The Qt bridge lives in stat_engine.stats.stat_signals and is imported from
there so the core does not load PySide6.
"""

from stat_engine.stats.stat_base import Stat
from stat_engine.stats.stat_block import StatBlock, total_stats
