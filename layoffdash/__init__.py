"""
layoffdash package
==================

Offline engine behind the layoff tracker dashboard.

- The CLI entry point is in `layoffdash/cli.py`.
- Filtering is in `layoffdash/filters.py`, grouping/totals in `layoffdash/aggregator.py`.
- Display-ready shapes (cards, chart series) are in `layoffdash/projection.py`.
- Dataset loading is in `layoffdash/loader.py`.
"""

__version__ = '0.3.0'
