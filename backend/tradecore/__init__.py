"""Core trading logic: models, indicators, symbol state, strategies, orders.

This package contains pure business logic with no I/O dependencies
(no network access, no clocks other than the ones passed in). The
tick dispatcher and submission pipeline in tradebot/ drive it.
"""
