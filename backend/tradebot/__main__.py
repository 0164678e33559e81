"""CLI entry point: python -m tradebot"""

import sys

from tradebot.main import main

sys.exit(main())
