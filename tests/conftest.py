"""
Shared test setup: headless matplotlib backend.
"""

import matplotlib

matplotlib.use("Agg")
