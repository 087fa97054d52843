import os
import sys

# Ensure we can import the package from the src/ layout
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

import matplotlib

matplotlib.use("Agg")
