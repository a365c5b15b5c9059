import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work,
# even when the package is not installed (e.g. running pytest from a checkout).
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)
