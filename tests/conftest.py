import os
import sys

# Ensure the project root is on sys.path so the package imports without an install.
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)
