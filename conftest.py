import os
import sys

# `pytest` from the repo root: make `apps` and `gearstore` importable and
# point Django at the project settings.
BASE_DIR = os.path.dirname(__file__)
BACKEND_DIR = os.path.join(BASE_DIR, 'backend')
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'gearstore.settings')
