# services/__init__.py

# This file makes the 'services' directory a Python package and
# exposes its stateless modules for import.

from . import catalog_query
from . import export_service
