"""
API HTTP del sitio (aiohttp): catálogo público, contacto, login y panel admin.
"""

from vitrina.web.app import create_app
from vitrina.web.public import criteria_from_query

__all__ = ["create_app", "criteria_from_query"]
