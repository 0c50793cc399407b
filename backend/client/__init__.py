"""Client for the ERP admin API."""

from .api import DOMAIN_PATHS, ErpApiClient

__all__ = ["DOMAIN_PATHS", "ErpApiClient"]
