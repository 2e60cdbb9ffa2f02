"""Remote data connectors for the campaign analytics engine"""

from campaign_analytics.connectors.base_connector import BaseConnector
from campaign_analytics.connectors.client_data import ClientDataConnector, ClientDataError

__all__ = [
    "BaseConnector",
    "ClientDataConnector",
    "ClientDataError"
]
