"""
Analytics event recording.
"""

from askcart.core.analytics.sink import MESSAGE_SENT, PRODUCT_RECOMMENDED, AnalyticsSink

__all__ = ["AnalyticsSink", "MESSAGE_SENT", "PRODUCT_RECOMMENDED"]
