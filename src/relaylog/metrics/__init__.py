from .metrics import DeliveryMetrics, MetricsCollector

__all__ = ["DeliveryMetrics", "MetricsCollector"]
