from geodist.monitoring.metrics import get_metrics, record_computation, record_request, reset_metrics

__all__ = ["get_metrics", "record_computation", "record_request", "reset_metrics"]
