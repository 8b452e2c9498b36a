"""
Prometheus Metrics Module

Provides instrumentation for the API and the polling operations:
- Question lifecycle (created, edited, deleted)
- Response submissions (created vs updated)
- Statistics computations
- API request counts and latency
- Error tracking

Usage:
    from server.metrics import metrics
    metrics.responses_submitted.labels(outcome="created").inc()
    with metrics.stats_duration.labels(scope="group").time():
        compute_group_stats(...)
"""

from prometheus_client import Counter, Histogram, Gauge, generate_latest, REGISTRY


class SondageMetrics:
    """Centralized metrics for the sondage API"""

    def __init__(self):
        # Question lifecycle
        self.question_events = Counter(
            'sondage_question_events_total',
            'Question lifecycle events',
            ['action']  # created/edited/deleted
        )

        self.responses_submitted = Counter(
            'sondage_responses_submitted_total',
            'Responses submitted',
            ['outcome']  # created/updated
        )

        self.responses_cascaded = Counter(
            'sondage_responses_cascaded_total',
            'Responses removed because their question was deleted'
        )

        # Statistics
        self.stats_duration = Histogram(
            'sondage_stats_duration_seconds',
            'Statistics computation duration',
            ['scope'],  # list/results/group
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5]
        )

        self.store_size = Gauge(
            'sondage_store_size',
            'Entities currently held by the session store',
            ['entity']  # questions/responses
        )

        # API metrics
        self.api_requests = Counter(
            'sondage_api_requests_total',
            'Total API requests',
            ['endpoint', 'method', 'status_code']
        )

        self.api_request_duration = Histogram(
            'sondage_api_request_duration_seconds',
            'API request duration',
            ['endpoint', 'method'],
            buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]
        )

        # Error metrics
        self.errors = Counter(
            'sondage_errors_total',
            'Total errors by component and type',
            ['component', 'error_type']
        )

    def update_store_size(self, store_stats: dict):
        """Update store size gauges

        Args:
            store_stats: Dict from SessionStore.get_stats()
        """
        for entity in ('questions', 'responses'):
            self.store_size.labels(entity=entity).set(store_stats.get(entity, 0))

    def record_error(self, component: str, error: Exception):
        """Record an error

        Args:
            component: Component name (store/statistics/api)
            error: Exception instance
        """
        error_type = type(error).__name__
        self.errors.labels(component=component, error_type=error_type).inc()


# Global metrics instance
metrics = SondageMetrics()


def get_metrics_text() -> str:
    """Get Prometheus metrics in text format"""
    return generate_latest(REGISTRY).decode('utf-8')
