class AnalyticsError(Exception):
    """Base class for analytics engine failures."""


class StoreFailure(AnalyticsError):
    """
    The record store raised while a metric was being computed.
    The store's own exception is chained as __cause__.
    """

    def __init__(self, metric: str, stage: str):
        super().__init__(f"{metric}: record store failed during {stage}")
        self.metric = metric
        self.stage = stage
