"""
Signals sent while a pipeline runs.

Receivers get the instrumentation payload as keyword arguments and the
pipeline's instrumentation name as ``sender``:

    from django.dispatch import receiver
    from html_pipeline.signals import after_filter

    @receiver(after_filter)
    def log_slow_filters(sender, filter, duration, **kwargs):
        ...
"""

from django.dispatch import Signal

before_pipeline = Signal()
after_pipeline = Signal()
before_filter = Signal()
after_filter = Signal()

SIGNALS_BY_EVENT = {
    "before_pipeline": before_pipeline,
    "after_pipeline": after_pipeline,
    "before_filter": before_filter,
    "after_filter": after_filter,
}
