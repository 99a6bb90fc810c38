"""Clustering, top-K and windowed aggregation algorithms."""

from responsiveness.core.clustering import DURATION_QUANTUM_MS, FrameClusterer, estimate_render_time
from responsiveness.core.frame_counter import TimeWindowedFrameCounter, fps_from_frame_interval
from responsiveness.core.interaction_count import CountStrategy, InteractionCountEstimator
from responsiveness.core.processing import ProcessingTimeAggregator, total_processing_time
from responsiveness.core.top_k import TopKLatencyTracker

__all__ = [
    "CountStrategy",
    "DURATION_QUANTUM_MS",
    "FrameClusterer",
    "InteractionCountEstimator",
    "ProcessingTimeAggregator",
    "TimeWindowedFrameCounter",
    "TopKLatencyTracker",
    "estimate_render_time",
    "fps_from_frame_interval",
    "total_processing_time",
]
