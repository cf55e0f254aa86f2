"""Utilities package."""

from .helpers import snapshot_to_dict, format_prediction_output, frequency_frame, ranking_frame

__all__ = [
    'snapshot_to_dict',
    'format_prediction_output',
    'frequency_frame',
    'ranking_frame'
]
