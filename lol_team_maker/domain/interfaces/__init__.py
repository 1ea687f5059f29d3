"""Domain interfaces."""
from .data_source import RiotDataSource
from .progress import ProgressEvent, ProgressSink

__all__ = [
    'RiotDataSource',
    'ProgressEvent',
    'ProgressSink',
]
