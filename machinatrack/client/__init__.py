"""HTTP client for the MachinaTrack API"""

from .api_client import ApiError, MachinaTrackClient

__all__ = ['ApiError', 'MachinaTrackClient']
