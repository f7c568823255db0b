"""Transcode Planner - content-adaptive transcode decisions for media files.

Plans how a probed media file should be re-encoded to HEVC and decides,
after an external encode has run, whether the result is kept or reverted.
"""

__version__ = "0.1.0"
