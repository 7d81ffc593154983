"""OverSync — terminal shell for the OverSync peer-to-peer vault synchronizer."""

__version__ = "0.3.0"
