from .adapters import JsonlLogSink, LogSink, StderrLogSink, build_log_sink
from .domain import LogMessage

__all__ = ["JsonlLogSink", "LogMessage", "LogSink", "StderrLogSink", "build_log_sink"]
