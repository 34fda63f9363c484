from .logging import JsonlLogSink, LogSink, StderrLogSink, build_log_sink

__all__ = ["JsonlLogSink", "LogSink", "StderrLogSink", "build_log_sink"]
