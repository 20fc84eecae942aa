from .logging import JsonlLogSink, LogSink, StdoutLogSink, build_log_sink

__all__ = ["JsonlLogSink", "LogSink", "StdoutLogSink", "build_log_sink"]
