from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Protocol, TextIO

from feature_env.config.models import LoggingConfig
from feature_env.observability.domain.logging import LogMessage, level_rank


class LogSink(Protocol):
    def emit(self, message: LogMessage) -> None:
        raise NotImplementedError("LogSink protocol has no implementation")

    def close(self) -> None:
        raise NotImplementedError("LogSink protocol has no implementation")


class StderrLogSink:
    # Compact JSON line per record on stderr; records below min_level are dropped.
    def __init__(self, min_level: str = "info", stream: TextIO | None = None) -> None:
        self._min_rank = level_rank(min_level)
        self._stream = stream

    def emit(self, message: LogMessage) -> None:
        if level_rank(message.level) < self._min_rank:
            return
        # Resolve stderr lazily so pytest capture replacements are honoured.
        stream = self._stream if self._stream is not None else sys.stderr
        print(_encode(message), file=stream)

    def close(self) -> None:
        # The stream belongs to the process or to the caller.
        pass


class JsonlLogSink:
    """Suite diagnostics appended to a JSON-lines file.

    The file is opened on the first record that passes the level filter, so a
    sink that never logs never holds a handle. `close` is idempotent; a record
    emitted after it reopens the file in append mode.
    """

    def __init__(self, path: Path, min_level: str = "debug") -> None:
        self._path = path
        self._min_rank = level_rank(min_level)
        self._file: TextIO | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._file is None

    def emit(self, message: LogMessage) -> None:
        if level_rank(message.level) < self._min_rank:
            return
        if self._file is None:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._file = self._path.open("a", encoding="utf-8")
        self._file.write(_encode(message) + "\n")
        self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> JsonlLogSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def build_log_sink(config: LoggingConfig) -> LogSink:
    if config.sink == "jsonl":
        # LoggingConfig guarantees a path for the jsonl sink.
        assert config.path is not None
        return JsonlLogSink(Path(config.path), min_level=config.level)
    return StderrLogSink(min_level=config.level)


def _encode(message: LogMessage) -> str:
    # One line per record, millisecond UTC timestamps.
    record = {
        "level": message.level,
        "message": message.message,
        "timestamp": message.timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "fields": message.fields,
    }
    return json.dumps(record, separators=(",", ":"), ensure_ascii=False, default=str)
