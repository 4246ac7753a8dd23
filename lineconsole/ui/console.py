#!/usr/bin/env python3
# lineconsole/ui/console.py
from __future__ import annotations

import sys
import threading

# Single shared print mutex for all UI output (console messages and logging).
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file=None, flush: bool = True) -> None:
    """Thread-safe single-line print."""
    stream = file or sys.stdout
    with PRINT_MUTEX:
        stream.write(f"{text}\n")
        if flush:
            stream.flush()
