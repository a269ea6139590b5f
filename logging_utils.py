#!/usr/bin/env python3
"""Logging utilities for teamigrate."""

import os
import sys
import time

import colorama

from security import SecurityValidator

# Initialize colorama for cross-platform colored output
colorama.init(autoreset=True)


class Logger:
    """Timestamped, colored diagnostics with credential redaction.

    Every line goes to stderr so that stdout only carries the banner and the
    interactive prompt.
    """

    PROCESS_NAME = "teamigrate"
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def debug(cls, *messages: str) -> None:
        cls._write(colorama.Fore.LIGHTBLACK_EX, *cls._sanitize(messages))

    @classmethod
    def info(cls, *messages: str) -> None:
        cls._write(colorama.Fore.CYAN, *cls._sanitize(messages))

    @classmethod
    def warn(cls, *messages: str) -> None:
        cls._write(colorama.Fore.YELLOW, *cls._sanitize(messages))

    @classmethod
    def error(cls, *messages: str) -> None:
        cls._write(colorama.Fore.RED, *cls._sanitize(messages))

    @staticmethod
    def _sanitize(messages) -> list:
        return [SecurityValidator.sanitize_for_logging(str(msg)) for msg in messages]

    @classmethod
    def _write(cls, color: str, *messages: str) -> None:
        sys.stderr.write(cls._format_line(color, *messages) + "\n")
        sys.stderr.flush()

    @classmethod
    def _get_header(cls) -> str:
        return f"[{cls.PROCESS_NAME}:{os.getpid()}]"

    @classmethod
    def _format_line(cls, color: str, *messages: str) -> str:
        header = cls._get_header()
        timestamp = time.strftime(cls.TIMESTAMP_FORMAT)
        message = " ".join(str(m) for m in messages)
        return f"{color}{header}{colorama.Style.RESET_ALL} {timestamp} {message}"
