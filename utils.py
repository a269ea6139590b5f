#!/usr/bin/env python3
"""Utility functions for teamigrate."""

import re
from typing import Optional, Tuple

import requests

from logging_utils import Logger

# Not anchored: the URL may carry a scheme, "www." or extra path segments
GITHUB_URL_PATTERN = re.compile(r"github\.com/([^/]+)/([^/]+)")


def strip_line_ending(line: str) -> str:
    """Drop the trailing newline (and a preceding carriage return) from a line."""
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def parse_github_url(line: str) -> Optional[Tuple[str, str]]:
    """Extract (owner, repo) from the first github.com/<owner>/<repo> in line.

    Only the first two path segments after the host are captured; they are
    returned verbatim. Returns None when the line holds no such URL.
    """
    match = GITHUB_URL_PATTERN.search(strip_line_ending(line))
    if match is None:
        return None
    return match.group(1), match.group(2)


def close_response(response: requests.Response) -> None:
    """Release a response body; a failing close is logged, never raised."""
    try:
        response.close()
    except Exception as error:
        Logger.warn(f"failed to close response: {error}")
