#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mailtree/utils/io_utils.py
"""I/O utilities for handling output destinations."""

from __future__ import annotations

import io
from pathlib import Path
from typing import IO, Union

from mailtree.exceptions import OutputWriteError

OutputDestination = Union[str, Path, IO[bytes], IO[str]]


def write_content(content: str, output: OutputDestination) -> None:
    """Write rendered text to a path or file-like object.

    Parameters
    ----------
    content : str
        Rendered text
    output : str, Path, IO[bytes] or IO[str]
        File path, binary stream (UTF-8 encoded) or text stream

    Raises
    ------
    OutputWriteError
        If a file path cannot be written
    TypeError
        If output type is not supported

    Examples
    --------
    >>> buffer = io.StringIO()
    >>> write_content("<p>Hi</p>", buffer)
    >>> buffer.getvalue()
    '<p>Hi</p>'

    """
    if isinstance(output, (str, Path)):
        path = Path(output)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(str(path), original_error=e) from e
        return

    if isinstance(output, io.TextIOBase):
        output.write(content)
        return

    if hasattr(output, "write"):
        mode = getattr(output, "mode", "")
        if isinstance(output, (io.RawIOBase, io.BufferedIOBase)) or "b" in str(mode):
            output.write(content.encode("utf-8"))  # type: ignore[arg-type]
        else:
            output.write(content)  # type: ignore[arg-type]
        return

    raise TypeError(f"Unsupported output type: {type(output).__name__}")


__all__ = ["OutputDestination", "write_content"]
