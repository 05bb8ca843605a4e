#!/usr/bin/env python3
"""
Snuffle - Core Utility Functions
Chunked file reading and writing for the stream driver.
"""

import os
import logging

from .errors import IOFailure

# Setup logging
logger = logging.getLogger("Snuffle")


class ChunkReader:
    """File reader handing out fixed-size chunks, mapping OS errors to IOFailure."""

    def __init__(self, file_path, chunk_size):
        """Open file_path for reading in chunks of chunk_size bytes."""
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")
        self.file_path = file_path
        self.chunk_size = chunk_size
        self._closed = False
        try:
            self.file = open(file_path, 'rb')
            self.file_size = os.fstat(self.file.fileno()).st_size
        except OSError as e:
            raise IOFailure(f"Could not open {file_path}: {e.strerror or e}") from e

    def __len__(self):
        """Return the file size."""
        return self.file_size

    def create_chunks(self):
        """
        Create a generator that yields data chunks for streaming processing.
        This is memory-efficient as it only keeps one chunk in memory at a time.

        Yields:
            Byte chunks from the file, in order
        """
        if self._closed:
            raise ValueError("Cannot create chunks from closed file")

        chunk_count = 0
        while True:
            try:
                chunk = self.file.read(self.chunk_size)
            except OSError as e:
                raise IOFailure(f"Could not read {self.file_path}: {e.strerror or e}") from e
            if not chunk:
                break
            chunk_count += 1
            yield chunk

        logger.debug(f"Read {chunk_count} chunks from {self.file_path}")

    def __iter__(self):
        return self.create_chunks()

    def close(self):
        """Close the file."""
        if self._closed:
            return
        self.file.close()
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class ChunkWriter:
    """Write processed chunks to a file, mapping OS errors to IOFailure."""

    def __init__(self, file_path):
        self.file_path = file_path
        self.bytes_written = 0
        try:
            self.file = open(file_path, 'wb')
        except OSError as e:
            raise IOFailure(f"Could not open {file_path}: {e.strerror or e}") from e

    def write(self, data):
        try:
            self.file.write(data)
        except OSError as e:
            raise IOFailure(f"Could not write {self.file_path}: {e.strerror or e}") from e
        self.bytes_written += len(data)

    def close(self):
        try:
            self.file.close()
        except OSError as e:
            raise IOFailure(f"Could not close {self.file_path}: {e.strerror or e}") from e

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def iter_file_chunks(file_path, chunk_size):
    # open eagerly so a missing file fails here, not on the first next()
    reader = ChunkReader(file_path, chunk_size)

    def _chunks():
        with reader:
            yield from reader.create_chunks()

    return _chunks()
