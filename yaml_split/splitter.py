"""Split a multi-document YAML stream into one file per resource."""

import logging
import os
import sys

from .loader import dump, load_all
from .models import Record, derive_filename

logger = logging.getLogger(__name__)

DIR_MODE = 0o755
FILE_MODE = 0o644
LIST_KINDS = ("List",)


class SplitError(Exception):
    """Raised when a document can not be turned into a record or written out."""


def read_input(path=None):
    """Return the whole input as bytes; ``None`` or ``-`` reads stdin."""
    if path is None or path == "-":
        logger.debug("Reading from stdin")
        return sys.stdin.buffer.read()
    logger.debug("Reading from {}".format(path))
    with open(os.path.expanduser(path), "rb") as fd:
        return fd.read()


def get_kind(doc):
    return _as_text(doc.get("kind"))


def get_name(doc):
    metadata = doc.get("metadata")
    if not isinstance(metadata, dict):
        return ""
    return _as_text(metadata.get("name"))


def _as_text(value):
    if value is None:
        return ""
    return str(value)


def _expand(doc, unwrap_lists):
    if unwrap_lists and doc.get("kind") in LIST_KINDS and isinstance(doc.get("items"), list):
        logger.debug("Unwrapping {} with {} items".format(doc.get("kind"), len(doc["items"])))
        for item in doc["items"]:
            if item is not None:
                yield item
    else:
        yield doc


def _load(raw):
    """Yield ``(position, document)`` pairs from ``raw``.

    Some constructors (``!!int abc`` for one) fail with a plain ``ValueError``
    or ``TypeError``; those are raised as :class:`SplitError`.
    """
    docs = load_all(raw)
    position = 0
    while True:
        try:
            doc = next(docs)
        except StopIteration:
            return
        except (ValueError, TypeError) as e:
            raise SplitError("document {} can not be loaded: {}".format(position, e)) from e
        yield position, doc
        position += 1


def split_documents(raw, unwrap_lists=True):
    """Yield a :class:`Record` for every non-empty document in ``raw``.

    Parsing is left to PyYAML, so a malformed stream raises
    ``yaml.YAMLError`` the moment the bad document is reached.
    """
    index = 0
    for position, doc in _load(raw):
        if doc is None:
            logger.debug("Skipping empty document {}".format(position))
            continue
        if not isinstance(doc, dict):
            raise SplitError("document {} is a {}, expected a mapping".format(
                position, type(doc).__name__))
        for resource in _expand(doc, unwrap_lists):
            if not isinstance(resource, dict):
                raise SplitError("item in document {} is a {}, expected a mapping".format(
                    position, type(resource).__name__))
            yield Record(kind=get_kind(resource), name=get_name(resource),
                         text=dump(resource), index=index, data=resource)
            index += 1


def ensure_output_dir(path):
    """Create ``path`` and any missing parents, each with ``DIR_MODE``."""
    path = os.path.normpath(os.path.expanduser(path))
    missing = []
    head = path
    while head and not os.path.isdir(head):
        missing.append(head)
        parent = os.path.dirname(head)
        if parent == head:
            break
        head = parent
    for d in reversed(missing):
        logger.debug("Creating directory {}".format(d))
        try:
            os.mkdir(d, DIR_MODE)
        except FileExistsError:
            if not os.path.isdir(d):
                raise
    return path


def overwrite_to_file(path, payload):
    """Truncate (or create) ``path`` and write ``payload`` to it."""
    try:
        fd = os.open(path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, FILE_MODE)
    except ValueError as e:
        # embedded NUL in a resource name
        raise SplitError("can not write {!r}: {}".format(path, e)) from e
    with os.fdopen(fd, "w", encoding="utf-8") as fs:
        fs.write(payload)


def write_records(records, output_dir, dry_run=False):
    written = []
    for record in records:
        fp = os.path.join(output_dir, record.filename)
        logger.info("processing: {}".format(record.filename))
        if dry_run:
            logger.debug("Dry run, not writing {}".format(fp))
        else:
            overwrite_to_file(fp, record.text)
        written.append(fp)
    return written


def split(raw, output_dir, unwrap_lists=True, dry_run=False):
    """Parse every document in ``raw`` and write each one under ``output_dir``.

    All documents are parsed before anything touches the disk, so a syntax
    error leaves no partial output behind.
    """
    records = list(split_documents(raw, unwrap_lists=unwrap_lists))
    logger.debug("Found {} documents".format(len(records)))
    if dry_run:
        output_dir = os.path.expanduser(output_dir)
    else:
        output_dir = ensure_output_dir(output_dir)
    return write_records(records, output_dir, dry_run=dry_run)


__all__ = [
    "DIR_MODE",
    "FILE_MODE",
    "SplitError",
    "derive_filename",
    "ensure_output_dir",
    "get_kind",
    "get_name",
    "overwrite_to_file",
    "read_input",
    "split",
    "split_documents",
    "write_records",
]
