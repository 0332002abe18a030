"""Data model for split manifests."""

from dataclasses import dataclass, field
from typing import Any, Mapping

FILENAME_TEMPLATE = "{kind}-{name}.yaml"


def derive_filename(kind, name):
    """Build the output filename for a resource.

    Both parts are lowercased and every ``:`` is replaced with ``-`` so that
    names like ``system:controller:job-controller`` stay portable.
    """
    filename = FILENAME_TEMPLATE.format(kind=kind.lower(), name=name.lower())
    return filename.replace(":", "-")


@dataclass(frozen=True)
class Record:
    """A single document taken out of a multi-document stream."""
    kind: str
    name: str
    text: str
    index: int = 0
    data: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def filename(self):
        return derive_filename(self.kind, self.name)
