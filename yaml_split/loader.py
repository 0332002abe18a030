"""PyYAML loader and dumper for kubernetes manifests.

Documents are read with the safe loader, but every mapping keeps the key order
it had in the input and tags the safe loader does not know about (``!Ref``,
``!Sub`` and friends) are read as their untagged value instead of failing.
"""

from collections import OrderedDict

import yaml
from yaml.constructor import ConstructorError

MAP_TAG = "tag:yaml.org,2002:map"
STR_TAG = "tag:yaml.org,2002:str"


class ManifestLoader(yaml.SafeLoader):

    def construct_ordered_mapping(self, node):
        if not isinstance(node, yaml.MappingNode):
            raise ConstructorError(None, None,
                                   "expected a mapping node, but found %s" % node.id, node.start_mark)
        self.flatten_mapping(node)
        mapping = OrderedDict()
        for key_node, value_node in node.value:
            key = self.construct_object(key_node, deep=True)
            try:
                hash(key)
            except TypeError:
                raise ConstructorError("while constructing a mapping", node.start_mark,
                                       "found unhashable key", key_node.start_mark)
            mapping[key] = self.construct_object(value_node, deep=True)
        return mapping

    def construct_ordered_map(self, node):
        # !!omap is a sequence of one-pair mappings
        if not isinstance(node, yaml.SequenceNode):
            raise ConstructorError("while constructing an ordered map", node.start_mark,
                                   "expected a sequence, but found %s" % node.id, node.start_mark)
        mapping = OrderedDict()
        for entry in node.value:
            if not isinstance(entry, yaml.MappingNode) or len(entry.value) != 1:
                raise ConstructorError("while constructing an ordered map", node.start_mark,
                                       "expected a single mapping item", entry.start_mark)
            mapping.update(self.construct_ordered_mapping(entry))
        return mapping

    def construct_timestamp_text(self, node):
        # a datetime would be written back in a different format
        return self.construct_scalar(node)

    def construct_untagged(self, tag_suffix, node):
        if isinstance(node, yaml.MappingNode):
            return self.construct_ordered_mapping(node)
        if isinstance(node, yaml.SequenceNode):
            return self.construct_sequence(node, deep=True)
        return self.construct_scalar(node)


ManifestLoader.add_constructor(MAP_TAG, ManifestLoader.construct_ordered_mapping)
ManifestLoader.add_constructor("tag:yaml.org,2002:omap", ManifestLoader.construct_ordered_map)
ManifestLoader.add_constructor("tag:yaml.org,2002:timestamp", ManifestLoader.construct_timestamp_text)
ManifestLoader.add_multi_constructor("", ManifestLoader.construct_untagged)


class ManifestDumper(yaml.SafeDumper):

    def represent_ordered_mapping(self, data):
        # an items view is not sorted by represent_mapping
        return self.represent_mapping(MAP_TAG, data.items())

    def represent_text(self, data):
        style = "|" if "\n" in data.rstrip("\n") else None
        return self.represent_scalar(STR_TAG, data, style=style)


ManifestDumper.add_representer(OrderedDict, ManifestDumper.represent_ordered_mapping)
ManifestDumper.add_representer(str, ManifestDumper.represent_text)


def load_all(stream):
    """Yield every document in ``stream`` (str, bytes or file object)."""
    return yaml.load_all(stream, Loader=ManifestLoader)


def dump(doc, width=None):
    """Serialize a single document the way it is written to disk."""
    return yaml.dump(doc, Dumper=ManifestDumper, width=width, allow_unicode=True,
                     default_flow_style=False, sort_keys=False)
