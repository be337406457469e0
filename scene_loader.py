# scene_loader.py

import logging
import xml.etree.ElementTree as ET
from collections import namedtuple
from colour import hex_to_rgb
from fire_elements import ELEMENT_TYPES

logger = logging.getLogger("fireworks")

# Simple structures describing one fire element of the scene.
Vector = namedtuple('Vector', ['x', 'y'])
ElementDescriptor = namedtuple(
    'ElementDescriptor', ['type', 'colour', 'begin', 'duration', 'position', 'velocity']
)


class SceneLoadFailure(Exception):
    """The scene description could not be read, parsed or validated."""


def _attribute(node, name):
    """Reads a value from an attribute, falling back to a child element's text."""
    value = node.get(name)
    if value is None:
        value = node.findtext(name)
    if value is None:
        raise SceneLoadFailure(f"<{node.tag}> is missing '{name}'")
    return value.strip()


def _number(node, name, cast):
    raw = _attribute(node, name)
    try:
        return cast(raw)
    except ValueError:
        raise SceneLoadFailure(f"<{node.tag}> has a non-numeric '{name}': {raw!r}") from None


def _vector(node, name, required):
    child = node.find(name)
    if child is None:
        if required:
            raise SceneLoadFailure(f"<{node.tag}> is missing <{name}>")
        return None
    return Vector(_number(child, 'x', int), _number(child, 'y', int))


def parse_descriptor(node) -> ElementDescriptor:
    """
    Converts one <Firework> element into an ElementDescriptor.

    Only called for kinds the loader keeps. Every field is validated so that
    a broken scene fails at load time rather than mid-show.
    """
    colour = _attribute(node, 'colour')
    try:
        hex_to_rgb(colour)
    except ValueError as e:
        raise SceneLoadFailure(str(e)) from e

    begin = _number(node, 'begin', float)
    duration = _number(node, 'duration', float)
    if begin < 0 or duration < 0:
        raise SceneLoadFailure(f"<{node.tag}> has a negative begin or duration")

    return ElementDescriptor(
        type=_attribute(node, 'type'),
        colour=colour,
        begin=begin,
        duration=duration,
        position=_vector(node, 'Position', required=True),
        velocity=_vector(node, 'Velocity', required=False),
    )


class SceneLoader:
    """
    Reads the scene XML document from disk.

    Data Contract:
    - Inputs:
        - path (str) - Location of the scene document.
        - known_types (iterable) - Element kinds to keep. Defaults to the kinds
          the show can build.
    - Outputs: load() returns a list of ElementDescriptor in document order.
    - Side Effects: Reads the file.
    - Invariants: Nodes of an unknown kind are skipped before any of their
      other fields are read. Any problem reading or validating a kept node
      is raised as SceneLoadFailure.
    """
    def __init__(self, path: str, known_types=None):
        self.path = path
        self.known_types = set(known_types if known_types is not None else ELEMENT_TYPES)

    def load(self) -> list:
        logger.info(f"Loading scene from {self.path}")
        try:
            root = ET.parse(self.path).getroot()
        except (OSError, ET.ParseError) as e:
            raise SceneLoadFailure(f"Cannot read scene {self.path}: {e}") from e

        descriptors = []
        for node in root.iter('Firework'):
            kind = _attribute(node, 'type')
            if kind not in self.known_types:
                logger.warning(f"Skipping <{node.tag}> with unknown type {kind!r}.")
                continue
            descriptors.append(parse_descriptor(node))

        logger.info(f"Scene loaded with {len(descriptors)} element descriptor(s).")
        return descriptors
