"""Descriptor storage backends."""

from flavorwheel.storage.memory import InMemoryDescriptorSource, load_descriptor_file

__all__ = ["InMemoryDescriptorSource", "load_descriptor_file"]
