"""Instance data: entity instances, per-entity buckets and databases."""

from .entity_instance import EntityInstance
from .collection import EntityInstanceCollection
from .instance_data import ERInstanceData

__all__ = ["EntityInstance", "EntityInstanceCollection", "ERInstanceData"]
