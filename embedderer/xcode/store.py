from typing import Callable, Dict, Iterable, Iterator, List, Optional, Type, TypeVar

from embedderer.xcode.model import XcodeID, XcodeObject, generate_id

ObjectT = TypeVar("ObjectT", bound=XcodeObject)


def allocate_id(
    objects: "ObjectStore", generator: Callable[[], XcodeID] = generate_id
) -> XcodeID:
    """
    Allocate an identifier that no object in the store currently uses.

    Args:
        objects: The store the new object will be attached to.
        generator: Source of candidate identifiers.

    Returns:
        A free identifier. It is not reserved: attach the new object before
        allocating the next one.
    """
    new_id = generator()
    while new_id in objects:
        new_id = generator()
    return new_id


class ObjectStore:
    """All objects of a project file, keyed by identifier."""

    def __init__(self, objects: Iterable[XcodeObject] = ()):
        self._objects: Dict[XcodeID, XcodeObject] = {}
        for obj in objects:
            self.attach(obj)

    def __contains__(self, object_id: object) -> bool:
        return object_id in self._objects

    def __getitem__(self, object_id: str) -> XcodeObject:
        return self._objects[XcodeID(object_id)]

    def __iter__(self) -> Iterator[XcodeObject]:
        return iter(list(self._objects.values()))

    def __len__(self) -> int:
        return len(self._objects)

    def get(self, object_id: str) -> Optional[XcodeObject]:
        return self._objects.get(XcodeID(object_id))

    def ids(self) -> List[XcodeID]:
        return list(self._objects.keys())

    def of_type(self, object_type: Type[ObjectT]) -> Iterator[ObjectT]:
        for obj in self:
            if isinstance(obj, object_type):
                yield obj

    def attach(self, obj: XcodeObject) -> None:
        if obj.id in self._objects:
            raise ValueError(f"object {obj.id} is already attached")
        obj.objects = self
        self._objects[obj.id] = obj

    def detach(self, obj: XcodeObject) -> None:
        if self._objects.get(obj.id) is not obj:
            raise KeyError(f"object {obj.id} is not attached")
        del self._objects[obj.id]
        obj.objects = None

    def allocate_id(self, generator: Callable[[], XcodeID] = generate_id) -> XcodeID:
        return allocate_id(self, generator)
