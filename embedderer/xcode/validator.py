from collections import Counter
from typing import Any, Iterator, List, Optional, Tuple

from embedderer.xcode.model import REFERENCE_KEYS, XcodeProject

# (owner id, key, list index or None, dangling value)
DanglingReference = Tuple[str, str, Optional[int], Any]


def generate_dangling(project: XcodeProject) -> Iterator[DanglingReference]:
    objects = project.objects
    for obj in objects:
        for key in sorted(REFERENCE_KEYS & obj.fields.keys()):
            value = obj.fields[key]
            if isinstance(value, str):
                if value not in objects:
                    yield obj.id, key, None, value
            elif isinstance(value, list):
                for index, item in enumerate(value):
                    if not isinstance(item, str) or item not in objects:
                        yield obj.id, key, index, item


def validate_references(project: XcodeProject) -> List[str]:
    errors = []
    objects = project.objects

    if project.root_id not in objects:
        errors.append(f"Invalid reference in rootObject: {project.root_id}")

    for obj in objects:
        for key in sorted(REFERENCE_KEYS & obj.fields.keys()):
            value = obj.fields[key]
            if not isinstance(value, (str, list)):
                errors.append(
                    f"Unknown type in {obj.isa} {obj.id}.{key}: {type(value).__name__}"
                )

    for owner_id, key, index, value in generate_dangling(project):
        context = f"{objects[owner_id].isa} {owner_id}.{key}"
        if index is not None:
            context += f"[{index}]"
        errors.append(f"Invalid reference in {context}: {value}")

    return errors


def dangling_references(project: XcodeProject) -> Counter:
    # List positions are left out: removing an earlier entry shifts them
    return Counter(
        (owner_id, key, str(value)) for owner_id, key, _, value in generate_dangling(project)
    )


def new_dangling(before: Counter, after: Counter) -> List[str]:
    added = after - before
    return sorted(
        f"Invalid reference in {owner_id}.{key}: {value}"
        for (owner_id, key, value), count in added.items()
        for _ in range(count)
    )
