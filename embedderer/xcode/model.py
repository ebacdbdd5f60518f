# Xcode project file model.
#
# This module defines the object model for a decoded Xcode project file (.pbxproj).
# Every object keeps the raw field dictionary it was decoded from, so keys and object
# types this tool does not know about are written back untouched. The typed classes
# below only add accessors for the fields the cleanup passes read and modify.
#
# Relations between objects are stored the way the file stores them: as identifier
# strings, resolved through the ObjectStore the object is attached to.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Set, Type, TYPE_CHECKING

import uuid

if TYPE_CHECKING:
    from embedderer.xcode.store import ObjectStore


ID_LENGTH = 24


# Type definition for Xcode object identifiers
class XcodeID(str):
    pass


def generate_id() -> XcodeID:
    return XcodeID(uuid.uuid4().hex.upper()[:ID_LENGTH])


# Source Tree values used in PBXFileReference and PBXGroup
class SourceTree(Enum):
    ABSOLUTE = "<absolute>"
    GROUP = "<group>"
    SOURCE_ROOT = "SOURCE_ROOT"
    BUILT_PRODUCTS_DIR = "BUILT_PRODUCTS_DIR"
    SDKROOT = "SDKROOT"
    DEVELOPER_DIR = "DEVELOPER_DIR"


# File types the cleanup passes look at
class FileType(Enum):
    FRAMEWORK = "wrapper.framework"


# Attribute values of a PBXBuildFile's settings
class BuildFileAttribute(Enum):
    CODE_SIGN_ON_COPY = "CodeSignOnCopy"
    REMOVE_HEADERS_ON_COPY = "RemoveHeadersOnCopy"


# Keys whose values are identifiers (or lists of identifiers) of other objects
REFERENCE_KEYS = frozenset(
    {
        "baseConfigurationReference",
        "buildConfigurationList",
        "buildConfigurations",
        "buildPhases",
        "buildRules",
        "children",
        "currentVersion",
        "dependencies",
        "fileRef",
        "files",
        "mainGroup",
        "package",
        "packageProductDependencies",
        "packageReferences",
        "productRef",
        "productRefGroup",
        "productReference",
        "remoteRef",
        "target",
        "targetProxy",
        "targets",
    }
)


# Base class for all Xcode objects
@dataclass(eq=False)
class XcodeObject:
    ISA: ClassVar[str] = ""

    id: XcodeID
    fields: Dict[str, Any]
    objects: Optional["ObjectStore"] = field(default=None, repr=False)

    @classmethod
    def create(cls, id: XcodeID, **fields: Any) -> "XcodeObject":
        return cls(id=XcodeID(id), fields={"isa": cls.ISA, **fields})

    @property
    def isa(self) -> str:
        return self.fields.get("isa", self.ISA)

    @property
    def description(self) -> str:
        return f"<{self.isa} {self.id}>"

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def set(self, key: str, value: Any) -> None:
        if value is None:
            self.fields.pop(key, None)
        else:
            self.fields[key] = value

    def resolve(self, key: str) -> Optional["XcodeObject"]:
        ref = self.fields.get(key)
        if self.objects is None or not isinstance(ref, str):
            return None
        return self.objects.get(ref)

    def resolve_list(self, key: str) -> List["XcodeObject"]:
        refs = self.fields.get(key) or []
        if self.objects is None or not isinstance(refs, list):
            return []
        resolved = (self.objects.get(ref) for ref in refs if isinstance(ref, str))
        return [obj for obj in resolved if obj is not None]

    def add(self, key: str, obj: "XcodeObject") -> None:
        self.fields.setdefault(key, []).append(obj.id)

    def remove(self, key: str, obj: "XcodeObject") -> None:
        refs = self.fields.get(key) or []
        self.fields[key] = [ref for ref in refs if ref != obj.id]

    def attach(self, objects: "ObjectStore") -> None:
        objects.attach(self)

    def detach(self) -> None:
        if self.objects is not None:
            self.objects.detach(self)


# PBX* object types
@dataclass(eq=False)
class PBXFileReference(XcodeObject):
    ISA: ClassVar[str] = "PBXFileReference"

    @property
    def name(self) -> Optional[str]:
        return self.get("name")

    @property
    def path(self) -> Optional[str]:
        return self.get("path")

    @property
    def source_tree(self) -> Optional[SourceTree]:
        value = self.get("sourceTree", SourceTree.GROUP.value)
        try:
            return SourceTree(value)
        except ValueError:
            return None

    @property
    def file_type(self) -> Optional[str]:
        return self.get("explicitFileType") or self.get("lastKnownFileType")

    @property
    def display_name(self) -> str:
        return self.name or self.path or self.description


@dataclass(eq=False)
class PBXBuildFile(XcodeObject):
    ISA: ClassVar[str] = "PBXBuildFile"

    @property
    def file_ref(self) -> Optional[XcodeObject]:
        return self.resolve("fileRef")

    @property
    def settings(self) -> Optional[Dict[str, Any]]:
        return self.get("settings")


@dataclass(eq=False)
class PBXBuildPhase(XcodeObject):
    # Name Xcode shows for a phase without an explicit name
    DEFAULT_NAME: ClassVar[str] = ""

    @property
    def name(self) -> Optional[str]:
        return self.get("name")

    @property
    def display_name(self) -> str:
        return self.name or self.DEFAULT_NAME

    @property
    def files(self) -> List[XcodeObject]:
        return self.resolve_list("files")


@dataclass(eq=False)
class PBXSourcesBuildPhase(PBXBuildPhase):
    ISA: ClassVar[str] = "PBXSourcesBuildPhase"
    DEFAULT_NAME: ClassVar[str] = "Sources"


@dataclass(eq=False)
class PBXHeadersBuildPhase(PBXBuildPhase):
    ISA: ClassVar[str] = "PBXHeadersBuildPhase"
    DEFAULT_NAME: ClassVar[str] = "Headers"


@dataclass(eq=False)
class PBXResourcesBuildPhase(PBXBuildPhase):
    ISA: ClassVar[str] = "PBXResourcesBuildPhase"
    DEFAULT_NAME: ClassVar[str] = "Resources"


@dataclass(eq=False)
class PBXRezBuildPhase(PBXBuildPhase):
    ISA: ClassVar[str] = "PBXRezBuildPhase"
    DEFAULT_NAME: ClassVar[str] = "Rez"


@dataclass(eq=False)
class PBXFrameworksBuildPhase(PBXBuildPhase):
    ISA: ClassVar[str] = "PBXFrameworksBuildPhase"
    DEFAULT_NAME: ClassVar[str] = "Frameworks"


@dataclass(eq=False)
class PBXCopyFilesBuildPhase(PBXBuildPhase):
    ISA: ClassVar[str] = "PBXCopyFilesBuildPhase"
    DEFAULT_NAME: ClassVar[str] = "CopyFiles"


@dataclass(eq=False)
class PBXShellScriptBuildPhase(PBXBuildPhase):
    ISA: ClassVar[str] = "PBXShellScriptBuildPhase"
    DEFAULT_NAME: ClassVar[str] = "ShellScript"

    @property
    def input_paths(self) -> List[str]:
        return [path for path in self.get("inputPaths") or [] if isinstance(path, str)]


@dataclass(eq=False)
class XCBuildConfiguration(XcodeObject):
    ISA: ClassVar[str] = "XCBuildConfiguration"

    @property
    def name(self) -> Optional[str]:
        return self.get("name")

    @property
    def build_settings(self) -> Optional[Dict[str, Any]]:
        return self.get("buildSettings")


@dataclass(eq=False)
class XCConfigurationList(XcodeObject):
    ISA: ClassVar[str] = "XCConfigurationList"

    @property
    def build_configurations(self) -> List[XCBuildConfiguration]:
        return [
            obj
            for obj in self.resolve_list("buildConfigurations")
            if isinstance(obj, XCBuildConfiguration)
        ]


@dataclass(eq=False)
class PBXTarget(XcodeObject):
    @property
    def name(self) -> Optional[str]:
        return self.get("name")

    @property
    def build_phases(self) -> List[XcodeObject]:
        return self.resolve_list("buildPhases")

    @property
    def build_configuration_list(self) -> Optional[XCConfigurationList]:
        config_list = self.resolve("buildConfigurationList")
        return config_list if isinstance(config_list, XCConfigurationList) else None


@dataclass(eq=False)
class PBXNativeTarget(PBXTarget):
    ISA: ClassVar[str] = "PBXNativeTarget"


@dataclass(eq=False)
class PBXAggregateTarget(PBXTarget):
    ISA: ClassVar[str] = "PBXAggregateTarget"


@dataclass(eq=False)
class PBXLegacyTarget(PBXTarget):
    ISA: ClassVar[str] = "PBXLegacyTarget"


@dataclass(eq=False)
class PBXGroup(XcodeObject):
    ISA: ClassVar[str] = "PBXGroup"

    @property
    def name(self) -> Optional[str]:
        return self.get("name")

    @property
    def path(self) -> Optional[str]:
        return self.get("path")

    @property
    def children(self) -> List[XcodeObject]:
        return self.resolve_list("children")

    @property
    def full_file_refs(self) -> List[PBXFileReference]:
        return list(_walk_file_refs(self, set()))


@dataclass(eq=False)
class PBXVariantGroup(PBXGroup):
    ISA: ClassVar[str] = "PBXVariantGroup"


@dataclass(eq=False)
class XCVersionGroup(PBXGroup):
    ISA: ClassVar[str] = "XCVersionGroup"


def _walk_file_refs(group: PBXGroup, visited: Set[XcodeID]) -> Iterator[PBXFileReference]:
    # Groups may be shared or (in broken files) cyclic
    if group.id in visited:
        return
    visited.add(group.id)
    for child in group.children:
        if isinstance(child, PBXFileReference):
            if child.id not in visited:
                visited.add(child.id)
                yield child
        elif isinstance(child, PBXGroup):
            yield from _walk_file_refs(child, visited)


@dataclass(eq=False)
class PBXProject(XcodeObject):
    ISA: ClassVar[str] = "PBXProject"

    @property
    def targets(self) -> List[PBXTarget]:
        return [obj for obj in self.resolve_list("targets") if isinstance(obj, PBXTarget)]

    @property
    def main_group(self) -> Optional[PBXGroup]:
        group = self.resolve("mainGroup")
        return group if isinstance(group, PBXGroup) else None


OBJECT_TYPES: Dict[str, Type[XcodeObject]] = {
    cls.ISA: cls
    for cls in (
        PBXFileReference,
        PBXBuildFile,
        PBXSourcesBuildPhase,
        PBXHeadersBuildPhase,
        PBXResourcesBuildPhase,
        PBXRezBuildPhase,
        PBXFrameworksBuildPhase,
        PBXCopyFilesBuildPhase,
        PBXShellScriptBuildPhase,
        XCBuildConfiguration,
        XCConfigurationList,
        PBXNativeTarget,
        PBXAggregateTarget,
        PBXLegacyTarget,
        PBXGroup,
        PBXVariantGroup,
        XCVersionGroup,
        PBXProject,
    )
}


def make_object(id: str, fields: Dict[str, Any]) -> XcodeObject:
    object_type = OBJECT_TYPES.get(fields.get("isa"), XcodeObject)
    return object_type(id=XcodeID(id), fields=fields)


# Complete project representation
@dataclass
class XcodeProject:
    objects: "ObjectStore"
    root_id: XcodeID
    # Top level entries other than objects and rootObject (archiveVersion, classes, ...)
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def project(self) -> PBXProject:
        root = self.objects.get(self.root_id)
        if not isinstance(root, PBXProject):
            raise ValueError(f"root object {self.root_id} is not a PBXProject")
        return root
