"""
Xcode project file formatter.

This module converts an XcodeProject back into the text Xcode itself writes for a
project.pbxproj file: objects grouped in per-isa sections, keys sorted with isa
first, PBXBuildFile and PBXFileReference entries on a single line and object
identifiers annotated with the comments Xcode shows next to them.
"""

import enum
import re
from typing import Dict, List, Optional, Union

from embedderer.errors import EncodeError
from embedderer.xcode.model import (
    REFERENCE_KEYS,
    PBXBuildFile,
    PBXBuildPhase,
    PBXFileReference,
    PBXGroup,
    PBXProject,
    PBXTarget,
    XCBuildConfiguration,
    XcodeID,
    XcodeObject,
    XcodeProject,
)

FormattableValue = Union[None, str, int, float, bool, enum.Enum, list, dict]
Comments = Dict[XcodeID, str]

UTF8_MARKER = "// !$*UTF8*$!"

# Objects Xcode writes on a single line
INLINE_ISAS = frozenset({PBXBuildFile.ISA, PBXFileReference.ISA})

# Keys holding identifiers that are annotated but not part of REFERENCE_KEYS
COMMENTED_KEYS = REFERENCE_KEYS | {"containerPortal", "rootObject"}

UNQUOTED_RE = re.compile(r"^[A-Za-z0-9_./]+$")


def format_xcode_project(project: XcodeProject, name: Optional[str] = None) -> str:
    """
    Convert an XcodeProject object to its string representation.

    Args:
        project: The XcodeProject object to format.
        name: Name of the .xcodeproj bundle (without extension), used in the
            comment of the project's build configuration list.

    Returns:
        A string containing the formatted Xcode project file content.

    Raises:
        EncodeError: If a field holds a value the format cannot represent.
    """
    comments = collect_comments(project, name or "project")

    entries: Dict[str, FormattableValue] = dict(project.properties)
    entries["rootObject"] = project.root_id
    result = UTF8_MARKER + "\n{\n"
    for key in sorted(list(entries.keys()) + ["objects"]):
        if key == "objects":
            result += "\tobjects = {\n" + format_objects(project, comments) + "\t};\n"
            continue
        value = entries[key]
        if value is None:
            continue
        result += f"\t{format_key(key)} = {format_value(value, 1, comments, key)};\n"
    result += "}\n"
    return result


def format_objects(project: XcodeProject, comments: Comments) -> str:
    sections: Dict[str, List[XcodeObject]] = {}
    for obj in project.objects:
        sections.setdefault(obj.isa, []).append(obj)

    result = ""
    for isa in sorted(sections.keys()):
        result += f"\n/* Begin {isa} section */\n"
        for obj in sorted(sections[isa], key=lambda o: o.id):
            result += "\t\t" + format_reference(obj.id, comments) + " = "
            if isa in INLINE_ISAS:
                result += format_inline(obj.fields, comments) + ";\n"
            else:
                result += format_dict(obj.fields, 2, comments) + ";\n"
        result += f"/* End {isa} section */\n"
    return result


def collect_comments(project: XcodeProject, name: str) -> Comments:
    """
    Compute the comment Xcode writes next to each object identifier.

    Args:
        project: The project to annotate.
        name: Name of the .xcodeproj bundle.

    Returns:
        A dictionary of comments keyed by object ID.
    """
    objects = project.objects
    comments: Comments = {}
    # Build files are named after the phase that owns them
    owning_phase: Dict[str, PBXBuildPhase] = {}
    for phase in objects.of_type(PBXBuildPhase):
        for ref in phase.get("files") or []:
            owning_phase[ref] = phase

    for obj in objects:
        if isinstance(obj, PBXProject):
            comments[obj.id] = "Project object"
        elif isinstance(obj, PBXBuildPhase):
            comments[obj.id] = obj.display_name
        elif isinstance(obj, (PBXFileReference, PBXGroup)):
            label = obj.name or obj.path
            if label:
                comments[obj.id] = label
        elif isinstance(obj, (PBXTarget, XCBuildConfiguration)):
            if obj.name:
                comments[obj.id] = obj.name
        elif obj.isa == "PBXReferenceProxy":
            label = obj.get("name") or obj.get("path")
            if label:
                comments[obj.id] = label
        elif obj.isa == "XCRemoteSwiftPackageReference":
            comments[obj.id] = f'{obj.isa} "{repository_name(obj.get("repositoryURL"))}"'
        elif obj.isa == "XCLocalSwiftPackageReference":
            comments[obj.id] = f'{obj.isa} "{obj.get("relativePath", "")}"'
        elif not isinstance(obj, PBXBuildFile):
            comments[obj.id] = obj.get("productName") or obj.isa

    for obj in objects:
        if isinstance(obj, PBXBuildFile):
            target_ref = obj.get("fileRef") or obj.get("productRef")
            label = comments.get(target_ref, "(null)")
            phase = owning_phase.get(obj.id)
            comments[obj.id] = f"{label} in {phase.display_name}" if phase else label
        elif isinstance(obj, (PBXTarget, PBXProject)):
            config_list = obj.get("buildConfigurationList")
            if isinstance(config_list, str):
                owner = name if isinstance(obj, PBXProject) else obj.get("name", "")
                comments[XcodeID(config_list)] = (
                    f'Build configuration list for {obj.isa} "{owner}"'
                )
    return comments


def repository_name(url: Optional[str]) -> str:
    # Last path component without the .git suffix
    if not isinstance(url, str):
        return ""
    name = url.rstrip("/").rsplit("/", 1)[-1]
    return name[: -len(".git")] if name.endswith(".git") else name


def format_reference(object_id: str, comments: Comments) -> str:
    comment = comments.get(XcodeID(object_id))
    if comment:
        return f"{object_id} /* {comment} */"
    return object_id


def format_value(
    value: FormattableValue, indent_level: int, comments: Comments, key: str = ""
) -> str:
    """
    Format a value based on its type.

    Args:
        value: The value to format.
        indent_level: The current indentation level.
        comments: Object comments, used for identifier values.
        key: The dictionary key the value is stored under.

    Returns:
        A string representing the formatted value.
    """
    if isinstance(value, str) and key in COMMENTED_KEYS and value in comments:
        return format_reference(value, comments)
    if isinstance(value, list):
        return format_list(value, indent_level, comments, key)
    if isinstance(value, dict):
        return format_dict(value, indent_level, comments)
    return format_scalar(value)


def format_scalar(value: FormattableValue) -> str:
    # Xcode represents booleans as 0/1
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, enum.Enum):
        return format_scalar(value.value)
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return quote(value)
    raise EncodeError(f"Unsupported type: {type(value).__name__} for value: {value}")


def format_key(key: str) -> str:
    return quote(key)


def quote(value: str) -> str:
    if UNQUOTED_RE.match(value):
        return value
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def format_dict(
    value_dict: Dict[str, FormattableValue], indent_level: int, comments: Comments
) -> str:
    indent = "\t" * indent_level
    inner_indent = "\t" * (indent_level + 1)

    # Empty dictionaries should have braces on separate lines for Xcode compatibility
    if not value_dict:
        return "{\n" + indent + "}"

    result = "{\n"
    for key, value in ordered_items(value_dict):
        formatted_value = format_value(value, indent_level + 1, comments, key)
        result += f"{inner_indent}{format_key(key)} = {formatted_value};\n"
    result += f"{indent}}}"
    return result


def format_list(
    value_list: List[FormattableValue], indent_level: int, comments: Comments, key: str
) -> str:
    indent = "\t" * indent_level
    inner_indent = "\t" * (indent_level + 1)

    result = "(\n"
    for item in value_list:
        result += f"{inner_indent}{format_value(item, indent_level + 1, comments, key)},\n"
    result += f"{indent})"
    return result


def format_inline(value: FormattableValue, comments: Comments, key: str = "") -> str:
    if isinstance(value, dict):
        items = "".join(
            f"{format_key(k)} = {format_inline(v, comments, k)}; "
            for k, v in ordered_items(value)
        )
        return "{" + items + "}"
    if isinstance(value, list):
        return "(" + "".join(f"{format_inline(item, comments, key)}, " for item in value) + ")"
    return format_value(value, 0, comments, key)


def ordered_items(value_dict: Dict[str, FormattableValue]):
    # isa leads, None values are dropped, everything else is sorted
    keys = sorted(value_dict.keys(), key=lambda k: (k != "isa", k))
    return [(key, value_dict[key]) for key in keys if value_dict[key] is not None]
