from embedderer.xcode.model import PBXBuildFile
from embedderer.xcode.validator import (
    dangling_references,
    new_dangling,
    validate_references,
)

from conftest import EMBED_PHASE_ID, SCRIPT_PHASE_ID, TARGET_ID


def test_sample_project_is_valid(sample_project):
    assert validate_references(sample_project) == []


def test_dangling_references_are_reported(sample_project):
    objects = sample_project.objects
    objects[TARGET_ID].fields["buildPhases"].append("F" * 24)
    build_file = PBXBuildFile.create("B" * 24, fileRef="E" * 24)
    build_file.attach(objects)

    errors = validate_references(sample_project)
    assert f"Invalid reference in PBXNativeTarget {TARGET_ID}.buildPhases[4]: {'F' * 24}" in errors
    assert f"Invalid reference in PBXBuildFile {'B' * 24}.fileRef: {'E' * 24}" in errors
    assert len(errors) == 2


def test_detaching_a_referenced_object_is_reported(sample_project):
    sample_project.objects[EMBED_PHASE_ID].detach()
    errors = validate_references(sample_project)
    assert errors == [
        f"Invalid reference in PBXNativeTarget {TARGET_ID}.buildPhases[3]: {EMBED_PHASE_ID}"
    ]


def test_removing_an_earlier_phase_does_not_report_existing_dangling(sample_project):
    target = sample_project.objects[TARGET_ID]
    target.fields["buildPhases"].append("F" * 24)
    before = dangling_references(sample_project)

    target.remove("buildPhases", sample_project.objects[SCRIPT_PHASE_ID])

    assert new_dangling(before, dangling_references(sample_project)) == []


def test_new_dangling_reports_introduced_references(sample_project):
    target = sample_project.objects[TARGET_ID]
    target.fields["buildPhases"].append("F" * 24)
    before = dangling_references(sample_project)

    target.fields["buildPhases"].append("F" * 24)
    sample_project.objects[EMBED_PHASE_ID].detach()

    assert new_dangling(before, dangling_references(sample_project)) == [
        f"Invalid reference in {TARGET_ID}.buildPhases: {EMBED_PHASE_ID}",
        f"Invalid reference in {TARGET_ID}.buildPhases: {'F' * 24}",
    ]
